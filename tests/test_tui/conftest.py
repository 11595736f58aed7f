from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from invoicer.models.brand import DEFAULT_BRAND
from invoicer.tui.app import InvoicerApp
from tests.conftest import FakeEngineFactory


@pytest.fixture
def invoice_file(tmp_path, invoice_dict) -> Path:
    path = tmp_path / "invoice.yaml"
    path.write_text(yaml.dump(invoice_dict), encoding="utf-8")
    return path


@pytest.fixture
def make_app(engine_factory):
    """Build an app wired to the fake PDF engine instead of Chromium."""

    def _make(invoice_path: Path | None = None, factory: FakeEngineFactory | None = None):
        return InvoicerApp(
            invoice_path,
            brand=DEFAULT_BRAND,
            engine_factory=factory or engine_factory,
        )

    return _make


async def wait_for_screen(app, pilot, screen_type, attempts: int = 50):
    """Pause until *screen_type* is on top; workers push modals asynchronously."""
    for _ in range(attempts):
        if isinstance(app.screen, screen_type):
            return app.screen
        await pilot.pause()
    raise AssertionError(f"{screen_type.__name__} never appeared (top: {app.screen!r})")
