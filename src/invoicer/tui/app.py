from __future__ import annotations

from pathlib import Path

from textual.app import App
from textual.binding import Binding

from invoicer.models.brand import Brand
from invoicer.services.export import EngineFactory
from invoicer.services.pdf_engine import launch_engine


class InvoicerApp(App):
    """Invoice preview and PDF export TUI."""

    CSS_PATH = "app.tcss"
    TITLE = "Invoicer"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        invoice_path: Path | None = None,
        brand: Brand | None = None,
        engine_factory: EngineFactory = launch_engine,
    ):
        super().__init__()
        self.invoice_path = invoice_path
        self.engine_factory = engine_factory
        if brand is None:
            from invoicer.config import load_brand

            brand = Brand.from_dict(load_brand())
        self.brand = brand

    def on_mount(self) -> None:
        from invoicer.tui.screens.invoice import InvoiceScreen

        self.push_screen(InvoiceScreen(self.invoice_path))
