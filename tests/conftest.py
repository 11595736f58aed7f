from __future__ import annotations

from contextlib import asynccontextmanager

import lxml.html
import pytest

from invoicer.models.invoice import InvoiceRecord


def parse_html(markup: str) -> lxml.html.HtmlElement:
    """Parse composed markup for structural assertions."""
    return lxml.html.document_fromstring(markup)


def outer_rows(doc: lxml.html.HtmlElement) -> list:
    return doc.xpath("//table[contains(@class, 'items-table')]/tbody/tr")


def inner_rows(row) -> list:
    return row.xpath(".//table[contains(@class, 'size-table')]/tbody/tr")


def cell_texts(row) -> list[str]:
    return [td.text_content().strip() for td in row.xpath("./td")]


# --- Fake PDF engine ---


class FakeEngine:
    """Stands in for Chromium: records calls and returns canned bytes."""

    def __init__(self, pdf: bytes = b"%PDF-1.4 fake", error: Exception | None = None) -> None:
        self.pdf = pdf
        self.error = error
        self.calls: list[tuple] = []

    async def render(self, markup, options):
        self.calls.append((markup, options))
        if self.error is not None:
            raise self.error
        return self.pdf


class FakeEngineFactory:
    def __init__(
        self, engine: FakeEngine | None = None, launch_error: Exception | None = None
    ) -> None:
        self.engine = engine or FakeEngine()
        self.launch_error = launch_error
        self.opened = 0
        self.closed = 0

    @asynccontextmanager
    async def __call__(self):
        if self.launch_error is not None:
            raise self.launch_error
        self.opened += 1
        try:
            yield self.engine
        finally:
            self.closed += 1


@pytest.fixture
def engine_factory() -> FakeEngineFactory:
    return FakeEngineFactory()


# --- Isolation from the user's real directories ---


@pytest.fixture(autouse=True)
def _isolated_dirs(monkeypatch, tmp_path):
    config_dir = tmp_path / "config"
    downloads_dir = tmp_path / "downloads"
    monkeypatch.setenv("INVOICER_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("INVOICER_DOWNLOADS_DIR", str(downloads_dir))
    monkeypatch.delenv("INVOICER_RENDER_TIMEOUT", raising=False)
    return {"config": config_dir, "downloads": downloads_dir}


@pytest.fixture
def downloads_dir(_isolated_dirs):
    return _isolated_dirs["downloads"]


# --- Invoice fixtures ---


@pytest.fixture
def invoice_dict() -> dict:
    return {
        "invoiceNumber": "INV-001",
        "invoiceDate": "2025-06-01",
        "shopName": "Galle Road Boutique",
        "items": [
            {
                "dressCode": "D1",
                "dressName": "Linen Wrap Dress",
                "photo": "https://example.com/d1.jpg",
                "sizes": [{"size": "M", "quantity": 2, "price": 500, "total": 1000}],
                "totalQuantity": 2,
                "totalAmount": 1000,
            }
        ],
        "totals": {"totalItems": 1, "totalQuantity": 2, "grandTotal": 1000},
    }


@pytest.fixture
def record(invoice_dict: dict) -> InvoiceRecord:
    return InvoiceRecord.from_dict(invoice_dict)


@pytest.fixture
def multi_item_dict() -> dict:
    return {
        "invoiceNumber": "INV-042",
        "invoiceDate": "2025-06-02",
        "shopName": "Matara Fashions",
        "items": [
            {
                "dressCode": "D1",
                "dressName": "Linen Wrap Dress",
                "photo": "",
                "sizes": [
                    {"size": "S", "quantity": 1, "price": 450, "total": 450},
                    {"size": "M", "quantity": 2, "price": 500, "total": 1000},
                    {"size": "L", "quantity": 1, "price": 550, "total": 550},
                ],
                "totalQuantity": 4,
                "totalAmount": 2000,
            },
            {
                "dressCode": "D2",
                "dressName": "Batik Maxi",
                "photo": "data:image/png;base64,iVBORw0KGgo=",
                "sizes": [],
                "totalQuantity": 0,
                "totalAmount": 0,
            },
            {
                "dressCode": "D3",
                "dressName": "Cotton Shift",
                "photo": "https://example.com/d3.jpg",
                "sizes": [{"size": "XL", "quantity": 3, "price": 99.5, "total": 298.5}],
                "totalQuantity": 3,
                "totalAmount": 298.5,
            },
        ],
        "totals": {"totalItems": 3, "totalQuantity": 7, "grandTotal": 2298.5},
    }
