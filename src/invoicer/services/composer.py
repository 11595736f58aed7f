from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from invoicer.models.brand import DEFAULT_BRAND, Brand
from invoicer.models.invoice import InvoiceRecord
from invoicer.utils.formatters import format_amount

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["money"] = format_amount


def compose(record: InvoiceRecord, brand: Brand = DEFAULT_BRAND) -> str:
    """Build the full HTML document for *record*.

    Every field taken from the record is HTML-escaped. Numbers are printed as
    supplied (no totals are recomputed); currency values get two decimals.
    The document is laid out for a single A4 page width and relies on the PDF
    engine's own page breaking when the items overflow.
    """
    template = _env.get_template("invoice.html")
    return template.render(invoice=record, brand=brand)


def render_letterhead(brand: Brand = DEFAULT_BRAND) -> str:
    """Logo and company block shown at the top of every invoice."""
    return _env.get_template("letterhead.html").render(brand=brand)


def render_footer(brand: Brand = DEFAULT_BRAND) -> str:
    return _env.get_template("footer.html").render(brand=brand)


def load_stylesheet() -> str:
    return (TEMPLATES_DIR / "invoice.css").read_text(encoding="utf-8")
