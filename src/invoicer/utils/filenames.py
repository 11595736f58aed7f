from __future__ import annotations

import re
from pathlib import Path

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")
_MAX_STEM = 100


def safe_filename_part(value: str) -> str:
    """Make an arbitrary string usable inside a file name.

    Runs of characters outside ``[A-Za-z0-9._-]`` collapse to a single ``_``;
    leading dots are dropped so the result can never be hidden or relative.
    """
    cleaned = _UNSAFE.sub("_", value.strip()).lstrip(".")
    return cleaned[:_MAX_STEM]


def suggested_filename(invoice_number: str) -> str:
    """Default PDF name, e.g. ``Invoice-INV-001.pdf``."""
    part = safe_filename_part(invoice_number)
    if not part:
        return "Invoice.pdf"
    return f"Invoice-{part}.pdf"


def ensure_pdf_suffix(path: Path) -> Path:
    """Append ``.pdf`` when the chosen path has no extension."""
    if path.suffix:
        return path
    return path.with_name(f"{path.name}.pdf")
