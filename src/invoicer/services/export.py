from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from invoicer.models.brand import DEFAULT_BRAND, Brand
from invoicer.models.invoice import InvoiceRecord
from invoicer.services.composer import compose
from invoicer.services.destination import DestinationPicker, suggested_path, write_document
from invoicer.services.exceptions import ErrorKind, ExportError
from invoicer.services.pdf_engine import (
    DEFAULT_PAGE_OPTIONS,
    PageOptions,
    PdfEngine,
    launch_engine,
)

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Save cancelled by user"

EngineFactory = Callable[[], AbstractAsyncContextManager[PdfEngine]]


class Outcome(str, Enum):
    SAVED = "saved"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class ExportResult:
    outcome: Outcome
    file_path: str | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def success(self) -> bool:
        return self.outcome is Outcome.SAVED

    @classmethod
    def saved(cls, path: Path) -> ExportResult:
        return cls(Outcome.SAVED, file_path=str(path))

    @classmethod
    def cancelled(cls) -> ExportResult:
        return cls(Outcome.CANCELLED, error=CANCELLED_MESSAGE)

    @classmethod
    def failed(cls, message: str, kind: ErrorKind) -> ExportResult:
        return cls(Outcome.FAILED, error=message, error_kind=kind)

    def to_response(self) -> dict:
        """Response mapping of the generate-pdf channel."""
        if self.success:
            return {"success": True, "filePath": self.file_path}
        return {"success": False, "error": self.error}


async def render_pdf(
    record: InvoiceRecord,
    *,
    brand: Brand = DEFAULT_BRAND,
    engine_factory: EngineFactory = launch_engine,
    options: PageOptions = DEFAULT_PAGE_OPTIONS,
) -> bytes:
    """Compose *record* and print it with a freshly acquired engine."""
    async with engine_factory() as engine:
        markup = compose(record, brand)
        return await engine.render(markup, options)


async def export_invoice(
    record: InvoiceRecord,
    destination: DestinationPicker,
    *,
    brand: Brand = DEFAULT_BRAND,
    engine_factory: EngineFactory = launch_engine,
    options: PageOptions = DEFAULT_PAGE_OPTIONS,
) -> ExportResult:
    """Render *record* to PDF and save it where *destination* says.

    The engine is released before the user is asked for a path. Cancelling
    the destination is not an error and writes nothing. Every failure is
    logged and returned as a FAILED result; nothing is retried.
    """
    try:
        pdf = await render_pdf(
            record, brand=brand, engine_factory=engine_factory, options=options
        )

        path = await destination.choose(suggested_path(record.invoice_number))
        if path is None:
            logger.info("Save of invoice %s cancelled", record.invoice_number)
            return ExportResult.cancelled()

        final_path = await write_document(path, pdf)
    except ExportError as e:
        logger.exception("PDF generation error")
        return ExportResult.failed(str(e), e.kind)
    except Exception as e:
        logger.exception("PDF generation error")
        return ExportResult.failed(str(e) or type(e).__name__, ErrorKind.UNEXPECTED)
    return ExportResult.saved(final_path)


async def generate_invoice_pdf(
    payload: dict,
    destination: DestinationPicker,
    *,
    brand: Brand = DEFAULT_BRAND,
    engine_factory: EngineFactory = launch_engine,
) -> dict:
    """Boundary operation: wire payload in, response mapping out. Never raises."""
    try:
        record = InvoiceRecord.from_dict(payload)
    except (ValueError, TypeError, AttributeError) as e:
        logger.warning("Rejected invoice payload: %s", e)
        return ExportResult.failed(
            f"Invalid invoice data: {e}", ErrorKind.INVALID_INPUT
        ).to_response()
    result = await export_invoice(
        record, destination, brand=brand, engine_factory=engine_factory
    )
    return result.to_response()
