from __future__ import annotations

from pathlib import Path

import yaml
from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Input, Label, Static

from invoicer.models.invoice import InvoiceRecord
from invoicer.services.export import ExportResult, Outcome
from invoicer.utils.formatters import format_amount, format_money


def _sizes_summary(record_item) -> str:
    return ", ".join(f"{s.size}×{s.quantity}" for s in record_item.sizes) or "-"


class InvoiceScreen(Screen):
    """Preview a loaded invoice file and export it to PDF."""

    BINDINGS = [
        Binding("g", "generate", "Generate PDF"),
        Binding("o", "focus_file", "Open file"),
        Binding("q", "app.quit", "Quit"),
    ]

    def __init__(self, invoice_path: Path | None = None) -> None:
        super().__init__()
        self._initial_path = invoice_path
        self._record: InvoiceRecord | None = None

    @property
    def record(self) -> InvoiceRecord | None:
        return self._record

    def compose(self) -> ComposeResult:
        with Horizontal(id="top-bar"):
            yield Static("Invoicer", id="app-title")

        with Horizontal(id="file-bar"):
            yield Input(
                value=str(self._initial_path) if self._initial_path else "",
                placeholder="invoice.yaml or invoice.json",
                id="file-input",
            )
            yield Button("Open", id="btn-open", variant="primary", tooltip="Load invoice file (o)")

        with Horizontal(id="info-bar"):
            with Vertical(classes="info-card"):
                yield Label("Invoice No", classes="card-title")
                yield Label("-", id="invoice-info", classes="card-value")
            with Vertical(classes="info-card"):
                yield Label("Date", classes="card-title")
                yield Label("-", id="date-info", classes="card-value")
            with Vertical(classes="info-card"):
                yield Label("Shop", classes="card-title")
                yield Label("-", id="shop-info", classes="card-value")

        yield DataTable(id="items-table", cursor_type="row")
        yield Label("", id="totals-info")

        with Horizontal(id="action-bar"):
            yield Button(
                "⤓ Generate PDF",
                id="btn-generate",
                variant="success",
                tooltip="Render the invoice and choose where to save it (g)",
            )
        yield Label("", id="error-label")
        yield Label("", id="status-label")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#items-table", DataTable)
        table.add_columns("Code", "Dress Name", "Sizes", "Total Qty", "Amount")
        if self._initial_path is not None:
            self._load(self._initial_path)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "file-input":
            self._open_from_input()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        match event.button.id:
            case "btn-open":
                self._open_from_input()
            case "btn-generate":
                self.action_generate()

    def _open_from_input(self) -> None:
        raw = self.query_one("#file-input", Input).value.strip()
        if not raw:
            self._show_error("Enter the path of an invoice file")
            return
        self._load(Path(raw).expanduser())

    def _load(self, path: Path) -> None:
        from invoicer.config import load_invoice

        try:
            record = InvoiceRecord.from_dict(load_invoice(path))
        except (OSError, ValueError, yaml.YAMLError) as e:
            self._record = None
            self._show_error(f"Could not open {path.name}: {e}")
            return

        self._record = record
        brand = self.app.brand  # type: ignore[attr-defined]
        self.query_one("#invoice-info", Label).update(record.invoice_number or "-")
        self.query_one("#date-info", Label).update(record.invoice_date or "-")
        self.query_one("#shop-info", Label).update(record.shop_name or "-")

        table = self.query_one("#items-table", DataTable)
        table.clear()
        for item in record.items:
            table.add_row(
                item.dress_code,
                item.dress_name,
                _sizes_summary(item),
                str(item.total_quantity),
                format_amount(item.total_amount),
            )

        totals = record.totals
        self.query_one("#totals-info", Label).update(
            f"Total Items: {totals.total_items}   "
            f"Total Quantity: {totals.total_quantity}   "
            f"Grand Total: {format_money(totals.grand_total, brand.currency)}"
        )
        self.query_one("#error-label", Label).update("")
        self.query_one("#status-label", Label).update(f"Loaded {path.name}")
        table.focus()

    def action_focus_file(self) -> None:
        self.query_one("#file-input", Input).focus()

    def action_generate(self) -> None:
        if self._record is None:
            self._show_error("Open an invoice file first")
            return
        self.query_one("#error-label", Label).update("")
        self.query_one("#status-label", Label).update("Generating PDF…")
        self._run_export(self._record)

    @work(group="export")
    async def _run_export(self, record: InvoiceRecord) -> None:
        from invoicer.services.export import export_invoice
        from invoicer.tui.screens.save_dialog import DialogDestination

        result = await export_invoice(
            record,
            DialogDestination(self.app),
            brand=self.app.brand,  # type: ignore[attr-defined]
            engine_factory=self.app.engine_factory,  # type: ignore[attr-defined]
        )
        self._show_result(result)

    def _show_result(self, result: ExportResult) -> None:
        status = self.query_one("#status-label", Label)
        if result.outcome is Outcome.SAVED:
            status.update(f"PDF saved to: {result.file_path}")
            self.notify(f"PDF saved to: {result.file_path}", timeout=5)
        elif result.outcome is Outcome.CANCELLED:
            status.update(result.error or "")
            self.notify(result.error or "", severity="warning", timeout=3)
        else:
            status.update("")
            self._show_error(f"Error: {result.error}")

    def _show_error(self, msg: str) -> None:
        self.query_one("#error-label", Label).update(msg)
        self.notify(msg, severity="error", timeout=5)
