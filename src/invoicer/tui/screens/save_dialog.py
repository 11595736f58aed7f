from __future__ import annotations

from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from invoicer.tui.screens.replace_file import ReplaceFileScreen
from invoicer.utils.filenames import ensure_pdf_suffix


class SaveDialogScreen(ModalScreen[Path | None]):
    """Choose where to save the generated PDF. Dismisses with None on cancel."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, suggested: Path) -> None:
        super().__init__()
        self._suggested = suggested

    def compose(self) -> ComposeResult:
        with Vertical(id="modal-dialog"):
            with Horizontal(id="modal-title-bar"):
                yield Static("Save invoice PDF", id="header-bar")
                yield Button("✕", id="btn-modal-close")
            yield Label("File path (PDF)", classes="form-label")
            yield Input(value=str(self._suggested), placeholder="Invoice.pdf", id="path-input")
            yield Label("", id="error-label")
            with Horizontal(classes="button-bar"):
                yield Button("✕ Cancel", id="btn-cancel", variant="error")
                yield Button("⤓ Save", id="btn-save", variant="primary")

    def on_mount(self) -> None:
        self.query_one("#path-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._do_save()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        match event.button.id:
            case "btn-save":
                self._do_save()
            case "btn-cancel" | "btn-modal-close":
                self.dismiss(None)

    def _do_save(self) -> None:
        raw = self.query_one("#path-input", Input).value.strip()
        if not raw:
            self.query_one("#error-label", Label).update("Enter a file path")
            return
        path = ensure_pdf_suffix(Path(raw).expanduser())
        if path.is_dir():
            self.query_one("#error-label", Label).update(f"{path} is a directory")
            return
        if path.exists():

            def _on_replace(replace: bool | None) -> None:
                if replace:
                    self.dismiss(path)

            self.app.push_screen(ReplaceFileScreen(path), _on_replace)
            return
        self.dismiss(path)

    def action_cancel(self) -> None:
        self.dismiss(None)


class DialogDestination:
    """Destination picker backed by the save dialog. Must be awaited from a worker."""

    def __init__(self, app: App) -> None:
        self._app = app

    async def choose(self, suggested: Path) -> Path | None:
        return await self._app.push_screen_wait(SaveDialogScreen(suggested))
