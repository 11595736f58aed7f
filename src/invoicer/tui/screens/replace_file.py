from __future__ import annotations

from pathlib import Path

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ReplaceFileScreen(ModalScreen[bool]):
    """Asked before a save would overwrite an existing file.

    Dismisses with True to replace it; keeping the old file (button, escape
    or ``k``) returns to the save dialog.
    """

    DEFAULT_CSS = """
    ReplaceFileScreen {
        align: center middle;
        background: $surface 80%;
    }
    #replace-dialog {
        width: 64;
        height: auto;
        max-height: 14;
        background: $surface;
        border: thick $warning;
        padding: 1 2;
    }
    #replace-path {
        color: $text-muted;
    }
    #replace-dialog .button-bar {
        height: 3;
        margin-top: 1;
        layout: horizontal;
        align-horizontal: right;
    }
    #replace-dialog .button-bar Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "keep", "Keep existing"),
        Binding("k", "keep", show=False),
        Binding("r", "replace", "Replace"),
    ]

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = path

    def compose(self) -> ComposeResult:
        with Vertical(id="replace-dialog"):
            yield Static(f"{self.path.name} already exists. Replace it?", id="replace-message")
            yield Static(str(self.path.parent), id="replace-path")
            with Horizontal(classes="button-bar"):
                yield Button("Keep existing", id="btn-keep")
                yield Button("⤓ Replace", id="btn-replace", variant="warning")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn-replace")

    def action_keep(self) -> None:
        self.dismiss(False)

    def action_replace(self) -> None:
        self.dismiss(True)
