from __future__ import annotations

import pytest
from textual.widgets import Button, Input, Label, Static

from invoicer.tui.screens.invoice import InvoiceScreen
from invoicer.tui.screens.replace_file import ReplaceFileScreen
from invoicer.tui.screens.save_dialog import SaveDialogScreen


async def _open_dialog(app, pilot, suggested):
    results: list = []
    app.push_screen(SaveDialogScreen(suggested), results.append)
    await pilot.pause()
    return results


@pytest.mark.asyncio
async def test_prefilled_with_suggestion(make_app, tmp_path):
    app = make_app()
    async with app.run_test() as pilot:
        await _open_dialog(app, pilot, tmp_path / "Invoice-INV-001.pdf")
        assert isinstance(app.screen, SaveDialogScreen)
        value = app.screen.query_one("#path-input", Input).value
        assert value == str(tmp_path / "Invoice-INV-001.pdf")


@pytest.mark.asyncio
async def test_save_returns_path(make_app, tmp_path):
    app = make_app()
    async with app.run_test() as pilot:
        results = await _open_dialog(app, pilot, tmp_path / "a.pdf")
        app.screen.query_one("#btn-save", Button).press()
        await pilot.pause()
        assert results == [tmp_path / "a.pdf"]
        assert isinstance(app.screen, InvoiceScreen)


@pytest.mark.asyncio
async def test_edited_path_gets_pdf_suffix(make_app, tmp_path):
    app = make_app()
    async with app.run_test() as pilot:
        results = await _open_dialog(app, pilot, tmp_path / "a.pdf")
        app.screen.query_one("#path-input", Input).value = str(tmp_path / "june")
        app.screen.query_one("#btn-save", Button).press()
        await pilot.pause()
        assert results == [tmp_path / "june.pdf"]


@pytest.mark.asyncio
async def test_cancel_button(make_app, tmp_path):
    app = make_app()
    async with app.run_test() as pilot:
        results = await _open_dialog(app, pilot, tmp_path / "a.pdf")
        app.screen.query_one("#btn-cancel", Button).press()
        await pilot.pause()
        assert results == [None]


@pytest.mark.asyncio
async def test_close_button(make_app, tmp_path):
    app = make_app()
    async with app.run_test() as pilot:
        results = await _open_dialog(app, pilot, tmp_path / "a.pdf")
        app.screen.query_one("#btn-modal-close", Button).press()
        await pilot.pause()
        assert results == [None]


@pytest.mark.asyncio
async def test_escape_cancels(make_app, tmp_path):
    app = make_app()
    async with app.run_test() as pilot:
        results = await _open_dialog(app, pilot, tmp_path / "a.pdf")
        await pilot.press("escape")
        await pilot.pause()
        assert results == [None]


@pytest.mark.asyncio
async def test_empty_path_shows_error(make_app, tmp_path):
    app = make_app()
    async with app.run_test() as pilot:
        results = await _open_dialog(app, pilot, tmp_path / "a.pdf")
        app.screen.query_one("#path-input", Input).value = "   "
        app.screen.query_one("#btn-save", Button).press()
        await pilot.pause()
        assert results == []
        assert "Enter a file path" in app.screen.query_one("#error-label", Label).render().plain


@pytest.mark.asyncio
async def test_directory_rejected(make_app, tmp_path):
    folder = tmp_path / "folder.pdf"
    folder.mkdir()
    app = make_app()
    async with app.run_test() as pilot:
        results = await _open_dialog(app, pilot, folder)
        app.screen.query_one("#btn-save", Button).press()
        await pilot.pause()
        assert results == []
        assert "is a directory" in app.screen.query_one("#error-label", Label).render().plain


@pytest.mark.asyncio
async def test_existing_file_confirmed(make_app, tmp_path):
    target = tmp_path / "a.pdf"
    target.write_bytes(b"old")
    app = make_app()
    async with app.run_test() as pilot:
        results = await _open_dialog(app, pilot, target)
        app.screen.query_one("#btn-save", Button).press()
        await pilot.pause()
        assert isinstance(app.screen, ReplaceFileScreen)

        app.screen.query_one("#btn-replace", Button).press()
        await pilot.pause()
        assert results == [target]
        assert isinstance(app.screen, InvoiceScreen)


@pytest.mark.asyncio
async def test_existing_file_declined(make_app, tmp_path):
    target = tmp_path / "a.pdf"
    target.write_bytes(b"old")
    app = make_app()
    async with app.run_test() as pilot:
        results = await _open_dialog(app, pilot, target)
        app.screen.query_one("#btn-save", Button).press()
        await pilot.pause()
        app.screen.query_one("#btn-keep", Button).press()
        await pilot.pause()
        assert results == []
        assert isinstance(app.screen, SaveDialogScreen)
        assert target.read_bytes() == b"old"


@pytest.mark.asyncio
async def test_replace_dialog_names_file(make_app, tmp_path):
    target = tmp_path / "a.pdf"
    target.write_bytes(b"old")
    app = make_app()
    async with app.run_test() as pilot:
        await _open_dialog(app, pilot, target)
        app.screen.query_one("#btn-save", Button).press()
        await pilot.pause()
        message = app.screen.query_one("#replace-message", Static).render().plain
        assert message == "a.pdf already exists. Replace it?"
        assert str(tmp_path) in app.screen.query_one("#replace-path", Static).render().plain


@pytest.mark.asyncio
async def test_replace_key_overwrites(make_app, tmp_path):
    target = tmp_path / "a.pdf"
    target.write_bytes(b"old")
    app = make_app()
    async with app.run_test() as pilot:
        results = await _open_dialog(app, pilot, target)
        app.screen.query_one("#btn-save", Button).press()
        await pilot.pause()
        await pilot.press("r")
        await pilot.pause()
        assert results == [target]


@pytest.mark.asyncio
async def test_escape_keeps_existing(make_app, tmp_path):
    target = tmp_path / "a.pdf"
    target.write_bytes(b"old")
    app = make_app()
    async with app.run_test() as pilot:
        results = await _open_dialog(app, pilot, target)
        app.screen.query_one("#btn-save", Button).press()
        await pilot.pause()
        await pilot.press("escape")
        await pilot.pause()
        assert results == []
        assert isinstance(app.screen, SaveDialogScreen)
