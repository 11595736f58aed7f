from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Protocol

from filelock import FileLock

from invoicer.config import get_downloads_dir
from invoicer.services.exceptions import PersistenceError
from invoicer.utils.filenames import ensure_pdf_suffix, suggested_filename

logger = logging.getLogger(__name__)


class DestinationPicker(Protocol):
    async def choose(self, suggested: Path) -> Path | None:
        """Return where to save the PDF, or None when the user cancels."""
        ...


def suggested_path(invoice_number: str) -> Path:
    """Default save location: ``<downloads>/Invoice-<number>.pdf``."""
    return get_downloads_dir() / suggested_filename(invoice_number)


class FixedDestination:
    """Non-interactive picker: always the given path, or the suggestion when None."""

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path is not None else None

    async def choose(self, suggested: Path) -> Path | None:
        return self._path or suggested


class PromptDestination:
    """Ask for the destination on the terminal.

    Enter accepts the suggestion, ``-`` (or EOF / Ctrl-C) cancels.
    """

    def __init__(self, input_func=input) -> None:
        self._input = input_func

    def _ask(self, suggested: Path) -> Path | None:
        try:
            answer = self._input(f"Save PDF as [{suggested}] ('-' to cancel): ").strip()
        except (EOFError, KeyboardInterrupt):
            return None
        if answer == "-":
            return None
        if not answer:
            return suggested
        return ensure_pdf_suffix(Path(answer).expanduser())

    async def choose(self, suggested: Path) -> Path | None:
        return await asyncio.to_thread(self._ask, suggested)


def _write_atomic(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    # the temp name is fixed per target, so writers of one path take turns
    lock = FileLock(path.with_name(f".{path.name}.lock"))
    tmp = path.with_name(f".{path.name}.tmp")
    with lock:
        try:
            tmp.write_bytes(content)
            os.replace(tmp, path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise


async def write_document(path: Path, content: bytes) -> Path:
    """Write *content* to *path* without leaving a partial file behind."""
    try:
        await asyncio.to_thread(_write_atomic, path, content)
    except OSError as e:
        raise PersistenceError(
            f"Could not save PDF to {path}: {e.strerror or e}", path=str(path)
        ) from e
    logger.info("Saved %d bytes to %s", len(content), path)
    return path
