from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    ENGINE_UNAVAILABLE = "engine_unavailable"
    RENDER_TIMEOUT = "render_timeout"
    RENDER_FAILURE = "render_failure"
    PERSISTENCE_FAILURE = "persistence_failure"
    INVALID_INPUT = "invalid_input"
    UNEXPECTED = "unexpected"


class ExportError(Exception):
    """Base class for failures while turning an invoice into a saved PDF."""

    kind = ErrorKind.UNEXPECTED


class EngineUnavailableError(ExportError):
    """The headless browser could not be started."""

    kind = ErrorKind.ENGINE_UNAVAILABLE


class RenderError(ExportError):
    """The markup could not be loaded or printed."""

    kind = ErrorKind.RENDER_FAILURE


class RenderTimeoutError(RenderError):
    kind = ErrorKind.RENDER_TIMEOUT


class PersistenceError(ExportError):
    """Writing the PDF to the chosen path failed."""

    kind = ErrorKind.PERSISTENCE_FAILURE

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
