"""Error codes, structured error model, and the raisable extraction error.

``ErrorCode`` contains every error/warning code the Tika pipeline emits.
``IngestError`` is the serializable record of one failure.
``ExtractionError`` is the only exception type the pipeline raises; it
wraps an ``IngestError`` so callers can both catch it and report it.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Error codes for Tika extraction.

    Values equal their names so they are stable strings suitable for
    metrics and alerting.  ``E_`` prefix = fatal, ``W_`` prefix = warning.
    """

    # Invocation
    E_TIKA_PROCESS_FAILED = "E_TIKA_PROCESS_FAILED"
    E_TIKA_OUTPUT_LIMIT = "E_TIKA_OUTPUT_LIMIT"
    E_TIKA_TIMEOUT = "E_TIKA_TIMEOUT"
    E_TIKA_STDERR_ONLY = "E_TIKA_STDERR_ONLY"

    # Interpretation
    E_TIKA_NO_DATA = "E_TIKA_NO_DATA"
    E_TIKA_WARNING_FATAL = "E_TIKA_WARNING_FATAL"

    # Warnings (non-fatal)
    W_TIKA_OUTPUT_TRUNCATED = "W_TIKA_OUTPUT_TRUNCATED"
    W_TIKA_STDERR_WARNING = "W_TIKA_STDERR_WARNING"


class IngestError(BaseModel):
    """Structured error with code, message, and process diagnostics.

    ``cause`` holds the string form of the underlying exception (if any)
    and ``stderr`` the filtered diagnostic stream captured from Tika.
    """

    code: str
    message: str
    stage: str | None = None
    recoverable: bool = False
    cause: str | None = None
    stderr: str | None = None


class ExtractionError(Exception):
    """Raisable exception wrapping an ``IngestError`` data model.

    Carries the structured ``IngestError`` as the ``.error`` attribute
    for inspection and serialization.  ``str(exc)`` is the error message.
    """

    def __init__(self, **kwargs: object) -> None:
        self.error = IngestError(**kwargs)  # type: ignore[arg-type]
        super().__init__(self.error.message)

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def stage(self) -> str | None:
        return self.error.stage

    @property
    def recoverable(self) -> bool:
        return self.error.recoverable

    @property
    def cause(self) -> str | None:
        return self.error.cause

    @property
    def stderr(self) -> str | None:
        return self.error.stderr
