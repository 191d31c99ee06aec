"""Pydantic models for the ingestkit-tika package.

Contains the caller-owned ``Changes`` record that extraction populates in
place, and ``InvocationOutcome``, the transient result of one Tika run.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Changes record
# ---------------------------------------------------------------------------


class ChangesData(BaseModel):
    """Document data written by extraction.  Extra keys are preserved."""

    model_config = ConfigDict(extra="allow")

    html: str | None = None
    content_type: str | None = None


class ChangesMetadata(BaseModel):
    """Document metadata written by extraction.  Extra keys are preserved."""

    model_config = ConfigDict(extra="allow")

    text: str | None = None


class Changes(BaseModel):
    """Mutable record of the changes hydration applies to a document.

    Owned by the caller and mutated in place.  A field set to ``None`` is
    absent: it is left out of :meth:`to_dict`.  ``metadata.text`` and
    ``data.html`` are always set or cleared together.
    """

    model_config = ConfigDict(extra="allow")

    data: ChangesData = Field(default_factory=ChangesData)
    metadata: ChangesMetadata = Field(default_factory=ChangesMetadata)
    document_type: str | None = None

    def clear_text(self) -> None:
        """Drop both the plain text and its HTML source."""
        self.metadata.text = None
        self.data.html = None

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a plain dict without absent fields."""
        return self.model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------


class InvocationOutcome(BaseModel):
    """Captured output of a successful Tika run.

    ``warning`` is the filtered stderr (empty when Tika was quiet) and
    ``raw_output`` the stdout blob that the interpreter parses.
    """

    warning: str = ""
    raw_output: str = ""
    truncated: bool = False
