"""Structural interfaces for the ingestkit-tika pipeline.

The protocol is ``@runtime_checkable`` so callers can optionally verify
conformance with ``isinstance`` checks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ingestkit_tika.models import InvocationOutcome


@runtime_checkable
class ExtractorInvoker(Protocol):
    """Interface for anything that runs an extraction engine on a file."""

    def invoke(self, file_path: str) -> InvocationOutcome:
        """Run the engine on *file_path*. Raises ``ExtractionError`` on failure."""
        ...
