"""TikaHydrater -- public API for the ingestkit-tika pipeline.

Runs one file through the two-stage extraction pipeline:

1. Invoke Tika via an :class:`ExtractorInvoker` (default
   :class:`TikaInvoker`).
2. Interpret the captured output into the caller's :class:`Changes`.

Any failure aborts the pipeline.  The result is always the pair
``(error_or_none, changes)``: the record comes back even alongside an
error, possibly partially populated.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time

from ingestkit_tika.config import TikaProcessorConfig
from ingestkit_tika.errors import ExtractionError
from ingestkit_tika.interpreter import interpret
from ingestkit_tika.invoker import TikaInvoker
from ingestkit_tika.models import Changes
from ingestkit_tika.protocols import ExtractorInvoker

logger = logging.getLogger("ingestkit_tika")

_SAMPLE_CHARS = 200


class TikaHydrater:
    """Top-level orchestrator for Tika-based document hydration.

    Parameters
    ----------
    config:
        Pipeline configuration.  Uses defaults when *None*.
    invoker:
        Extraction-engine runner.  Defaults to a :class:`TikaInvoker`
        built from *config*.
    """

    def __init__(
        self,
        config: TikaProcessorConfig | None = None,
        invoker: ExtractorInvoker | None = None,
    ) -> None:
        self._config = config or TikaProcessorConfig()
        self._invoker = invoker or TikaInvoker(self._config)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def can_handle(self, file_path: str) -> bool:
        """Return True if *file_path* is a regular file.

        Tika detects the format itself, so any readable file qualifies.
        """
        return os.path.isfile(file_path)

    def hydrate(
        self,
        file_path: str,
        changes: Changes | None = None,
    ) -> tuple[ExtractionError | None, Changes]:
        """Extract text, HTML and content type from *file_path*.

        Parameters
        ----------
        file_path:
            Filesystem path to the document.
        changes:
            Record to populate in place.  A fresh :class:`Changes` is
            created when *None*.

        Returns
        -------
        tuple[ExtractionError | None, Changes]
            The error that aborted the pipeline (or *None*) and the record.
        """
        start = time.monotonic()
        if changes is None:
            changes = Changes()
        filename = os.path.basename(file_path)

        try:
            outcome = self._invoker.invoke(file_path)
            interpret(
                outcome.warning,
                outcome.raw_output,
                changes,
                document_type=self._config.document_type,
            )
        except ExtractionError as exc:
            logger.error(
                "ingestkit_tika | file=%s | code=%s | detail=%s",
                filename,
                exc.code,
                exc.message,
            )
            return exc, changes

        elapsed = time.monotonic() - start
        text = changes.metadata.text or ""
        logger.info(
            "ingestkit_tika | file=%s | content_type=%s | text_chars=%d | "
            "truncated=%s | time=%.1fs",
            filename,
            changes.data.content_type,
            len(text),
            outcome.truncated,
            elapsed,
        )
        if self._config.log_sample_data and text:
            logger.debug(
                "ingestkit_tika | file=%s | sample=%r", filename, text[:_SAMPLE_CHARS]
            )

        return None, changes

    async def ahydrate(
        self,
        file_path: str,
        changes: Changes | None = None,
    ) -> tuple[ExtractionError | None, Changes]:
        """Async wrapper around :meth:`hydrate`.

        Offloads the synchronous ``hydrate()`` call to a thread via
        ``asyncio.to_thread()``.
        """
        return await asyncio.to_thread(self.hydrate, file_path, changes)


def hydrate(
    file_path: str,
    changes: Changes | None = None,
    config: TikaProcessorConfig | None = None,
) -> tuple[ExtractionError | None, Changes]:
    """Run :meth:`TikaHydrater.hydrate` with a one-off hydrater."""
    return TikaHydrater(config).hydrate(file_path, changes)
