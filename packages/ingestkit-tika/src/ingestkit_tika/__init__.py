"""ingestkit-tika -- Apache Tika text extraction for document hydration.

Public API re-exports for convenient access.
"""

from ingestkit_tika.config import StderrFilter, TikaProcessorConfig
from ingestkit_tika.errors import ErrorCode, ExtractionError, IngestError
from ingestkit_tika.interpreter import interpret
from ingestkit_tika.invoker import TikaInvoker
from ingestkit_tika.models import Changes, ChangesData, ChangesMetadata, InvocationOutcome
from ingestkit_tika.protocols import ExtractorInvoker
from ingestkit_tika.router import TikaHydrater, hydrate

__all__ = [
    "TikaHydrater",
    "TikaProcessorConfig",
    "StderrFilter",
    "ErrorCode",
    "IngestError",
    "ExtractionError",
    "Changes",
    "ChangesData",
    "ChangesMetadata",
    "InvocationOutcome",
    "ExtractorInvoker",
    "TikaInvoker",
    "interpret",
    "hydrate",
]
