"""Configuration model for the ingestkit-tika pipeline.

Provides ``TikaProcessorConfig`` with the extraction-engine location,
process limits, and the stderr noise filters.  Supports loading overrides
from YAML or JSON files via the ``from_file()`` classmethod.
"""

from __future__ import annotations

import json
import pathlib

from pydantic import BaseModel, Field

DEFAULT_DOCUMENT_TYPE = "document"


class StderrFilter(BaseModel):
    """One stderr clean-up rule: every match of ``pattern`` is replaced."""

    pattern: str
    replacement: str = ""
    description: str = ""


DEFAULT_STDERR_FILTERS: tuple[StderrFilter, ...] = (
    StderrFilter(
        pattern=r"Picked up[^\n]+\n",
        description="JVM banner printed when JAVA_TOOL_OPTIONS is set",
    ),
    StderrFilter(
        pattern=r"INFO -[^\n]+\n",
        description="Tika informational notices, e.g. 'Document is encrypted'",
    ),
)


class TikaProcessorConfig(BaseModel):
    """All tunable parameters with sensible defaults for Tika extraction."""

    # --- Identity ---
    parser_version: str = "ingestkit_tika:1.0.0"

    # --- Extraction Engine ---
    tika_path: str = "tika-app.jar"
    java_executable: str = "java"
    java_options: list[str] = []

    # --- Process Limits ---
    max_output_bytes: int = Field(default=8 * 1024 * 1024, gt=0)
    timeout_seconds: float | None = None

    # --- Output Interpretation ---
    stderr_filters: tuple[StderrFilter, ...] = DEFAULT_STDERR_FILTERS
    document_type: str = DEFAULT_DOCUMENT_TYPE

    # --- Logging / PII Safety ---
    log_sample_data: bool = False

    def build_command(self, file_path: str) -> list[str]:
        """Return the argument vector that runs Tika on *file_path*."""
        return [
            self.java_executable,
            *self.java_options,
            "-jar",
            self.tika_path,
            file_path,
        ]

    @classmethod
    def from_file(cls, path: str) -> TikaProcessorConfig:
        """Load configuration from a YAML or JSON file.

        File format is detected by extension: ``.yaml`` / ``.yml`` for YAML,
        ``.json`` for JSON.  Any keys present in the file override the
        corresponding defaults; keys not present retain their defaults.
        """
        file_path = pathlib.Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        suffix = file_path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            try:
                import yaml  # type: ignore[import-untyped]
            except ImportError as exc:
                raise ImportError(
                    "pyyaml is required to load YAML config files. "
                    "Install it with: pip install pyyaml"
                ) from exc
            with open(file_path) as fh:
                data = yaml.safe_load(fh)
        elif suffix == ".json":
            with open(file_path) as fh:
                data = json.load(fh)
        else:
            raise ValueError(
                f"Unsupported config file extension '{suffix}'. "
                "Use .yaml, .yml, or .json."
            )

        if data is None:
            data = {}

        return cls(**data)
