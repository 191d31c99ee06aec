"""Shared test fixtures for ingestkit-tika tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from ingestkit_tika.config import TikaProcessorConfig
from ingestkit_tika.models import Changes

SAMPLE_OUTPUT = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<html xmlns="http://www.w3.org/1999/xhtml">\n'
    "<head>\n"
    '<meta name="Content-Type" content="application/pdf"/>\n'
    "<title>Report</title>\n"
    "</head>\n"
    "<body><p>Quarterly   report</p>\n\n<p>Revenue &amp; costs</p></body></html>\n"
)

_FAKE_ENGINE = """\
import sys
import time

time.sleep({sleep!r})
sys.stderr.buffer.write({stderr!r})
sys.stderr.buffer.flush()
sys.stdout.buffer.write({stdout!r})
sys.stdout.buffer.flush()
sys.exit({exit_code!r})
"""


@pytest.fixture
def default_config() -> TikaProcessorConfig:
    """Return a default TikaProcessorConfig."""
    return TikaProcessorConfig()


@pytest.fixture
def changes() -> Changes:
    """Return an empty Changes record."""
    return Changes()


@pytest.fixture
def tmp_document(tmp_path: Path):
    """Factory fixture writing a document to a temp file and returning its path."""

    def _write(content: bytes = b"%PDF-1.4 test", filename: str = "report.pdf") -> str:
        file_path = tmp_path / filename
        file_path.write_bytes(content)
        return str(file_path)

    return _write


@pytest.fixture
def fake_engine(tmp_path: Path):
    """Factory fixture returning a config whose "java" is a scripted fake Tika.

    The script is run by the current interpreter, so the command becomes
    ``python fake_tika.py -jar <tika_path> <file>``.
    """

    def _make(
        stdout: bytes = b"",
        stderr: bytes = b"",
        exit_code: int = 0,
        sleep: float = 0.0,
        script: str | None = None,
        **overrides,
    ) -> TikaProcessorConfig:
        script_path = tmp_path / "fake_tika.py"
        if script is None:
            script = _FAKE_ENGINE.format(
                stdout=stdout, stderr=stderr, exit_code=exit_code, sleep=sleep
            )
        script_path.write_text(script)
        return TikaProcessorConfig(
            java_executable=sys.executable,
            java_options=[str(script_path)],
            tika_path=str(tmp_path / "tika-app.jar"),
            **overrides,
        )

    return _make
