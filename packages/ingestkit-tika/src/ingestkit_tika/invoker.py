"""Run the Tika application jar and classify how the run ended.

``TikaInvoker.invoke()`` spawns ``java -jar <tika> <file>`` with the file
passed as a discrete argument, captures stdout and stderr up to
``max_output_bytes`` each, strips known-benign stderr noise, and then
either returns an :class:`InvocationOutcome` or raises
:class:`ExtractionError`.

Disposition, evaluated in order:

1. stdout overflowed the capture ceiling -- soft success with an empty
   ``<body></body>`` payload (the file is too large to extract fully).
2. Any other process failure -- ``ExtractionError`` with the cause and
   the filtered stderr attached.
3. stderr with no stdout -- ``ExtractionError`` whose message is stderr.
4. Otherwise the filtered stderr is carried forward as a warning.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
import threading
from typing import IO

from ingestkit_tika.config import TikaProcessorConfig
from ingestkit_tika.errors import ErrorCode, ExtractionError
from ingestkit_tika.models import InvocationOutcome

logger = logging.getLogger("ingestkit_tika")

EMPTY_BODY = "<body></body>"

_READ_SIZE = 64 * 1024


class _StreamCapture:
    """Byte buffer for one output stream, bounded at ``limit`` bytes."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.exceeded = False
        self.error: Exception | None = None
        self._chunks: list[bytes] = []
        self._size = 0

    def feed(self, chunk: bytes) -> bool:
        """Append *chunk*.  Returns False once the limit has been crossed."""
        room = self.limit - self._size
        if len(chunk) > room:
            self._chunks.append(chunk[:room])
            self._size = self.limit
            self.exceeded = True
            return False
        self._chunks.append(chunk)
        self._size += len(chunk)
        return True

    def text(self) -> str:
        return b"".join(self._chunks).decode("utf-8", errors="replace")


def _drain(stream: IO[bytes], capture: _StreamCapture, proc: subprocess.Popen) -> None:
    try:
        while True:
            chunk = stream.read1(_READ_SIZE)  # type: ignore[attr-defined]
            if not chunk:
                break
            if not capture.feed(chunk):
                # Same as an exec() maxBuffer overflow: stop the child.
                proc.kill()
                break
    except Exception as exc:
        capture.error = exc
        proc.kill()
    finally:
        stream.close()


class TikaInvoker:
    """Run Tika on one file and normalize the result.

    Parameters
    ----------
    config:
        Pipeline configuration.  Uses defaults when *None*.  The stderr
        filter rules are compiled once here; the engine location is read
        from the config on every call.
    """

    def __init__(self, config: TikaProcessorConfig | None = None) -> None:
        self._config = config or TikaProcessorConfig()
        self._stderr_filters: tuple[tuple[re.Pattern[str], str], ...] = tuple(
            (re.compile(rule.pattern), rule.replacement)
            for rule in self._config.stderr_filters
        )

    def filter_stderr(self, stderr: str) -> str:
        """Remove known-benign noise (JVM banners, INFO notices) from *stderr*."""
        for pattern, replacement in self._stderr_filters:
            stderr = pattern.sub(replacement, stderr)
        return stderr

    def invoke(self, file_path: str) -> InvocationOutcome:
        """Run Tika on *file_path*.

        Returns
        -------
        InvocationOutcome
            The filtered stderr as ``warning`` and stdout as ``raw_output``.

        Raises
        ------
        ExtractionError
            If the process could not be started, exited abnormally, timed
            out, overflowed its stderr buffer, or wrote only to stderr.
        """
        config = self._config
        filename = os.path.basename(file_path)
        cmd = config.build_command(file_path)

        logger.debug("ingestkit_tika | file=%s | cmd=%s", filename, cmd)

        try:
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except (OSError, ValueError) as exc:
            raise ExtractionError(
                code=ErrorCode.E_TIKA_PROCESS_FAILED,
                message=f"Failed to start Tika: {exc}",
                stage="invoke",
                cause=repr(exc),
                stderr="",
            ) from exc

        stdout = _StreamCapture(config.max_output_bytes)
        stderr = _StreamCapture(config.max_output_bytes)
        threads = [
            threading.Thread(target=_drain, args=(proc.stdout, stdout, proc), daemon=True),
            threading.Thread(target=_drain, args=(proc.stderr, stderr, proc), daemon=True),
        ]
        for t in threads:
            t.start()

        timed_out = False
        try:
            proc.wait(timeout=config.timeout_seconds)
        except subprocess.TimeoutExpired:
            timed_out = True
            proc.kill()
            proc.wait()

        for t in threads:
            t.join()

        for capture in (stdout, stderr):
            if capture.error is not None:
                raise ExtractionError(
                    code=ErrorCode.E_TIKA_PROCESS_FAILED,
                    message=f"Failed to read Tika output: {capture.error}",
                    stage="invoke",
                    cause=repr(capture.error),
                    stderr=self.filter_stderr(stderr.text()),
                ) from capture.error

        warning = self.filter_stderr(stderr.text())

        # --- 1. Output too large: extract nothing rather than fail ---
        if stdout.exceeded:
            logger.warning(
                "ingestkit_tika | file=%s | code=%s | detail=%s",
                filename,
                ErrorCode.W_TIKA_OUTPUT_TRUNCATED.value,
                f"stdout exceeded {config.max_output_bytes} bytes",
            )
            return InvocationOutcome(warning="", raw_output=EMPTY_BODY, truncated=True)

        # --- 2. Process failure ---
        if timed_out:
            raise ExtractionError(
                code=ErrorCode.E_TIKA_TIMEOUT,
                message=f"Tika did not finish within {config.timeout_seconds} seconds",
                stage="invoke",
                cause=f"timeout after {config.timeout_seconds}s",
                stderr=warning,
            )
        if stderr.exceeded:
            raise ExtractionError(
                code=ErrorCode.E_TIKA_OUTPUT_LIMIT,
                message=f"Tika stderr exceeded {config.max_output_bytes} bytes",
                stage="invoke",
                cause="stderr maxBuffer exceeded",
                stderr=warning,
            )
        if proc.returncode != 0:
            raise ExtractionError(
                code=ErrorCode.E_TIKA_PROCESS_FAILED,
                message=f"Tika exited with status {proc.returncode}",
                stage="invoke",
                cause=f"exit status {proc.returncode}",
                stderr=warning,
            )

        raw_output = stdout.text()

        # --- 3. A warning that suppressed all output is fatal ---
        if warning and not raw_output:
            raise ExtractionError(
                code=ErrorCode.E_TIKA_STDERR_ONLY,
                message=warning,
                stage="invoke",
                stderr=warning,
            )

        # --- 4. Success, possibly with a benign warning ---
        if warning:
            logger.warning(
                "ingestkit_tika | file=%s | code=%s | detail=%s",
                filename,
                ErrorCode.W_TIKA_STDERR_WARNING.value,
                warning.strip(),
            )

        return InvocationOutcome(warning=warning, raw_output=raw_output)
