"""Parse Tika's HTML output into a ``Changes`` record.

Tika's output is a fixed, known shape (one XHTML document with a
``<body>`` element and ``<meta>`` tags), so plain pattern matching is
used rather than a markup parser.
"""

from __future__ import annotations

import html
import logging
import re

from ingestkit_tika.config import DEFAULT_DOCUMENT_TYPE
from ingestkit_tika.errors import ErrorCode, ExtractionError
from ingestkit_tika.models import Changes

logger = logging.getLogger("ingestkit_tika")

# Encoding mismatches in the extractor surface as U+FFFD.
_REPLACEMENT_CHAR = "\ufffd"

# Greedy: first <body> to last </body>, across lines.
_BODY_RE = re.compile(r"<body>(.+)</body>", re.DOTALL)
_TAG_RE = re.compile(r"<.*?>", re.DOTALL)
_WHITESPACE_RUN_RE = re.compile(r"([\n\t ])[\t\n ]+")
_CONTENT_TYPE_RE = re.compile(r'name="Content-Type" content="([^"]+)"', re.IGNORECASE)


def html_to_text(fragment: str) -> str:
    """Turn an HTML fragment into escaped plain text.

    Strips tags, collapses whitespace runs to their first character,
    decodes entities, then re-escapes ``&``, ``>`` and ``<`` so the text
    can never carry live markup.
    """
    text = _TAG_RE.sub("", fragment)
    text = _WHITESPACE_RUN_RE.sub(r"\1", text)
    text = html.unescape(text)
    text = text.replace("&", "&amp;")
    text = text.replace(">", "&gt;")
    text = text.replace("<", "&lt;")
    return text


def extract_content_type(raw_output: str) -> str | None:
    """Return the value of the ``Content-Type`` meta tag, if present."""
    match = _CONTENT_TYPE_RE.search(raw_output)
    return match.group(1) if match else None


def interpret(
    warning: str,
    raw_output: str,
    changes: Changes,
    document_type: str = DEFAULT_DOCUMENT_TYPE,
) -> None:
    """Populate *changes* from Tika's *raw_output*.

    Parameters
    ----------
    warning:
        Filtered stderr carried forward from the invoker.  Becomes the
        error message when no body could be found.
    raw_output:
        Tika's stdout.
    changes:
        Caller-owned record, mutated in place.
    document_type:
        Tag stored in ``changes.document_type`` when text is found.

    Raises
    ------
    ExtractionError
        If *raw_output* is empty, or if it has no body while a warning was
        reported.
    """
    if not raw_output:
        raise ExtractionError(
            code=ErrorCode.E_TIKA_NO_DATA,
            message="Tika did not return any data.",
            stage="interpret",
            stderr=warning or None,
        )

    data = raw_output.replace(_REPLACEMENT_CHAR, "")

    body = _BODY_RE.search(data)
    if body is None and warning:
        # The warning was serious enough to break extraction.
        raise ExtractionError(
            code=ErrorCode.E_TIKA_WARNING_FATAL,
            message=warning,
            stage="interpret",
            stderr=warning,
        )

    # No body at all is a legitimate empty result, e.g. a picture.
    if body is None:
        logger.debug("ingestkit_tika | no <body> in Tika output, skipping text")
    elif body.group(1):
        fragment = body.group(1)
        changes.data.html = fragment
        text = html_to_text(fragment)

        if text.strip() == "":
            changes.clear_text()
        else:
            changes.metadata.text = text
            changes.document_type = document_type

    content_type = extract_content_type(data)
    if content_type:
        changes.data.content_type = content_type
