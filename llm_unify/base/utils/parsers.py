"""Post-processors for final assistant text.

Used through the ``parser`` request option (or ``json=True``, which selects
:func:`json_parser`). A parser receives the complete assistant text and
returns the value handed back to the caller; the conversation always stores
the raw text.

Failure modes
-------------
Parsers raise ``ValueError`` when the expected block or tag is missing or the
payload is not valid JSON. The error is logged with the offending content.
"""
from __future__ import annotations

import json
from typing import Any, Callable

from ..logging import get_logger

_LOG = get_logger("llm_unify.parsers")


def clean_json_markers(s: str) -> str:
    """Strip Markdown code fences from a JSON reply.

    Parameters:
        s: Raw string potentially wrapped in triple backtick fences
           (```json ... ``` or ``` ... ```).

    Returns:
        The input string with leading/trailing fences removed and surrounding
        whitespace trimmed.
    """
    s = s.strip()
    if s.startswith("```json"):
        s = s[7:]
    elif s.startswith("```"):
        s = s[3:]
    if s.endswith("```"):
        s = s[:-3]
    return s.strip()


def code_block(block_type: str) -> Callable[[str], str]:
    """Return a parser extracting the first ```<block_type> fenced block."""

    def _parse(content: str) -> str:
        marker = "```" + block_type
        if marker not in content:
            _LOG.debug("no %s code block in content: %r", block_type or "plain", content)
            raise ValueError(f"no ```{block_type} code block found")
        body = content.split(marker, 1)[1]
        if block_type and body[:1] not in ("", "\n", "\r", " "):
            # e.g. ```markdown must not match ```md
            raise ValueError(f"no ```{block_type} code block found")
        return body.split("```", 1)[0].strip()

    return _parse


def markdown(content: str) -> str:
    """Extract a ```markdown (or ```md) block."""
    try:
        return code_block("markdown")(content)
    except ValueError:
        return code_block("md")(content)


def json_parser(content: str) -> Any:
    """Parse ``content`` as JSON, falling back to a fenced ```json block."""
    try:
        return json.loads(content)
    except ValueError:
        pass
    try:
        return json.loads(code_block("json")(content))
    except ValueError:
        cleaned = clean_json_markers(content)
        try:
            return json.loads(cleaned)
        except ValueError as exc:
            _LOG.debug("unparseable JSON content: %r", content)
            raise ValueError(f"content is not valid JSON: {exc}") from exc


def xml(tag: str) -> Callable[[str], str]:
    """Return a parser extracting the text inside ``<tag>...</tag>``."""

    def _parse(content: str) -> str:
        open_tag, close_tag = f"<{tag}>", f"</{tag}>"
        if open_tag not in content:
            _LOG.debug("no <%s> tag in content: %r", tag, content)
            raise ValueError(f"no <{tag}> tag found")
        inner = content.split(open_tag, 1)[1].split(close_tag, 1)[0].strip()
        if not inner:
            raise ValueError(f"no content found inside of XML tag {tag}")
        return inner

    return _parse


__all__ = ["clean_json_markers", "code_block", "markdown", "json_parser", "xml"]
