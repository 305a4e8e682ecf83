"""
Utility functions for the Leanpub client
"""

import json
import re
from typing import Any

SNIPPET_LENGTH = 200


def pretty_json(value: Any) -> str:
    """Render a JSON value with 2-space indentation, keeping key order"""
    return json.dumps(value, indent=2, ensure_ascii=False)


def body_snippet(text: str, length: int = SNIPPET_LENGTH) -> str:
    """First `length` characters of a response body"""
    return text[:length]


def redact_api_key(url: str) -> str:
    """Hide the api_key query value so URLs can be logged"""
    return re.sub(r"(api_key=)[^&]*", r"\1***", url)


def format_error_chain(error: BaseException) -> str:
    """
    Join an exception and its causes into one line, outermost first
    e.g. "parsing JSON from <url>: Expecting value: line 1 column 1 (char 0)"
    """
    parts = []
    current = error
    while current is not None:
        message = str(current)
        if message:
            parts.append(message)
        current = current.__cause__
    return ": ".join(parts) if parts else error.__class__.__name__
