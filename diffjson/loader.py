"""Loading JSON documents from disk or text."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

LOGGER = logging.getLogger(__name__)


class DocumentLoadError(RuntimeError):
    """Raised when a document cannot be read or is not valid JSON."""

    def __init__(self, label: str, reason: str):
        super().__init__(f"Error reading {label}: {reason}")
        self.label = label
        self.reason = reason


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def parse_document(text: Union[str, bytes], label: str = "<text>") -> Any:
    """Parse JSON text or raw bytes, rejecting the non-standard ``NaN``/``Infinity`` constants.

    Bytes are decoded the way ``json.loads`` detects them (UTF-8, UTF-16 or UTF-32).
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        # json.JSONDecodeError and UnicodeDecodeError both subclass ValueError.
        raise DocumentLoadError(label, str(exc)) from exc


def load_document(path: Union[str, Path]) -> Any:
    """Read and parse a UTF-8 JSON file.

    The path as given is used as the document label in error messages.
    """
    label = str(path)
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentLoadError(label, str(exc)) from exc
    LOGGER.info("Loaded %s (%d bytes)", label, len(text))
    return parse_document(text, label)


__all__ = ["DocumentLoadError", "parse_document", "load_document"]
