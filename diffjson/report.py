"""Serialization of diff reports into the JSON output format."""
from __future__ import annotations

import json
from typing import Any, Dict

from diffjson.diff import DiffKind, DiffRecord, DiffReport

# Fields emitted per record kind, besides "key" and "type".
_FIELDS_BY_KIND = {
    DiffKind.CHANGED: ("value1", "value2"),
    DiffKind.TYPE_MISMATCH: ("filename", "value1", "value2"),
    DiffKind.ONLY_IN_FIRST: ("filename", "value1"),
    DiffKind.ONLY_IN_SECOND: ("filename", "value2"),
}


class ReportSerializationError(RuntimeError):
    """Raised when a report cannot be rendered as JSON text."""


def record_to_dict(record: DiffRecord) -> Dict[str, Any]:
    values = {
        "filename": record.source,
        "value1": record.value_a,
        "value2": record.value_b,
    }
    payload: Dict[str, Any] = {"key": record.key, "type": record.kind.value}
    for name in _FIELDS_BY_KIND[record.kind]:
        payload[name] = values[name]
    return payload


def report_to_dict(report: DiffReport) -> Dict[str, Any]:
    return {
        "isdiff": report.has_differences,
        "diff": [record_to_dict(record) for record in report.records],
    }


def serialize_report(report: DiffReport, indent: int = 2, ensure_ascii: bool = False) -> str:
    """Render a report as formatted JSON text.

    Parameters
    ----------
    report: DiffReport
        Result of a comparison.
    indent: int
        Indentation passed to ``json.dumps``.
    ensure_ascii: bool
        Escape non-ASCII characters in keys and values.
    """
    try:
        return json.dumps(report_to_dict(report), indent=indent, ensure_ascii=ensure_ascii, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise ReportSerializationError(f"Error serializing diff result: {exc}") from exc


__all__ = ["ReportSerializationError", "record_to_dict", "report_to_dict", "serialize_report"]
