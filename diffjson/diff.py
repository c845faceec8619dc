"""Structural diffing of parsed JSON documents."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from diffjson.values import JsonType, is_container, json_equal, json_type

LOGGER = logging.getLogger(__name__)

ROOT_KEY = "root"


class DiffKind(str, Enum):
    CHANGED = "changed"
    TYPE_MISMATCH = "type_mismatch"
    ONLY_IN_FIRST = "only_in_first"
    ONLY_IN_SECOND = "only_in_second"


@dataclass(frozen=True)
class DiffRecord:
    """One divergence between the two documents.

    ``source`` names the document the record is attributed to; it is unset for
    plain value changes. ``value_a``/``value_b`` only carry meaning for the
    kinds that report them (see ``report.record_to_dict``).
    """

    key: str
    kind: DiffKind
    source: Optional[str] = None
    value_a: Any = None
    value_b: Any = None


@dataclass
class DiffReport:
    records: List[DiffRecord] = field(default_factory=list)

    @property
    def has_differences(self) -> bool:
        return bool(self.records)


@dataclass(frozen=True)
class DiffOptions:
    ignore_array_order: bool = False


def child_path(prefix: Optional[str], key: str) -> str:
    if prefix is None:
        # A top-level "" key keeps its separator so it cannot be read as the root.
        return key or "."
    return f"{prefix}.{key}"


def index_path(prefix: Optional[str], index: int) -> str:
    return f"{'' if prefix is None else prefix}[{index}]"


def record_key(path: Optional[str]) -> str:
    return ROOT_KEY if path is None else path


class JsonDiffer:
    """Compute the flat list of differences between two JSON values."""

    def __init__(
        self,
        first: Any,
        second: Any,
        first_label: str = "first",
        second_label: str = "second",
        options: Optional[DiffOptions] = None,
    ):
        self.first = first
        self.second = second
        self.first_label = first_label
        self.second_label = second_label
        self.options = options or DiffOptions()

    def diff(self) -> List[DiffRecord]:
        records: List[DiffRecord] = []
        self._diff_values(self.first, self.second, None, records)
        LOGGER.debug(
            "Compared %s with %s (ignore_array_order=%s): %d difference(s)",
            self.first_label,
            self.second_label,
            self.options.ignore_array_order,
            len(records),
        )
        return records

    def report(self) -> DiffReport:
        return DiffReport(records=self.diff())

    def render(self, records: Optional[List[DiffRecord]] = None) -> str:
        """Summarize the differences; pass records from an earlier ``diff()`` to avoid comparing again."""
        if records is None:
            records = self.diff()
        if not records:
            return "Keine Unterschiede gefunden."
        lines = [f"Unterschiede ({len(records)}):"]
        for record in records:
            lines.append(f"- {record.key}: {_describe(record)}")
        return "\n".join(lines)

    # Dispatch -------------------------------------------------------------
    def _diff_values(self, a: Any, b: Any, path: Optional[str], records: List[DiffRecord]) -> None:
        kind_a = json_type(a)
        kind_b = json_type(b)
        if kind_a is JsonType.OBJECT and kind_b is JsonType.OBJECT:
            self._diff_objects(a, b, path, records)
        elif kind_a is JsonType.ARRAY and kind_b is JsonType.ARRAY:
            if self.options.ignore_array_order:
                self._diff_arrays_ignore_order(a, b, path, records)
            else:
                self._diff_arrays(a, b, path, records)
        elif is_container(a) or is_container(b):
            records.append(
                DiffRecord(
                    key=record_key(path),
                    kind=DiffKind.TYPE_MISMATCH,
                    source=self.first_label,
                    value_a=a,
                    value_b=b,
                )
            )
        elif not json_equal(a, b):
            records.append(DiffRecord(key=record_key(path), kind=DiffKind.CHANGED, value_a=a, value_b=b))

    def _diff_objects(self, a: Dict[str, Any], b: Dict[str, Any], path: Optional[str], records: List[DiffRecord]) -> None:
        for key, value_a in a.items():
            key_path = child_path(path, key)
            if key not in b:
                records.append(
                    DiffRecord(key=key_path, kind=DiffKind.ONLY_IN_FIRST, source=self.first_label, value_a=value_a)
                )
                continue
            value_b = b[key]
            if json_equal(value_a, value_b):
                continue
            if not is_container(value_a) and not is_container(value_b):
                records.append(DiffRecord(key=key_path, kind=DiffKind.CHANGED, value_a=value_a, value_b=value_b))
            else:
                self._diff_values(value_a, value_b, key_path, records)
        for key, value_b in b.items():
            if key not in a:
                records.append(
                    DiffRecord(
                        key=child_path(path, key),
                        kind=DiffKind.ONLY_IN_SECOND,
                        source=self.second_label,
                        value_b=value_b,
                    )
                )

    def _diff_arrays(self, a: Sequence[Any], b: Sequence[Any], path: Optional[str], records: List[DiffRecord]) -> None:
        for index in range(max(len(a), len(b))):
            item_path = index_path(path, index)
            if index < len(a) and index < len(b):
                if not json_equal(a[index], b[index]):
                    self._diff_values(a[index], b[index], item_path, records)
            elif index < len(a):
                records.append(
                    DiffRecord(key=item_path, kind=DiffKind.ONLY_IN_FIRST, source=self.first_label, value_a=a[index])
                )
            else:
                records.append(
                    DiffRecord(key=item_path, kind=DiffKind.ONLY_IN_SECOND, source=self.second_label, value_b=b[index])
                )

    def _diff_arrays_ignore_order(
        self, a: Sequence[Any], b: Sequence[Any], path: Optional[str], records: List[DiffRecord]
    ) -> None:
        # Greedy first-fit pairing on exact equality; near-equal elements are not matched.
        matched_a = [False] * len(a)
        matched_b = [False] * len(b)
        for i, item_a in enumerate(a):
            for j, item_b in enumerate(b):
                if not matched_b[j] and json_equal(item_a, item_b):
                    matched_a[i] = True
                    matched_b[j] = True
                    break

        for i, item_a in enumerate(a):
            if not matched_a[i]:
                records.append(
                    DiffRecord(
                        key=index_path(path, i), kind=DiffKind.ONLY_IN_FIRST, source=self.first_label, value_a=item_a
                    )
                )
        for j, item_b in enumerate(b):
            if not matched_b[j]:
                records.append(
                    DiffRecord(
                        key=index_path(path, j), kind=DiffKind.ONLY_IN_SECOND, source=self.second_label, value_b=item_b
                    )
                )


def _describe(record: DiffRecord) -> str:
    def dump(value: Any) -> str:
        return json.dumps(value, ensure_ascii=False)

    if record.kind is DiffKind.CHANGED:
        return f"{dump(record.value_a)} → {dump(record.value_b)}"
    if record.kind is DiffKind.TYPE_MISMATCH:
        return f"Typkonflikt {json_type(record.value_a).value} → {json_type(record.value_b).value}"
    if record.kind is DiffKind.ONLY_IN_FIRST:
        return f"nur in {record.source}: {dump(record.value_a)}"
    return f"nur in {record.source}: {dump(record.value_b)}"


def diff(
    a: Any,
    b: Any,
    label_a: str = "first",
    label_b: str = "second",
    options: Optional[DiffOptions] = None,
) -> DiffReport:
    """Compare two parsed JSON documents and wrap the records in a report."""
    return JsonDiffer(a, b, label_a, label_b, options).report()


def diff_json(a: Any, b: Any, label_a: str = "first", label_b: str = "second") -> DiffReport:
    """Positional comparison with default options."""
    return diff(a, b, label_a, label_b, DiffOptions())


__all__ = [
    "ROOT_KEY",
    "DiffKind",
    "DiffRecord",
    "DiffReport",
    "DiffOptions",
    "JsonDiffer",
    "child_path",
    "index_path",
    "record_key",
    "diff",
    "diff_json",
]
