from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence, Tuple, Union

import streamlit as st

from diffjson.config import ConfigError, DiffConfig, load_config
from diffjson.diff import DiffOptions, DiffReport, JsonDiffer
from diffjson.loader import DocumentLoadError, parse_document
from diffjson.report import record_to_dict, report_to_dict, serialize_report

SAMPLE_FIRST = '{\n  "x": 1,\n  "y": [1, 2]\n}'
SAMPLE_SECOND = '{\n  "x": 2,\n  "z": [1, 2]\n}'


@st.cache_data(show_spinner=False)
def _load_config() -> Dict[str, Any]:
    try:
        config = load_config()
    except ConfigError as exc:
        st.warning(f"Konfiguration ignoriert: {exc}")
        config = DiffConfig()
    return config.__dict__.copy()


def _document_input(column, label: str, sample: str) -> Tuple[str, Union[str, bytes]]:
    with column:
        st.subheader(label)
        upload = st.file_uploader(f"{label} hochladen", type=["json"], key=f"upload_{label}")
        if upload is not None:
            return upload.name, upload.getvalue()
        text = st.text_area(f"{label} (JSON)", value=sample, height=260, key=f"text_{label}")
        return label, text


def parse_inputs(inputs: Sequence[Tuple[str, Union[str, bytes]]]) -> Tuple[List[Any], List[str]]:
    """Parse every (name, text or bytes) input; returns the documents and one message per failure."""
    documents: List[Any] = []
    errors: List[str] = []
    for name, data in inputs:
        try:
            documents.append(parse_document(data, name))
        except DocumentLoadError as exc:
            errors.append(str(exc))
    return documents, errors


def _table_row(payload: Dict[str, Any]) -> Dict[str, Any]:
    # Mixed value types do not fit a dataframe column; show them as JSON text.
    row = {"key": payload["key"], "type": payload["type"], "filename": payload.get("filename", "")}
    for name in ("value1", "value2"):
        row[name] = json.dumps(payload[name], ensure_ascii=False) if name in payload else ""
    return row


def main() -> None:
    st.set_page_config(page_title="JSON Diff", layout="wide")
    st.title("JSON Diff")
    config = DiffConfig(**_load_config())

    with st.sidebar:
        st.header("Optionen")
        ignore_order = st.checkbox(
            "Array-Reihenfolge ignorieren",
            value=config.ignore_array_order,
            help="Arrays als Mengen vergleichen",
        )

    left, right = st.columns(2)
    first_name, first_text = _document_input(left, "Dokument A", SAMPLE_FIRST)
    second_name, second_text = _document_input(right, "Dokument B", SAMPLE_SECOND)

    if not st.button("Vergleichen", type="primary"):
        return
    documents, errors = parse_inputs([(first_name, first_text), (second_name, second_text)])
    for message in errors:
        st.error(message)
    if errors:
        return
    first, second = documents

    differ = JsonDiffer(first, second, first_name, second_name, DiffOptions(ignore_array_order=ignore_order))
    report = DiffReport(records=differ.diff())
    if report.has_differences:
        st.warning(f"{len(report.records)} Unterschied(e) gefunden.")
    else:
        st.success("Keine Unterschiede gefunden.")
    st.text(differ.render(report.records))

    rows: List[Dict[str, Any]] = [_table_row(record_to_dict(record)) for record in report.records]
    if rows:
        st.dataframe(rows, use_container_width=True)
    st.json(report_to_dict(report))
    st.download_button(
        "Bericht herunterladen",
        data=serialize_report(report, indent=config.indent, ensure_ascii=config.ensure_ascii),
        file_name="diff.json",
        mime="application/json",
    )


if __name__ == "__main__":
    main()
