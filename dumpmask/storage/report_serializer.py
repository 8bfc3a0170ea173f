# dumpmask/storage/report_serializer.py
# ReportSerializer -- writes MismatchReports to JSON and reads them back.
#
# RPT-01: Word values are serialized as "0x%08x" strings in the sentinel's
#         word order (the order used by the view formatter).
# RPT-02: Every file is stamped with REPORT_FORMAT_VERSION and TOOL_VERSION.
# RPT-03: load() validates format_version and mismatch_count; any problem is
#         a hard failure (InputNotReadable naming the file).

import json
from pathlib import Path
from typing import Union

from dumpmask.compare.data_models.mismatch_report import MismatchRecord, MismatchReport
from dumpmask.core.exceptions import InputNotFound, InputNotReadable, OutputNotWritable
from dumpmask.version import REPORT_FORMAT_VERSION, TOOL_VERSION


def _serialize_word(value: int) -> str:
    return "0x%08x" % value


def _deserialize_word(value: str) -> int:
    return int(value, 16)


def _serialize_record(rec: MismatchRecord, names: tuple) -> dict:
    return {
        "offset":   rec.offset,
        "stream_i": rec.stream_i,
        "stream_j": rec.stream_j,
        "file_i":   names[rec.stream_i],
        "file_j":   names[rec.stream_j],
        "value_i":  _serialize_word(rec.value_i),
        "value_j":  _serialize_word(rec.value_j),
    }


def _load_record(d: dict) -> MismatchRecord:
    return MismatchRecord(
        offset=int(d["offset"]),
        stream_i=int(d["stream_i"]),
        stream_j=int(d["stream_j"]),
        value_i=_deserialize_word(d["value_i"]),
        value_j=_deserialize_word(d["value_j"]),
    )


class ReportSerializer:
    """
    Serializes a MismatchReport to a JSON file and loads it back.
    """

    def serialize(self, report: MismatchReport, filepath: Union[str, Path]) -> Path:
        """
        Write `report` to `filepath` and return the Path written.
        Parent directories are created if missing.
        """
        filepath = Path(filepath)
        payload = {
            "format_version":   REPORT_FORMAT_VERSION,
            "tool_version":     TOOL_VERSION,
            "any_mismatch":     report.any_mismatch,
            "stream_names":     list(report.stream_names),
            "effective_length": report.effective_length,
            "words_compared":   report.words_compared,
            "wildcard_words":   report.wildcard_words,
            "stopped_early":    report.stopped_early,
            "mismatch_count":   len(report.mismatches),
            "mismatches":       [
                _serialize_record(r, report.stream_names) for r in report.mismatches
            ],
        }
        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
        except OSError as exc:
            raise OutputNotWritable(str(filepath), exc.strerror or type(exc).__name__) from exc
        return filepath

    def load(self, filepath: Union[str, Path]) -> MismatchReport:
        """Load and validate a report written by serialize()."""
        filepath = Path(filepath)
        if not filepath.exists():
            raise InputNotFound(str(filepath))

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as exc:
            raise InputNotReadable(str(filepath), "invalid report: " + str(exc)) from exc

        if not isinstance(payload, dict):
            raise InputNotReadable(str(filepath), "invalid report: top level is not an object")
        if payload.get("format_version") != REPORT_FORMAT_VERSION:
            raise InputNotReadable(
                str(filepath),
                "format_version mismatch: file "
                + repr(payload.get("format_version"))
                + ", expected "
                + repr(REPORT_FORMAT_VERSION),
            )

        raw_records = payload.get("mismatches", [])
        if payload.get("mismatch_count") != len(raw_records):
            raise InputNotReadable(
                str(filepath),
                "mismatch_count="
                + repr(payload.get("mismatch_count"))
                + " does not match actual record count="
                + str(len(raw_records)),
            )

        try:
            records = tuple(_load_record(d) for d in raw_records)
            return MismatchReport(
                any_mismatch=bool(payload["any_mismatch"]),
                mismatches=records,
                stream_names=tuple(payload["stream_names"]),
                effective_length=int(payload["effective_length"]),
                words_compared=int(payload["words_compared"]),
                wildcard_words=int(payload["wildcard_words"]),
                stopped_early=bool(payload["stopped_early"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InputNotReadable(str(filepath), "invalid report: " + repr(exc)) from exc
