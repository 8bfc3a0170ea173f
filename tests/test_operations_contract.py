# tests/test_operations_contract.py
# Contract tests for the public operations: view, mask, mask_stream, compare.
#
# CONSTRAINTS:
#   Real files under tmp_path. The only patch is a call counter on the
#   masking step, used to check validation order.

from pathlib import Path

import pytest

import dumpmask.operations as operations
from dumpmask import DumpMaskConfig, compare, mask, mask_stream, view
from dumpmask.core.exceptions import (
    InputNotFound,
    InsufficientInputs,
    InvalidFilename,
    InvalidLength,
    LengthExceedsInput,
)
from dumpmask.core.logging_layer import (
    EVENT_COMPARE_COMPLETED,
    EVENT_ERROR,
    EVENT_MASK_APPLIED,
    EVENT_VIEW_RENDERED,
    EventFilter,
    EventLogger,
)

_SENTINEL = bytes([0xEF, 0xBE, 0x0D, 0xD0])


# ---------------------------------------------------------------------------
# SHARED DATA
# ---------------------------------------------------------------------------

# Full 2 KiB reference image; no word equals the sentinel.
_FULL: bytes = bytes((i * 7 + 3) % 256 for i in range(2048))


def _partial_from(full: bytes) -> bytes:
    """What the extraction tool yields: the image with masked words unknown."""
    return mask_stream(full)


# ---------------------------------------------------------------------------
# CONTRACT: mask
# ---------------------------------------------------------------------------

class TestMask:

    def test_returns_bytes_without_output_path(self, make_dump):
        result = mask(make_dump("full.bin", _FULL))
        assert isinstance(result, bytes)
        assert len(result) == len(_FULL)
        assert result[:8] == _SENTINEL * 2

    def test_writes_output_file(self, make_dump, tmp_path):
        out = tmp_path / "masked.bin"
        result = mask(make_dump("full.bin", _FULL), out)
        assert result == out
        assert out.read_bytes() == mask_stream(_FULL)

    def test_input_file_unchanged(self, make_dump):
        path = make_dump("full.bin", _FULL)
        mask(path)
        assert path.read_bytes() == _FULL

    def test_missing_input(self, tmp_path):
        with pytest.raises(InputNotFound):
            mask(tmp_path / "missing.bin")

    def test_swap_config(self, make_dump):
        result = mask(make_dump("z.bin", bytes(512)), config=DumpMaskConfig(endianness_swap=True))
        assert result[:4] == bytes([0xD0, 0x0D, 0xBE, 0xEF])

    def test_logs_event(self, make_dump):
        logger = EventLogger()
        mask(make_dump("full.bin", _FULL), logger=logger)
        events = logger.query_events(EventFilter(event_type=EVENT_MASK_APPLIED))
        assert len(events) == 1
        assert events[0].data["size"] == 2048
        assert events[0].data["mcu_family"] == "stm32f1"

    def test_mask_stream_idempotent(self):
        once = mask_stream(_FULL)
        assert mask_stream(once) == once


# ---------------------------------------------------------------------------
# CONTRACT: view
# ---------------------------------------------------------------------------

class TestView:

    def test_view_file(self, make_dump):
        text = view(input_path=make_dump("z.bin", bytes(32)))
        assert text.splitlines()[1] == "00000010 00000000 00000000 00000000 00000000"

    def test_view_stream(self):
        text = view(stream=_SENTINEL + bytes(12))
        assert text == "00000000 ________ 00000000 00000000 00000000\n"

    def test_view_does_not_apply_layout(self):
        # Zero words inside masked runs are shown as they are.
        assert "________" not in view(stream=bytes(512))

    def test_both_sources_rejected(self, make_dump):
        with pytest.raises(ValueError):
            view(input_path=make_dump("z.bin", bytes(4)), stream=bytes(4))

    def test_no_source_rejected(self):
        with pytest.raises(ValueError):
            view()

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputNotFound):
            view(input_path=tmp_path / "missing.bin")

    def test_logs_event(self):
        logger = EventLogger()
        view(stream=bytes(16), logger=logger)
        assert logger.query_events(EventFilter(event_type=EVENT_VIEW_RENDERED))[0].data["size"] == 16


# ---------------------------------------------------------------------------
# CONTRACT: compare
# ---------------------------------------------------------------------------

class TestCompare:

    def test_partial_dump_matches_full_image(self, make_dump):
        primary = make_dump("partial.bin", _partial_from(_FULL))
        reference = make_dump("full.bin", _FULL)
        report = compare(primary, [reference])
        assert report.any_mismatch is False
        assert report.effective_length == 2048

    def test_unmasked_partial_matches_full_image(self, make_dump):
        # Inputs are masked before comparison.
        report = compare(make_dump("a.bin", _FULL), [make_dump("b.bin", _FULL)])
        assert report.any_mismatch is False
        assert report.wildcard_words == 4 * 8

    def test_single_difference_reported(self, make_dump):
        partial = bytearray(_partial_from(_FULL))
        partial[600:604] = b"\x00\x00\x00\x00"
        report = compare(make_dump("partial.bin", bytes(partial)), [make_dump("full.bin", _FULL)])
        assert len(report.mismatches) == 1
        assert report.mismatches[0].offset == 600

    def test_unknown_word_in_partial_is_wildcard(self, make_dump):
        partial = bytearray(_partial_from(_FULL))
        partial[600:604] = _SENTINEL
        report = compare(make_dump("partial.bin", bytes(partial)), [make_dump("full.bin", _FULL)])
        assert report.any_mismatch is False

    def test_stop_at_first(self, make_dump):
        partial = bytearray(_FULL)
        partial[600:604] = b"\x00" * 4
        partial[1200:1204] = b"\x00" * 4
        report = compare(
            make_dump("p.bin", bytes(partial)),
            [make_dump("f.bin", _FULL)],
            stop_at_first=True,
        )
        assert [r.offset for r in report.mismatches] == [600]

    def test_three_inputs(self, make_dump):
        third = bytearray(_FULL)
        third[700:704] = b"\x01\x02\x03\x04"
        report = compare(
            make_dump("a.bin", _FULL),
            [make_dump("b.bin", _FULL), make_dump("c.bin", bytes(third))],
        )
        assert [(r.stream_i, r.stream_j) for r in report.mismatches] == [(0, 2), (1, 2)]

    def test_length_kb_from_config(self, make_dump):
        other = bytearray(_FULL)
        other[1500:1504] = b"\x00" * 4
        report = compare(
            make_dump("a.bin", _FULL),
            [make_dump("b.bin", bytes(other))],
            config=DumpMaskConfig(length_kb=1),
        )
        assert report.any_mismatch is False
        assert report.effective_length == 1024

    def test_length_exceeds_input(self, make_dump):
        with pytest.raises(LengthExceedsInput):
            compare(
                make_dump("a.bin", _FULL),
                [make_dump("b.bin", _FULL[:1024])],
                config=DumpMaskConfig(length_kb=2),
            )

    def test_single_input(self, make_dump):
        with pytest.raises(InsufficientInputs):
            compare(make_dump("a.bin", _FULL), [])

    def test_whitespace_checked_before_reading(self, tmp_path):
        # Neither file exists: the name check must fire first.
        with pytest.raises(InvalidFilename):
            compare(tmp_path / "a.bin", [tmp_path / "my dump.bin"])

    def test_missing_other_file(self, make_dump, tmp_path):
        with pytest.raises(InputNotFound):
            compare(make_dump("a.bin", _FULL), [tmp_path / "missing.bin"])

    def test_logs_completed_event(self, make_dump):
        logger = EventLogger()
        compare(make_dump("a.bin", _FULL), [make_dump("b.bin", _FULL)], logger=logger)
        events = logger.query_events(EventFilter(event_type=EVENT_COMPARE_COMPLETED))
        assert events[0].data["mismatches"] == 0
        assert events[0].data["inputs"] == 2

    def test_logs_error_event(self, make_dump):
        logger = EventLogger()
        with pytest.raises(InsufficientInputs):
            compare(make_dump("a.bin", _FULL), [], logger=logger)
        events = logger.query_events(EventFilter(event_type=EVENT_ERROR))
        assert events[0].data["error"] == "InsufficientInputs"
        assert events[0].data["operation"] == "compare"

    def test_accepts_str_paths(self, make_dump):
        a = str(make_dump("a.bin", _FULL))
        b = str(make_dump("b.bin", _FULL))
        assert compare(a, [b]).stream_names == (a, b)


# ---------------------------------------------------------------------------
# CONTRACT: compare validates length before masking any input
# ---------------------------------------------------------------------------

class TestCompareValidationOrder:

    @pytest.fixture
    def mask_calls(self, monkeypatch):
        calls = []
        real = operations.apply_mask

        def _counting(data, pattern, layout):
            calls.append(len(data))
            return real(data, pattern, layout)

        monkeypatch.setattr(operations, "apply_mask", _counting)
        return calls

    def test_explicit_length_exceeds_input(self, make_dump, mask_calls):
        with pytest.raises(LengthExceedsInput):
            compare(
                make_dump("a.bin", bytes(4096)),
                [make_dump("b.bin", bytes(1024))],
                config=DumpMaskConfig(length_kb=4),
            )
        assert mask_calls == []

    def test_implicit_length_below_one_block(self, make_dump, mask_calls):
        with pytest.raises(InvalidLength):
            compare(make_dump("a.bin", bytes(4096)), [make_dump("b.bin", bytes(100))])
        assert mask_calls == []

    def test_valid_length_masks_every_input(self, make_dump, mask_calls):
        compare(make_dump("a.bin", _FULL), [make_dump("b.bin", _FULL)])
        assert mask_calls == [2048, 2048]
