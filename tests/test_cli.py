# tests/test_cli.py
# Command-line entry point: dumpmask.run_dumpmask.main
# Every invocation ends in SystemExit; the exit code is the contract.

import io
import json
import types

import pytest

from dumpmask.run_dumpmask import format_report, main
from dumpmask.compare.data_models.mismatch_report import MismatchRecord, MismatchReport

_SENTINEL = bytes([0xEF, 0xBE, 0x0D, 0xD0])
_FULL = bytes((i * 7 + 3) % 256 for i in range(2048))


def _exit_code(argv) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestView:

    def test_view_file(self, make_dump, capsys):
        path = make_dump("z.bin", _SENTINEL + bytes(12))
        assert _exit_code(["view", str(path)]) == 0
        assert capsys.readouterr().out == "00000000 ________ 00000000 00000000 00000000\n"

    def test_view_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", types.SimpleNamespace(buffer=io.BytesIO(bytes(16))))
        assert _exit_code(["view"]) == 0
        assert capsys.readouterr().out.startswith("00000000 00000000")

    def test_view_custom_pattern(self, make_dump, capsys):
        path = make_dump("z.bin", bytes([0xBE, 0xBA, 0xFE, 0xCA]))
        assert _exit_code(["view", "--pattern", "cafebabe", str(path)]) == 0
        assert "________" in capsys.readouterr().out

    def test_view_missing_file(self, tmp_path, capsys):
        assert _exit_code(["view", str(tmp_path / "missing.bin")]) == 2
        err = capsys.readouterr().err
        assert "InputNotFound" in err
        assert "missing.bin" in err


class TestMask:

    def test_mask_to_file(self, make_dump, tmp_path):
        src = make_dump("full.bin", _FULL)
        out = tmp_path / "masked.bin"
        assert _exit_code(["mask", str(src), "-o", str(out)]) == 0
        masked = out.read_bytes()
        assert len(masked) == len(_FULL)
        assert masked[:8] == _SENTINEL * 2

    def test_mask_to_stdout(self, make_dump, capsysbinary):
        src = make_dump("z.bin", bytes(512))
        assert _exit_code(["mask", str(src)]) == 0
        out = capsysbinary.readouterr().out
        assert len(out) == 512
        assert out[:8] == _SENTINEL * 2

    def test_mask_stdin_to_file(self, monkeypatch, tmp_path):
        monkeypatch.setattr("sys.stdin", types.SimpleNamespace(buffer=io.BytesIO(bytes(512))))
        out = tmp_path / "masked.bin"
        assert _exit_code(["mask", "-o", str(out)]) == 0
        assert out.read_bytes()[28:44] == _SENTINEL * 4

    def test_mask_swap(self, make_dump, tmp_path):
        src = make_dump("z.bin", bytes(512))
        out = tmp_path / "masked.bin"
        assert _exit_code(["mask", "--swap", str(src), "-o", str(out)]) == 0
        assert out.read_bytes()[:4] == bytes([0xD0, 0x0D, 0xBE, 0xEF])

    def test_unsupported_mcu(self, make_dump, capsys):
        src = make_dump("z.bin", bytes(512))
        assert _exit_code(["mask", "--mcu", "stm32f4", str(src)]) == 3
        assert "UnsupportedMcuFamily" in capsys.readouterr().err

    def test_bad_pattern(self, make_dump, capsys):
        src = make_dump("z.bin", bytes(512))
        assert _exit_code(["mask", "--pattern", "beef", str(src)]) == 3
        assert "InvalidPatternFormat" in capsys.readouterr().err


class TestCompare:

    def test_match(self, make_dump, capsys):
        a = make_dump("a.bin", _FULL)
        b = make_dump("b.bin", _FULL)
        assert _exit_code(["compare", str(a), str(b)]) == 0
        assert "COMPARE RESULT: MATCH" in capsys.readouterr().out

    def test_mismatch(self, make_dump, capsys):
        other = bytearray(_FULL)
        other[600:604] = b"\x00" * 4
        a = make_dump("a.bin", _FULL)
        b = make_dump("b.bin", bytes(other))
        assert _exit_code(["compare", str(a), str(b)]) == 1
        out = capsys.readouterr().out
        assert out.splitlines()[0].startswith("00000258 ")
        assert "MISMATCH (1)" in out

    def test_first_flag(self, make_dump, capsys):
        other = bytearray(_FULL)
        other[600:604] = b"\x00" * 4
        other[1200:1204] = b"\x00" * 4
        a = make_dump("a.bin", _FULL)
        b = make_dump("b.bin", bytes(other))
        assert _exit_code(["compare", "--first", str(a), str(b)]) == 1
        assert "stopped at first" in capsys.readouterr().out

    def test_single_file(self, make_dump, capsys):
        a = make_dump("a.bin", _FULL)
        assert _exit_code(["compare", str(a)]) == 2
        assert "InsufficientInputs" in capsys.readouterr().err

    def test_no_files(self, capsys):
        assert _exit_code(["compare"]) == 2
        assert "InsufficientInputs" in capsys.readouterr().err

    def test_whitespace_filename(self, make_dump, capsys):
        a = make_dump("a.bin", _FULL)
        b = make_dump("b c.bin", _FULL)
        assert _exit_code(["compare", str(a), str(b)]) == 2
        assert "InvalidFilename" in capsys.readouterr().err

    def test_length_zero(self, make_dump, capsys):
        a = make_dump("a.bin", _FULL)
        b = make_dump("b.bin", _FULL)
        assert _exit_code(["compare", "--length", "0", str(a), str(b)]) == 3
        assert "InvalidLength" in capsys.readouterr().err

    def test_length_exceeds(self, make_dump, capsys):
        a = make_dump("a.bin", _FULL)
        b = make_dump("b.bin", _FULL)
        assert _exit_code(["compare", "--length", "4", str(a), str(b)]) == 2
        assert "LengthExceedsInput" in capsys.readouterr().err

    def test_report_written(self, make_dump, tmp_path):
        a = make_dump("a.bin", _FULL)
        b = make_dump("b.bin", _FULL)
        report_path = tmp_path / "report.json"
        assert _exit_code(["compare", str(a), str(b), "--report", str(report_path)]) == 0
        payload = json.loads(report_path.read_text(encoding="utf-8"))
        assert payload["any_mismatch"] is False
        assert payload["stream_names"] == [str(a), str(b)]

    def test_log_events(self, make_dump, capsys):
        a = make_dump("a.bin", _FULL)
        b = make_dump("b.bin", _FULL)
        assert _exit_code(["compare", "--log-events", str(a), str(b)]) == 0
        err = capsys.readouterr().err
        assert "EVT-0000000000000001" in err
        assert "COMPARE_COMPLETED" in err

    def test_log_events_on_failure(self, make_dump, capsys):
        a = make_dump("a.bin", _FULL)
        assert _exit_code(["compare", "--log-events", str(a), "missing.bin"]) == 2
        err = capsys.readouterr().err
        assert "ERROR" in err
        assert "InputNotFound" in err


class TestFormatReport:

    def test_match_line(self):
        report = MismatchReport(
            any_mismatch=False, mismatches=(), stream_names=("a", "b"),
            effective_length=512, words_compared=128, wildcard_words=8,
        )
        assert format_report(report) == (
            "COMPARE RESULT: MATCH  bytes=512 words=128 wildcards=8\n"
        )

    def test_mismatch_lines(self):
        report = MismatchReport(
            any_mismatch=True,
            mismatches=(MismatchRecord(80, 0, 1, 0x11111111, 0x12345678),),
            stream_names=("a", "b"),
            effective_length=512, words_compared=128, wildcard_words=8,
        )
        assert format_report(report).splitlines()[0] == "00000050 a=11111111 b=12345678"
