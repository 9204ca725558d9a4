"""Tests for pdc output parsing."""

from __future__ import annotations

from playdate_dev.core.pdc_parser import parse_pdc_output


class TestParsePdcOutput:
    def test_error_line(self) -> None:
        errors, warnings = parse_pdc_output("source/main.lua:23: unexpected symbol near 'end'")
        assert warnings == []
        assert len(errors) == 1
        assert errors[0].file == "source/main.lua"
        assert errors[0].line == 23
        assert errors[0].message == "unexpected symbol near 'end'"
        assert errors[0].severity == "error"

    def test_warning_line(self) -> None:
        errors, warnings = parse_pdc_output("source/main.lua:5: warning: unused variable 'x'")
        assert errors == []
        assert len(warnings) == 1
        assert warnings[0].line == 5
        assert warnings[0].message == "warning: unused variable 'x'"
        assert warnings[0].severity == "warning"

    def test_warning_match_is_case_insensitive(self) -> None:
        _, warnings = parse_pdc_output("a.lua:1: WARNING deprecated call")
        assert len(warnings) == 1

    def test_message_mentioning_warning_is_classified_as_warning(self) -> None:
        errors, warnings = parse_pdc_output("a.lua:9: attempt to index nil 'warningLabel'")
        assert errors == []
        assert len(warnings) == 1

    def test_unparseable_lines_are_ignored(self) -> None:
        output = "Compiling...\n\nsource/main.lua:1: boom\nDone in 0.3s\n"
        errors, warnings = parse_pdc_output(output)
        assert [e.message for e in errors] == ["boom"]
        assert warnings == []

    def test_empty_output(self) -> None:
        assert parse_pdc_output("") == ([], [])

    def test_file_part_may_contain_colons(self) -> None:
        errors, _ = parse_pdc_output("C:/game/source/main.lua:12: bad argument")
        assert errors[0].file == "C:/game/source/main.lua"
        assert errors[0].line == 12

    def test_preserves_order(self) -> None:
        output = "a.lua:1: first\nb.lua:2: warning: second\nc.lua:3: third"
        errors, warnings = parse_pdc_output(output)
        assert [e.file for e in errors] == ["a.lua", "c.lua"]
        assert [w.file for w in warnings] == ["b.lua"]

    def test_message_is_trimmed(self) -> None:
        errors, _ = parse_pdc_output("a.lua:4:   spaced out   ")
        assert errors[0].message == "spaced out"
