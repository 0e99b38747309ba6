"""Tests for schedule file parsing and generation."""

import pytest

from utils.input_parser import InputError, InputParser


class TestParseLines:

    def test_accepts_prefixed_and_bare_numbers(self):
        lines = ["P1,5\n", "2, 3\n", "p7 ,1\n"]
        assert InputParser.parse_lines(lines) == [(1, 5), (2, 3), (7, 1)]

    def test_skips_comments_and_blank_lines(self):
        lines = ["# header, with comma\n", "\n", "P1,5\n", "   \n", "P2,3\n"]
        assert InputParser.parse_lines(lines) == [(1, 5), (2, 3)]

    @pytest.mark.parametrize("line", ["P1;5", "P1,five", "P1,5,6", "Px,2", "P1,0", "P-2,4"])
    def test_malformed_line_rejected(self, line):
        with pytest.raises(InputError, match="1번째 줄"):
            InputParser.parse_lines([line])


class TestParseFile:

    def test_builds_table_in_file_order(self, schedule_file):
        table = InputParser.parse_file(str(schedule_file))
        assert [(p.number, p.total_burst, p.arrival_index) for p in table] == \
            [(1, 5, 0), (2, 3, 1), (3, 8, 2)]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            InputParser.parse_file(str(tmp_path / "nope.csv"))

    def test_empty_file_rejected(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("# nothing here\n", encoding="utf-8")
        with pytest.raises(InputError):
            InputParser.parse_file(str(path))

    def test_duplicate_numbers_rejected(self, tmp_path):
        path = tmp_path / "dup.csv"
        path.write_text("P1,2\nP1,3\n", encoding="utf-8")
        with pytest.raises(InputError, match="중복"):
            InputParser.parse_file(str(path))


class TestGeneration:

    def test_seeded_generation_is_reproducible(self):
        first = InputParser.generate_random_processes(6, max_burst=9, seed=42)
        second = InputParser.generate_random_processes(6, max_burst=9, seed=42)
        assert [p.total_burst for p in first] == [p.total_burst for p in second]
        assert [p.number for p in first] == list(range(1, 7))
        assert all(1 <= p.total_burst <= 9 for p in first)

    def test_save_then_parse(self, tmp_path, sample_table):
        path = tmp_path / "saved.csv"
        InputParser.save_processes_to_file(sample_table, str(path))
        assert "P2,3" in path.read_text(encoding="utf-8")
        table = InputParser.parse_file(str(path))
        assert [p.total_burst for p in table] == [5, 3, 8]

    @pytest.mark.parametrize("count", [0, -2])
    def test_non_positive_count_rejected(self, count):
        with pytest.raises(InputError):
            InputParser.generate_random_processes(count)


def test_non_utf8_file_rejected(tmp_path):
    path = tmp_path / "binary.csv"
    path.write_bytes(b"P1,5\n\xff\xfe,3\n")
    with pytest.raises(InputError, match="UTF-8"):
        InputParser.parse_file(str(path))
