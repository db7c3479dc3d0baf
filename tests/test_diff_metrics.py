"""Tests for the unified diff tokenizer."""

from __future__ import annotations

import pytest

from diffspine.diff_metrics import is_changed_line, parse_diff_metrics, split_lines


def _diff(files: list[tuple[str, str, list[str]]]) -> str:
    return "\n".join(
        f"diff --git a/{src} b/{dst}\n--- a/{src}\n+++ b/{dst}\n" + "\n".join(lines)
        for src, dst, lines in files
    )


class TestEmptyInput:
    def test_empty_string(self) -> None:
        metrics = parse_diff_metrics("")
        assert metrics.touched_files == []
        assert metrics.changed_line_count == 0

    def test_whitespace_only(self) -> None:
        metrics = parse_diff_metrics("   \n\n  \t")
        assert metrics.touched_files == []
        assert metrics.changed_line_count == 0

    def test_no_recognizable_headers(self) -> None:
        metrics = parse_diff_metrics("just some text\nwith no diff markers")
        assert metrics.touched_files == []
        assert metrics.changed_line_count == 0


class TestTouchedFiles:
    def test_single_file(self) -> None:
        metrics = parse_diff_metrics(_diff([("src/foo.ts", "src/foo.ts", ["+const x = 1;"])]))
        assert metrics.touched_files == ["src/foo.ts"]

    def test_header_and_marker_collapse(self) -> None:
        diff = "diff --git a/a.ts b/a.ts\n--- a/a.ts\n+++ b/a.ts\n+x"
        assert parse_diff_metrics(diff).touched_files == ["a.ts"]

    def test_insertion_order_preserved(self) -> None:
        diff = _diff([
            ("src/c.ts", "src/c.ts", ["+c"]),
            ("src/a.ts", "src/a.ts", ["+a"]),
            ("src/b.ts", "src/b.ts", ["+b"]),
        ])
        assert parse_diff_metrics(diff).touched_files == ["src/c.ts", "src/a.ts", "src/b.ts"]

    def test_no_duplicates(self) -> None:
        diff = _diff([
            ("src/a.ts", "src/a.ts", ["+a"]),
            ("src/a.ts", "src/a.ts", ["+again"]),
        ])
        files = parse_diff_metrics(diff).touched_files
        assert files == ["src/a.ts"]
        assert len(files) == len(set(files))

    def test_rename_records_destination_only(self) -> None:
        diff = "\n".join([
            "diff --git a/src/legacy.ts b/src/core/legacy.ts",
            "similarity index 100%",
            "rename from src/legacy.ts",
            "rename to src/core/legacy.ts",
            "--- a/src/legacy.ts",
            "+++ b/src/core/legacy.ts",
            "@@ -1,2 +1,2 @@",
            "-export const legacy = 1;",
            "+export const legacy = 2;",
        ])
        metrics = parse_diff_metrics(diff)
        assert metrics.touched_files == ["src/core/legacy.ts"]
        assert metrics.changed_line_count == 2

    def test_binary_file_registered_with_zero_lines(self) -> None:
        diff = (
            "diff --git a/assets/logo.png b/assets/logo.png\n"
            "Binary files a/assets/logo.png and b/assets/logo.png differ"
        )
        metrics = parse_diff_metrics(diff)
        assert metrics.touched_files == ["assets/logo.png"]
        assert metrics.changed_line_count == 0

    def test_target_marker_without_git_header(self) -> None:
        diff = "--- a/lib/x.py\n+++ b/lib/x.py\n@@ -1 +1 @@\n-a\n+b"
        metrics = parse_diff_metrics(diff)
        assert metrics.touched_files == ["lib/x.py"]
        assert metrics.changed_line_count == 2

    def test_deleted_file_uses_git_header(self) -> None:
        diff = "\n".join([
            "diff --git a/old_module.py b/old_module.py",
            "deleted file mode 100644",
            "--- a/old_module.py",
            "+++ /dev/null",
            "@@ -1,2 +0,0 @@",
            "-def obsolete():",
            "-    pass",
        ])
        metrics = parse_diff_metrics(diff)
        assert metrics.touched_files == ["old_module.py"]
        assert metrics.changed_line_count == 2


class TestChangedLineCount:
    def test_counts_additions_and_deletions(self) -> None:
        diff = _diff([("src/a.ts", "src/a.ts", ["+a", "-b", "+c", " context"])])
        assert parse_diff_metrics(diff).changed_line_count == 3

    def test_markers_not_counted(self) -> None:
        diff = _diff([("src/a.ts", "src/a.ts", [])])
        assert parse_diff_metrics(diff).changed_line_count == 0

    def test_hunk_headers_not_counted(self) -> None:
        diff = _diff([("a.py", "a.py", ["@@ -1,3 +1,3 @@", " same", "-old", "+new"])])
        assert parse_diff_metrics(diff).changed_line_count == 2

    def test_crlf_line_endings(self) -> None:
        diff = "diff --git a/a.ts b/a.ts\r\n--- a/a.ts\r\n+++ b/a.ts\r\n+x\r\n-y\r\n"
        metrics = parse_diff_metrics(diff)
        assert metrics.touched_files == ["a.ts"]
        assert metrics.changed_line_count == 2

    def test_large_diff(self) -> None:
        lines = [f"+const x{i} = {i};" for i in range(500)] + [f"-const old{i} = {i};" for i in range(500)]
        metrics = parse_diff_metrics(_diff([("src/big.ts", "src/big.ts", lines)]))
        assert metrics.changed_line_count == 1000
        assert metrics.touched_files == ["src/big.ts"]

    def test_lines_are_kept(self) -> None:
        diff = "a\nb\r\nc"
        assert parse_diff_metrics(diff).lines == ["a", "b", "c"]


class TestHelpers:
    @pytest.mark.parametrize("line,expected", [
        ("+added", True),
        ("-removed", True),
        ("+", True),
        ("+++ b/file", False),
        ("--- a/file", False),
        (" context", False),
        ("@@ -1 +1 @@", False),
        ("", False),
    ])
    def test_is_changed_line(self, line: str, expected: bool) -> None:
        assert is_changed_line(line) is expected

    def test_split_lines_mixed_endings(self) -> None:
        assert split_lines("a\r\nb\nc") == ["a", "b", "c"]
