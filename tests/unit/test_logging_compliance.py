"""Unit tests for logging compliance across the codebase.

Production code reports through the logging module or buildpkg.output,
never through bare print() calls.
"""

import re
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).parent.parent.parent / "src" / "buildpkg"


def _source_files() -> list[Path]:
    return [p for p in SRC_DIR.rglob("*.py") if "__pycache__" not in p.parts]


class TestLoggingCompliance:
    """Test cases for logging vs print statement compliance."""

    def test_source_tree_found(self):
        assert SRC_DIR.exists(), f"Source directory not found: {SRC_DIR}"
        assert len(_source_files()) > 0, "No Python files found in src/buildpkg"

    def test_no_print_statements_in_production_code(self):
        """Verify no print() calls exist in library code."""
        violations = []

        for file_path in _source_files():
            lines = file_path.read_text(encoding="utf-8").split("\n")
            for line_num, line in enumerate(lines, start=1):
                if line.strip().startswith("#"):
                    continue
                if re.search(r"(?<![\w.])print\s*\(", line):
                    violations.append(f"{file_path}:{line_num}: {line.strip()}")

        if violations:
            violation_report = "\n".join(violations)
            pytest.fail(f"Found {len(violations)} print() statements in production code:\n{violation_report}\n\nUse logging or buildpkg.output instead.")

    def test_module_loggers_are_named(self):
        """Files that log through `logger` create it with logging.getLogger(__name__)."""
        missing = []

        for file_path in _source_files():
            content = file_path.read_text(encoding="utf-8")
            if re.search(r"\blogger\.(debug|info|warning|error)\(", content):
                if "logger = logging.getLogger(__name__)" not in content:
                    missing.append(str(file_path))

        if missing:
            pytest.fail("Files using logger without logging.getLogger(__name__):\n" + "\n".join(missing))
