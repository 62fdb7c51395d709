"""Unit tests for the Rich resolution report.

Output is captured by rendering into a Rich Console backed by StringIO.
"""

from io import StringIO

from rich.console import Console

from buildpkg.build.report import print_resolution_report, render_resolution_table


def _render(builder) -> str:
    stream = StringIO()
    console = Console(file=stream, width=200, force_terminal=False, color_system=None)
    print_resolution_report(builder, console=console)
    return stream.getvalue()


class TestResolutionReport:
    def test_table_has_one_row_per_package(self, builder, make_package):
        make_package("hw/hal")
        builder.add_package(make_package("apps/blinky", {"pkg.deps": ["hw/hal"]}))
        builder.resolve()

        table = render_resolution_table(builder)
        assert table.row_count == 2
        assert [column.header for column in table.columns] == ["Package", "Loaded", "Dependencies", "Includes"]

    def test_report_contents(self, builder, make_package):
        make_package("hw/hal")
        builder.add_package(make_package("apps/blinky", {"pkg.features": ["SHELL"], "pkg.deps": ["hw/hal"]}))
        builder.resolve()

        text = _render(builder)

        assert "Target blinky (cortex_m4)" in text
        assert "@local/apps/blinky" in text
        assert "@local/hw/hal" in text
        assert "yes" in text
        assert "2 packages (2 loaded)" in text
        assert "Features: SHELL" in text

    def test_unloaded_packages(self, builder, make_package):
        """Before resolution packages show as not loaded, with no include count."""
        builder.add_package(make_package("hw/hal"))

        text = _render(builder)

        assert "no" in text
        assert "1 packages (0 loaded)" in text
        assert "Features: none" in text

    def test_mid_session_render_does_not_fix_compiler_info(self, builder, make_package):
        """Rendering before convergence leaves include paths open to later features."""
        a = builder.add_package(make_package("a"))
        builder.add_package(make_package("b", {"pkg.features": ["test"]}))
        assert a.load(builder)

        text = _render(builder)
        assert "2 packages (1 loaded)" in text

        builder.resolve()

        includes = a.full_compiler_info(builder).includes
        assert "/proj/a/src/test/" in includes
        assert "/proj/a/src/test/arch/cortex_m4/" in includes

    def test_include_counts_after_resolution(self, builder, make_package):
        builder.add_package(make_package("a"))
        builder.add_package(make_package("b", {"pkg.features": ["test"]}))
        builder.resolve()

        rows = [line.split() for line in _render(builder).splitlines() if line.strip().startswith("@local/")]
        # 4 private (test feature on) + 2 public include dirs each
        assert [row[-1] for row in rows] == ["6", "6"]
