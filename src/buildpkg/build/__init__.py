"""Build-time package resolution: BuildPackage, Builder, and CompilerInfo."""

from .build_package import TEST_FEATURE, BuildPackage
from .builder import Builder
from .compiler_info import CompilerInfo
from .report import print_resolution_report, render_resolution_report, render_resolution_table
from .target import Target

__all__ = [
    "TEST_FEATURE",
    "BuildPackage",
    "Builder",
    "CompilerInfo",
    "Target",
    "print_resolution_report",
    "render_resolution_report",
    "render_resolution_table",
]
