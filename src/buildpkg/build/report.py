"""Rich-based summary of a resolution session.

Renders one row per BuildPackage, in registration order:

    Package                 Loaded  Dependencies            Includes
    @local/apps/blinky      yes     @core/hw/hal, @core/... 6
    @core/hw/hal            yes     -                       4

followed by a footer with package and feature counts. Include counts are
shown only after the session has resolved; a report rendered mid-session
never fixes a package's compiler info early.
"""

from typing import TYPE_CHECKING, Optional

from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from .build_package import BuildPackage
    from .builder import Builder


def _include_count(bpkg: "BuildPackage", builder: "Builder") -> str:
    # Compiler info is memoized, so it is only read once the session has converged.
    if not builder.resolved or not bpkg.loaded:
        return "-"
    return str(len(bpkg.full_compiler_info(builder).includes))


def render_resolution_table(builder: "Builder") -> Table:
    """Build the per-package table for a builder's current state."""
    table = Table(title=f"Target {builder.target.name} ({builder.target.arch})", show_edge=False)
    table.add_column("Package", style="bold")
    table.add_column("Loaded")
    table.add_column("Dependencies")
    table.add_column("Includes", justify="right")

    for bpkg in builder.build_packages():
        loaded = Text("yes", style="green") if bpkg.loaded else Text("no", style="yellow")
        deps = ", ".join(str(dep) for dep in bpkg.deps) or "-"
        table.add_row(bpkg.name, loaded, deps, _include_count(bpkg, builder))

    return table


def render_resolution_report(builder: "Builder") -> Group:
    """Build the full report: package table plus summary footer."""
    packages = builder.build_packages()
    loaded = sum(1 for bpkg in packages if bpkg.loaded)
    features = ", ".join(sorted(builder.features())) or "none"

    footer = Text()
    footer.append(f"{len(packages)} packages", style="bold")
    footer.append(f" ({loaded} loaded)  ")
    footer.append("Features: ", style="bold")
    footer.append(features)

    return Group(render_resolution_table(builder), footer)


def print_resolution_report(builder: "Builder", console: Optional[Console] = None) -> None:
    """Print the resolution report to a Rich console (stdout by default)."""
    console = console if console is not None else Console()
    console.print(render_resolution_report(builder))
