"""Compiler invocation parameters for a single package.

Flags are taken from the package's own settings only. Include directories
are the one thing that propagates through the dependency graph: a
dependency's public headers must be visible to its consumers, but its
compiler flags must not leak into their builds.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class CompilerInfo:
    """
    Immutable compiler parameters assembled for one package.

    Attributes:
        cflags: Compile flags
        lflags: Link flags
        aflags: Assembler flags
        includes: Include directories, private ones first
    """

    cflags: tuple[str, ...] = ()
    lflags: tuple[str, ...] = ()
    aflags: tuple[str, ...] = ()
    includes: tuple[str, ...] = ()

    def include_flags(self) -> list[str]:
        """Return the include directories as -I compiler arguments."""
        return [f"-I{path}" for path in self.includes]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "cflags": list(self.cflags),
            "lflags": list(self.lflags),
            "aflags": list(self.aflags),
            "includes": list(self.includes),
        }
