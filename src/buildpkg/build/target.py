"""Build target descriptor."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Target:
    """
    The target a package set is being resolved for.

    Attributes:
        name: Target name (e.g. "blinky-nrf52")
        arch: CPU architecture directory name (e.g. "cortex_m4")
    """

    name: str
    arch: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Target":
        """
        Parse a target descriptor from a dictionary.

        Raises:
            ValueError: If required fields are missing or empty
        """
        try:
            name = data["name"]
            arch = data["arch"]
        except KeyError as e:
            raise ValueError(f"Missing required field in target config: {e}") from e
        if not arch:
            raise ValueError(f"Target {name} has no architecture")
        return cls(name=name, arch=arch)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "arch": self.arch}
