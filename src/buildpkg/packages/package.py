"""Source packages as known to the project registry."""

import posixpath
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Union

from ..config.settings import PackageSettings
from .dependency import REPO_NAME_LOCAL


@dataclass(eq=False)
class SourcePackage:
    """
    A package on disk: its name, location, and manifest settings.

    Source packages are shared by every resolution session over the same
    registry, so they hold no resolution state; dependencies and
    capabilities discovered during a build live on the BuildPackage.

    Instances hash and compare by identity so they can key the builder's
    package map even when two packages happen to share a name.

    Attributes:
        name: Package path within its repository (e.g. "hw/hal")
        base_path: Directory holding the package (include/, src/, ...)
        settings: Feature-conditioned manifest settings
        repo: Repository the package belongs to
    """

    name: str
    base_path: Union[str, PurePath]
    settings: PackageSettings = field(default_factory=PackageSettings)
    repo: str = REPO_NAME_LOCAL

    @property
    def full_name(self) -> str:
        """Repository-qualified name, e.g. "@local/hw/hal"."""
        return f"@{self.repo}/{self.name}"

    @property
    def base_name(self) -> str:
        """Last path component of the package name."""
        return posixpath.basename(self.name)

    @property
    def base_dir(self) -> str:
        """Base path in forward-slash form, without a trailing slash."""
        return PurePath(self.base_path).as_posix().rstrip("/")

    def __repr__(self) -> str:
        return f"SourcePackage({self.full_name!r})"
