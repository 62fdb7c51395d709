"""Project-wide package registry and dependency resolver."""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from ..errors import DependencyResolutionError
from .dependency import Dependency
from .package import SourcePackage

logger = logging.getLogger(__name__)


class PackageRegistry:
    """Maps (repository, package name) pairs to source packages.

    Usage:
        registry = PackageRegistry()
        registry.add(SourcePackage("hw/hal", "repos/core/hw/hal", repo="core"))
        pkg = registry.resolve_dependency(Dependency("core", "hw/hal"))
    """

    def __init__(self, packages: Optional[List[SourcePackage]] = None) -> None:
        self._packages: Dict[Tuple[str, str], SourcePackage] = {}
        for package in packages or []:
            self.add(package)

    def add(self, package: SourcePackage) -> None:
        """Register a package.

        Raises:
            ValueError: If a package with the same repo and name already exists.
        """
        key = (package.repo, package.name)
        if key in self._packages:
            raise ValueError(f"Duplicate package: {package.full_name}")
        self._packages[key] = package
        logger.debug(f"Registered package {package.full_name}")

    def find(self, repo: str, name: str) -> Optional[SourcePackage]:
        return self._packages.get((repo, name))

    def resolve_dependency(self, dep: Dependency, package_name: Optional[str] = None) -> SourcePackage:
        """Resolve a dependency to its source package.

        Args:
            dep: Dependency to resolve
            package_name: Name of the package declaring the dependency, for error context

        Returns:
            The matching SourcePackage

        Raises:
            DependencyResolutionError: If no registered package matches.
        """
        package = self._packages.get((dep.repo, dep.name))
        if package is None:
            raise DependencyResolutionError(str(dep), package_name)
        return package

    def __iter__(self) -> Iterator[SourcePackage]:
        return iter(self._packages.values())

    def __len__(self) -> int:
        return len(self._packages)
