"""Source packages, dependency descriptors, and the project registry."""

from .dependency import REPO_NAME_LOCAL, Dependency, parse_dependency
from .package import SourcePackage
from .registry import PackageRegistry

__all__ = [
    "REPO_NAME_LOCAL",
    "Dependency",
    "PackageRegistry",
    "SourcePackage",
    "parse_dependency",
]
