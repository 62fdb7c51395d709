"""Dependency descriptors.

A dependency string names a package, optionally qualified by the
repository it lives in:

    sys/console                  -> package in the declaring package's repo
    @apache-mynewt-core/hw/hal   -> package "hw/hal" in repo "apache-mynewt-core"
"""

from dataclasses import dataclass
from typing import Optional

from ..errors import MalformedDependencyError

REPO_NAME_LOCAL = "local"


@dataclass(frozen=True)
class Dependency:
    """Reference to another package, compared by (repo, name)."""

    repo: str
    name: str

    def __str__(self) -> str:
        return f"@{self.repo}/{self.name}"


def parse_dependency(dep_str: str, parent_repo: Optional[str] = None, package_name: Optional[str] = None) -> Dependency:
    """
    Parse a dependency string into a Dependency.

    Args:
        dep_str: Dependency string from a package manifest
        parent_repo: Repository of the declaring package, used when the
            string is not repository-qualified (defaults to "local")
        package_name: Name of the declaring package, for error context

    Returns:
        Parsed Dependency

    Raises:
        MalformedDependencyError: If the string is empty, contains whitespace,
            or has an empty repository or package component
    """
    if not dep_str:
        raise MalformedDependencyError(dep_str, "empty dependency", package_name)
    if any(c.isspace() for c in dep_str):
        raise MalformedDependencyError(dep_str, "whitespace not allowed", package_name)

    parts = dep_str.split("/")
    if parts[0].startswith("@"):
        repo = parts[0][1:]
        if not repo:
            raise MalformedDependencyError(dep_str, "repository name is empty", package_name)
        if len(parts) < 2:
            raise MalformedDependencyError(dep_str, "package name not provided", package_name)
        parts = parts[1:]
    else:
        repo = parent_repo or REPO_NAME_LOCAL

    if any(not p for p in parts):
        raise MalformedDependencyError(dep_str, "empty path component", package_name)

    return Dependency(repo=repo, name="/".join(parts))
