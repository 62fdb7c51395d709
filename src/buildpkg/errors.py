"""Exceptions raised while resolving a package set.

Every error carries enough context (package name, offending dependency or
capability) for the user to find the manifest entry at fault. Nothing in
buildpkg retries or swallows these; they propagate to whoever drives the
resolution session.
"""

from typing import Optional, Sequence


class ResolutionError(Exception):
    """Base class for all package resolution errors."""

    pass


class SettingsError(ResolutionError):
    """Raised when package settings contain a value of the wrong type."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Invalid setting '{key}': {message}")


class MalformedDependencyError(ResolutionError):
    """Raised when a dependency string cannot be parsed."""

    def __init__(self, dep_str: str, reason: str, package_name: Optional[str] = None):
        self.dep_str = dep_str
        self.package_name = package_name
        where = f" (declared by {package_name})" if package_name else ""
        super().__init__(f"Malformed dependency '{dep_str}'{where}: {reason}")


class DependencyResolutionError(ResolutionError):
    """Raised when the registry has no package matching a dependency."""

    def __init__(self, dep_str: str, package_name: Optional[str] = None):
        self.dep_str = dep_str
        self.package_name = package_name
        where = f" (declared by {package_name})" if package_name else ""
        super().__init__(f"Could not resolve package dependency {dep_str}{where}")


class PackageNotRegisteredError(ResolutionError):
    """Raised when a resolved package has no BuildPackage in the builder.

    Indicates an inconsistent build graph: every dependency is registered
    during dependency discovery, so this should not happen in practice.
    """

    def __init__(self, package_name: str):
        self.package_name = package_name
        super().__init__(f"Package not found ({package_name})")


class PackageNotLoadedError(ResolutionError):
    """Raised when compiler info is requested before a package is loaded."""

    def __init__(self, package_name: str):
        self.package_name = package_name
        super().__init__(f"Package {package_name} must be loaded before compiler info is fetched")


class CapabilityConflictError(ResolutionError):
    """Raised when two packages export the same capability."""

    def __init__(self, capability: str, first: str, second: str):
        self.capability = capability
        self.packages = (first, second)
        super().__init__(f"Capability conflict: {capability} ({first} <-> {second})")


class MissingCapabilityError(ResolutionError):
    """Raised when required capabilities are not exported by any package."""

    def __init__(self, missing: Sequence[tuple[str, str]]):
        # (capability, requesting package) pairs
        self.missing = list(missing)
        lines = [f"    Required capability {cap} not satisfied (requested by {pkg})" for cap, pkg in self.missing]
        super().__init__("Unsatisfied capabilities detected:\n" + "\n".join(lines))


class SessionNotResolvedError(ResolutionError):
    """Raised when whole-build results are requested before resolve() completes."""

    def __init__(self, target_name: str):
        self.target_name = target_name
        super().__init__(f"Packages for target {target_name} must be resolved before compiler info is fetched")
