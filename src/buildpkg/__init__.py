"""buildpkg - package resolution core for embedded builds.

Resolves features and dependencies across a package set to a fixed point,
then assembles per-package compiler parameters.
"""

from buildpkg.build import Builder, BuildPackage, CompilerInfo, Target
from buildpkg.config import PackageSettings, get_string_slice_features
from buildpkg.errors import (
    CapabilityConflictError,
    DependencyResolutionError,
    MalformedDependencyError,
    MissingCapabilityError,
    PackageNotLoadedError,
    PackageNotRegisteredError,
    ResolutionError,
    SessionNotResolvedError,
    SettingsError,
)
from buildpkg.packages import Dependency, PackageRegistry, SourcePackage, parse_dependency

__version__ = "0.1.0"

__all__ = [
    "BuildPackage",
    "Builder",
    "CapabilityConflictError",
    "CompilerInfo",
    "Dependency",
    "DependencyResolutionError",
    "MalformedDependencyError",
    "MissingCapabilityError",
    "PackageNotLoadedError",
    "PackageNotRegisteredError",
    "PackageRegistry",
    "PackageSettings",
    "ResolutionError",
    "SessionNotResolvedError",
    "SettingsError",
    "SourcePackage",
    "Target",
    "__version__",
    "parse_dependency",
]
