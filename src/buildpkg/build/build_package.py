"""Per-package resolution state.

A BuildPackage wraps a SourcePackage with what a single build needs to know
about it: whether its features and dependencies have settled, and the
compiler parameters assembled once they have.

Resolution is driven from outside (see Builder.resolve). Each call to
load() reads the currently enabled features, adds any features and
dependencies the package implies, and reports whether it found nothing new.
Features and dependencies are mutually recursive across the whole package
set, so a package that reports "not yet complete" is simply asked again on
the next pass.
"""

import logging
from typing import TYPE_CHECKING, AbstractSet, Dict, List, Optional, Tuple

from ..config.settings import (
    PKG_AFLAGS,
    PKG_CAPS,
    PKG_CFLAGS,
    PKG_DEPS,
    PKG_FEATURES,
    PKG_LFLAGS,
    PKG_REQ_CAPS,
    get_string_slice_features,
)
from ..errors import PackageNotLoadedError, PackageNotRegisteredError
from ..packages.dependency import Dependency, parse_dependency
from ..packages.package import SourcePackage
from .compiler_info import CompilerInfo

if TYPE_CHECKING:
    from .builder import Builder

logger = logging.getLogger(__name__)

TEST_FEATURE = "test"


class BuildPackage:
    """Build-specific resolution state for one source package.

    Attributes:
        pkg: The shared, read-only source package
        loaded: Whether features and dependencies have settled
        deps: Dependencies discovered so far, in discovery order
        apis: Capabilities this package exports
        req_apis: Capabilities this package requires
    """

    def __init__(self, pkg: SourcePackage) -> None:
        self.pkg = pkg
        self.loaded = False
        self.deps: List[Dependency] = []
        self.apis: List[str] = []
        self.req_apis: List[str] = []
        self._full_ci: Optional[CompilerInfo] = None

    @property
    def name(self) -> str:
        return self.pkg.full_name

    def __repr__(self) -> str:
        state = "loaded" if self.loaded else "unloaded"
        return f"BuildPackage({self.pkg.full_name!r}, {state})"

    def has_dep(self, dep: Dependency) -> bool:
        return dep in self.deps

    def add_dep(self, dep: Dependency) -> None:
        """Append a dependency; entries are never removed or reordered."""
        self.deps.append(dep)

    def add_api(self, api: str) -> None:
        if api not in self.apis:
            self.apis.append(api)

    def add_req_api(self, api: str) -> None:
        if api not in self.req_apis:
            self.req_apis.append(api)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def load_features(self, builder: "Builder") -> Tuple[AbstractSet[str], bool]:
        """Enable every feature this package declares that isn't on yet.

        Returns:
            Tuple of (feature snapshot, whether a new feature was added)
        """
        features = builder.features()
        found_new = False

        for feature in get_string_slice_features(self.pkg.settings, features, PKG_FEATURES):
            if not builder.feature_enabled(feature):
                logger.debug(f"{self.name} enables feature {feature}")
                builder.add_feature(feature)
                found_new = True

        if found_new:
            return builder.features(), True
        return features, False

    def load_deps(self, builder: "Builder", features: AbstractSet[str]) -> bool:
        """Record dependencies implied by the given features.

        Newly seen packages are registered with the builder.

        Returns:
            True if a dependency or package was added

        Raises:
            MalformedDependencyError: If a dependency string is invalid
            DependencyResolutionError: If a dependency matches no package
            PackageNotRegisteredError: If registration did not take effect
        """
        found_new = False

        for dep_str in get_string_slice_features(self.pkg.settings, features, PKG_DEPS):
            dep = parse_dependency(dep_str, self.pkg.repo, self.name)
            dpkg = builder.registry.resolve_dependency(dep, self.name)

            if dpkg not in builder.packages:
                builder.add_package(dpkg)
                found_new = True
                if dpkg not in builder.packages:
                    raise PackageNotRegisteredError(dpkg.full_name)

            if not self.has_dep(dep):
                logger.debug(f"{self.name} depends on {dep}")
                self.add_dep(dep)
                found_new = True

        return found_new

    def load(self, builder: "Builder") -> bool:
        """Run one resolution step.

        Returns:
            True once the package is fully loaded; False if new features or
            dependencies turned up and the package must be retried after the
            rest of the package set has had a chance to contribute.
        """
        if self.loaded:
            return True

        features, new_features = self.load_features(builder)
        new_deps = self.load_deps(builder, features)

        if new_features or new_deps:
            return False

        # Only reached once per package.
        for api in get_string_slice_features(self.pkg.settings, features, PKG_CAPS):
            self.add_api(api)
        for req_api in get_string_slice_features(self.pkg.settings, features, PKG_REQ_CAPS):
            self.add_req_api(req_api)

        self.loaded = True
        logger.debug(f"Loaded {self.name}")
        return True

    # ------------------------------------------------------------------
    # Dependency closure and include paths
    # ------------------------------------------------------------------

    def _dep_build_packages(self, builder: "Builder") -> List["BuildPackage"]:
        dbpkgs = []
        for dep in self.deps:
            dpkg = builder.registry.resolve_dependency(dep, self.name)
            dbpkg = builder.packages.get(dpkg)
            if dbpkg is None:
                raise PackageNotRegisteredError(dpkg.full_name)
            dbpkgs.append(dbpkg)
        return dbpkgs

    def collect_deps(self, builder: "Builder") -> List["BuildPackage"]:
        """Return this package and everything it transitively depends on.

        Each package appears once, in depth-first discovery order starting
        with this package. Dependency cycles are tolerated, and arbitrarily
        long dependency chains are walked without recursion.

        Raises:
            PackageNotRegisteredError: If a dependency has no BuildPackage
        """
        # Insertion-ordered visited set; keys are identity-hashed.
        seen: Dict[BuildPackage, None] = {}
        stack: List[BuildPackage] = [self]

        while stack:
            bpkg = stack.pop()
            if bpkg in seen:
                continue
            seen[bpkg] = None
            # Reversed so the first declared dependency is visited next.
            stack.extend(reversed(bpkg._dep_build_packages(builder)))

        return list(seen)

    def public_include_dirs(self, builder: "Builder") -> List[str]:
        base = self.pkg.base_dir
        arch = builder.target.arch
        return [
            f"{base}/include/",
            f"{base}/include/{self.pkg.base_name}/arch/{arch}/",
        ]

    def private_include_dirs(self, builder: "Builder") -> List[str]:
        src_dir = f"{self.pkg.base_dir}/src/"
        arch = builder.target.arch

        incls = [src_dir, f"{src_dir}arch/{arch}/"]
        if builder.feature_enabled(TEST_FEATURE):
            test_dir = f"{src_dir}test/"
            incls.append(test_dir)
            incls.append(f"{test_dir}arch/{arch}/")

        return incls

    def recursive_include_paths(self, builder: "Builder") -> List[str]:
        """Public include dirs of this package and all its dependencies."""
        incls: List[str] = []
        for bpkg in self.collect_deps(builder):
            incls.extend(bpkg.public_include_dirs(builder))
        return incls

    # ------------------------------------------------------------------
    # Compiler info
    # ------------------------------------------------------------------

    def full_compiler_info(self, builder: "Builder") -> CompilerInfo:
        """Assemble (once) the compiler parameters for this package.

        Raises:
            PackageNotLoadedError: If the package has not finished loading
            PackageNotRegisteredError: If the dependency graph is inconsistent
        """
        if not self.loaded:
            raise PackageNotLoadedError(self.name)

        if self._full_ci is not None:
            return self._full_ci

        features = builder.features()
        settings = self.pkg.settings
        includes = self.private_include_dirs(builder) + self.recursive_include_paths(builder)

        self._full_ci = CompilerInfo(
            cflags=tuple(get_string_slice_features(settings, features, PKG_CFLAGS)),
            lflags=tuple(get_string_slice_features(settings, features, PKG_LFLAGS)),
            aflags=tuple(get_string_slice_features(settings, features, PKG_AFLAGS)),
            includes=tuple(includes),
        )
        return self._full_ci
