"""Builder - owns a resolution session over a package set.

The builder holds the state every package's resolution step reads and
writes: the map from source package to BuildPackage, the set of enabled
features, and the target descriptor. resolve() drives load() across the
whole (growing) package set until a full pass turns up nothing new.

Both the feature set and the package map only ever grow, so the fixed
point does not depend on the order packages are visited in. Neither is
locked; a Builder must only be driven from one thread at a time.
"""

import logging
from typing import AbstractSet, Dict, Iterable, List, Optional, Tuple

from ..errors import (
    CapabilityConflictError,
    MissingCapabilityError,
    PackageNotRegisteredError,
    ResolutionError,
    SessionNotResolvedError,
)
from ..output import TimedLogger, log_error, log_package, log_phase
from ..packages.package import SourcePackage
from ..packages.registry import PackageRegistry
from .build_package import BuildPackage
from .compiler_info import CompilerInfo
from .target import Target

logger = logging.getLogger(__name__)


class Builder:
    """Resolution session for one target.

    Usage:
        builder = Builder(registry, Target("blinky", "cortex_m4"))
        builder.add_package(app_pkg)
        builder.resolve()
        ci = builder.packages[app_pkg].full_compiler_info(builder)
    """

    def __init__(
        self,
        registry: PackageRegistry,
        target: Target,
        features: Optional[Iterable[str]] = None,
    ) -> None:
        self.registry = registry
        self.target = target
        self.packages: Dict[SourcePackage, BuildPackage] = {}
        self.apis: Dict[str, BuildPackage] = {}
        self._order: List[BuildPackage] = []
        self._features: set[str] = set(features or ())
        self.resolved = False

    # ------------------------------------------------------------------
    # Shared state
    # ------------------------------------------------------------------

    def features(self) -> AbstractSet[str]:
        """Return a snapshot of the enabled features."""
        return frozenset(self._features)

    def feature_enabled(self, feature: str) -> bool:
        return feature in self._features

    def add_feature(self, feature: str) -> None:
        """Enable a feature. Features are never disabled during a session."""
        if feature not in self._features:
            logger.debug(f"Feature enabled: {feature}")
            self._features.add(feature)

    def add_package(self, pkg: SourcePackage) -> BuildPackage:
        """Register a source package, returning its BuildPackage.

        Registering an already known package returns the existing one.
        """
        bpkg = self.packages.get(pkg)
        if bpkg is None:
            bpkg = BuildPackage(pkg)
            self.packages[pkg] = bpkg
            self._order.append(bpkg)
            logger.debug(f"Added package {pkg.full_name}")
        return bpkg

    def build_packages(self) -> List[BuildPackage]:
        """All BuildPackages in registration order."""
        return list(self._order)

    def get_build_package(self, pkg: SourcePackage) -> BuildPackage:
        """Look up the BuildPackage for a source package.

        Raises:
            PackageNotRegisteredError: If the package was never added.
        """
        bpkg = self.packages.get(pkg)
        if bpkg is None:
            raise PackageNotRegisteredError(pkg.full_name)
        return bpkg

    # ------------------------------------------------------------------
    # Fixed-point driver
    # ------------------------------------------------------------------

    def _resolve_pass(self, pass_num: int) -> bool:
        known = len(self._order)
        log_phase(pass_num, None, f"Resolution pass {pass_num}: {known} packages", verbose_only=True)

        complete = True
        # Packages registered during this pass are visited before it ends.
        i = 0
        while i < len(self._order):
            bpkg = self._order[i]
            if not bpkg.load(self):
                complete = False
                log_package("pending", bpkg.name)
            i += 1

        return complete and len(self._order) == known

    def resolve(self) -> int:
        """Load every package until features and dependencies settle.

        Returns:
            Number of passes needed to reach the fixed point

        Raises:
            ResolutionError: On the first package error; the session is
                abandoned, nothing is retried.
        """
        operation = f"Resolving packages for target {self.target.name} (arch: {self.target.arch})"
        with TimedLogger(operation, verbose_only=True) as timed:
            try:
                passes = 0
                while True:
                    passes += 1
                    if self._resolve_pass(passes):
                        break

                self.verify_capabilities()
            except ResolutionError as e:
                log_error(f"Resolution failed for target {self.target.name}: {e}")
                raise

            self.resolved = True
            timed.detail(f"Converged after {passes} passes: {len(self._order)} packages, {len(self._features)} features")

        logger.info(f"Resolved {len(self._order)} packages with {len(self._features)} features in {passes} passes")
        return passes

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    def _add_api(self, api: str, bpkg: BuildPackage) -> None:
        current = self.apis.get(api)
        if current is not None and current is not bpkg:
            raise CapabilityConflictError(api, current.name, bpkg.name)
        self.apis[api] = bpkg

    def verify_capabilities(self) -> None:
        """Check exported capabilities are unique and requirements are met.

        Raises:
            CapabilityConflictError: If two packages export the same capability
            MissingCapabilityError: If a required capability has no exporter
        """
        for bpkg in self._order:
            for api in bpkg.apis:
                self._add_api(api, bpkg)

        missing: List[Tuple[str, str]] = []
        for bpkg in self._order:
            for req_api in bpkg.req_apis:
                if req_api not in self.apis:
                    missing.append((req_api, bpkg.name))

        if missing:
            raise MissingCapabilityError(missing)

    # ------------------------------------------------------------------
    # Compiler info
    # ------------------------------------------------------------------

    def compiler_infos(self) -> Dict[BuildPackage, CompilerInfo]:
        """Full compiler info for every package, in registration order.

        Raises:
            SessionNotResolvedError: If resolve() has not completed
        """
        if not self.resolved:
            raise SessionNotResolvedError(self.target.name)
        return {bpkg: bpkg.full_compiler_info(self) for bpkg in self._order}
