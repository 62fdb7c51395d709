"""Shared fixtures for build-resolution tests."""

from typing import Any, Callable, Dict, Optional

import pytest

from buildpkg.build.builder import Builder
from buildpkg.build.target import Target
from buildpkg.config.settings import PackageSettings
from buildpkg.packages.package import SourcePackage
from buildpkg.packages.registry import PackageRegistry

MakePackage = Callable[..., SourcePackage]


@pytest.fixture
def registry() -> PackageRegistry:
    """Empty project registry."""
    return PackageRegistry()


@pytest.fixture
def make_package(registry: PackageRegistry) -> MakePackage:
    """Factory that creates a package under /proj and registers it."""

    def _make(name: str, settings: Optional[Dict[str, Any]] = None, repo: str = "local") -> SourcePackage:
        pkg = SourcePackage(
            name=name,
            base_path=f"/proj/{name}",
            settings=PackageSettings.from_dict(settings or {}),
            repo=repo,
        )
        registry.add(pkg)
        return pkg

    return _make


@pytest.fixture
def builder(registry: PackageRegistry) -> Builder:
    """Builder for a cortex_m4 target with no features enabled."""
    return Builder(registry, Target(name="blinky", arch="cortex_m4"))
