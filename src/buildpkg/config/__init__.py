"""Package settings and the feature-conditioned setting reader."""

from .settings import (
    PKG_AFLAGS,
    PKG_CAPS,
    PKG_CFLAGS,
    PKG_DEPS,
    PKG_FEATURES,
    PKG_LFLAGS,
    PKG_REQ_CAPS,
    PackageSettings,
    get_string_slice_features,
)

__all__ = [
    "PKG_AFLAGS",
    "PKG_CAPS",
    "PKG_CFLAGS",
    "PKG_DEPS",
    "PKG_FEATURES",
    "PKG_LFLAGS",
    "PKG_REQ_CAPS",
    "PackageSettings",
    "get_string_slice_features",
]
