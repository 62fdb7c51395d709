"""Feature-conditioned package settings.

A package manifest is a flat mapping of dotted keys to string lists. A key
can be scoped to a feature by appending the feature name, in which case its
values only apply while that feature is enabled:

    pkg.deps:            ["sys/console"]
    pkg.deps.SHELL:      ["sys/shell"]          # appended when SHELL is on
    pkg.cflags.TEST.OVERWRITE: "-O0 -g"         # replaces, when TEST is on

Values may be given either as a list of strings or as a single
whitespace-separated string.
"""

from dataclasses import dataclass, field
from typing import AbstractSet, Any, Dict, List, Tuple

from ..errors import SettingsError

PKG_FEATURES = "pkg.features"
PKG_DEPS = "pkg.deps"
PKG_CFLAGS = "pkg.cflags"
PKG_LFLAGS = "pkg.lflags"
PKG_AFLAGS = "pkg.aflags"
PKG_CAPS = "pkg.caps"
PKG_REQ_CAPS = "pkg.req_caps"

OVERWRITE_SUFFIX = "OVERWRITE"


def _normalize(key: str, value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(value.split())
    if isinstance(value, (list, tuple)):
        items = []
        for item in value:
            if not isinstance(item, str):
                raise SettingsError(key, f"expected a string, got {type(item).__name__} ({item!r})")
            items.append(item)
        return tuple(items)
    raise SettingsError(key, f"expected a list of strings or a string, got {type(value).__name__}")


@dataclass(frozen=True)
class PackageSettings:
    """
    Immutable key/value settings for one package.

    Attributes:
        values: Normalized values keyed by dotted setting name
    """

    values: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PackageSettings":
        """
        Parse settings from a raw manifest dictionary.

        Args:
            data: Mapping of dotted keys to a string list or whitespace-separated string

        Returns:
            Validated PackageSettings instance

        Raises:
            SettingsError: If a key is not a string or a value has the wrong type
        """
        values: Dict[str, Tuple[str, ...]] = {}
        for key, value in data.items():
            if not isinstance(key, str) or not key:
                raise SettingsError(str(key), "setting names must be non-empty strings")
            values[key] = _normalize(key, value)
        return cls(values=values)

    def to_dict(self) -> Dict[str, List[str]]:
        """Convert back to a plain dictionary of lists."""
        return {key: list(value) for key, value in self.values.items()}

    def get_string_slice(self, key: str) -> List[str]:
        """Return the unconditioned values of a key (empty if unset)."""
        return list(self.values.get(key, ()))

    def has(self, key: str) -> bool:
        return key in self.values


def get_string_slice_features(settings: PackageSettings, features: AbstractSet[str], key: str) -> List[str]:
    """
    Read a setting, merged with the values scoped to each enabled feature.

    The base value comes first. Enabled features are then visited in sorted
    order so repeated runs produce identical results; for each one, a
    ``<key>.<FEATURE>.OVERWRITE`` value replaces everything accumulated so
    far, otherwise ``<key>.<FEATURE>`` values are appended.

    Args:
        settings: Package settings to read from
        features: Currently enabled feature names
        key: Dotted setting name (e.g. "pkg.deps")

    Returns:
        Merged list of values
    """
    values = settings.get_string_slice(key)

    for feature in sorted(features):
        scoped_key = f"{key}.{feature}"
        overwrite_key = f"{scoped_key}.{OVERWRITE_SUFFIX}"
        if settings.has(overwrite_key):
            values = settings.get_string_slice(overwrite_key)
            continue
        values.extend(settings.get_string_slice(scoped_key))

    return values
