"""Version parsing and comparison.

Versions are compared numerically per segment using
``packaging.version.Version``, so ``"0.9.0" < "0.17.0"`` and
``"1.0" == "1.0.0"``. The stored-version sentinel ``0`` (never
migrated) sorts below every released version.
"""

from packaging.version import InvalidVersion, Version

from fedimigrate.errors import VersionError

NEVER_MIGRATED = "0"


def parse_version(value: object) -> Version:
    """
    Parse a stored or configured version value.

    Args:
        value: Version string, the integer sentinel ``0``, or None.

    Returns:
        Parsed Version. None and empty strings read as the sentinel.

    Raises:
        VersionError: If the value is not a valid version.
    """
    if value is None or value == "":
        value = NEVER_MIGRATED

    try:
        return Version(str(value).strip())
    except InvalidVersion as e:
        raise VersionError(f"Invalid version: {value!r}", value) from e


def versions_equal(left: object, right: object) -> bool:
    """Return True if both values denote the same version."""
    return parse_version(left) == parse_version(right)


def is_older(version: object, threshold: object) -> bool:
    """Return True if version sorts strictly before threshold."""
    return parse_version(version) < parse_version(threshold)
