"""Single source of truth for the package version."""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Return the installed distribution version."""
    try:
        return version("softlru")
    except PackageNotFoundError:
        return "0.0.0"


__version__: str = get_version()
