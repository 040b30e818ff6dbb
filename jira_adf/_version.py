"""Version information for jira-adf.

The version is statically defined here and should match pyproject.toml.
When the package is installed, the installed distribution's metadata wins
so editable installs report what pip recorded.
"""

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version

__version__ = "0.1.0"

DISTRIBUTION_NAME = "jira-adf"


@lru_cache(maxsize=1)
def get_version() -> str:
    """Get the version string.

    Returns:
        Version string like "0.1.0"
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return __version__


def get_full_version_string() -> str:
    """Get a human-readable version string, e.g. "jira-adf 0.1.0"."""
    return f"{DISTRIBUTION_NAME} {get_version()}"
