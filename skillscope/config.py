"""Resolution of the home directory and scan roots.

Scan roots are the directories searched for project-level skills. They come
from the caller (``--scan-root`` on the command line) or, failing that, from
the ``SKILLSCOPE_SCAN_ROOTS`` environment variable, which holds paths
separated by ``os.pathsep``.
"""

import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from skillscope.exceptions import HomeDirectoryError

SCAN_ROOTS_ENV = "SKILLSCOPE_SCAN_ROOTS"


def resolve_home(home: Path | str | None = None) -> Path:
    """Return the home directory to scan for global skills.

    Raises:
        HomeDirectoryError: If no home is given and none can be determined
    """
    if home is not None:
        return Path(home).expanduser()

    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirectoryError("Cannot determine home directory") from e


def scan_roots_from_env(environ: Mapping[str, str] | None = None) -> list[Path]:
    """Read scan roots from SKILLSCOPE_SCAN_ROOTS."""
    if environ is None:
        environ = os.environ

    value = environ.get(SCAN_ROOTS_ENV, "")
    roots = []
    for entry in value.split(os.pathsep):
        entry = entry.strip()
        if entry:
            roots.append(Path(entry).expanduser())
    return roots


def resolve_scan_roots(
    explicit: Iterable[Path | str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> list[Path]:
    """Explicit roots win; otherwise fall back to the environment."""
    if explicit:
        return [Path(root).expanduser() for root in explicit]
    return scan_roots_from_env(environ)
