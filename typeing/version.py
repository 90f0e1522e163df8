"""Version string shown by ``typeing --version``.

The release comes from the installed distribution metadata. The commit is
looked up in the surrounding git checkout when running from source, and
otherwise in ``_build_info.py``, which the hatch build hook writes into
wheels.
"""

from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

DIST_NAME = "typeing"


class BuildInfo(NamedTuple):
    release: str
    commit: Optional[str]
    date: Optional[str]
    dirty: bool


def _git(*args: str) -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", *args],
            cwd=str(Path(__file__).resolve().parent),
            stderr=subprocess.DEVNULL,
        )
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None
    return out.decode().strip() or None


def _release() -> str:
    try:
        return importlib.metadata.version(DIST_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "0+unknown"


def _embedded() -> tuple[Optional[str], Optional[str]]:
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None, None
    return getattr(_build_info, "COMMIT", None), getattr(_build_info, "DATE", None)


def get_build_info() -> BuildInfo:
    release = _release()
    commit = _git("rev-parse", "HEAD")
    if commit:
        date = _git("show", "-s", "--format=%cI", "HEAD")
        dirty = bool(_git("status", "--porcelain"))
        return BuildInfo(release, commit, date, dirty)
    commit, date = _embedded()
    return BuildInfo(release, commit, date, False)


def get_version_string() -> str:
    info = get_build_info()
    # Short (7-character) git hashes
    commit = info.commit[:7] if info.commit else "unknown"
    dirty_suffix = "-dirty" if info.dirty else ""
    return f"typeing {info.release} ({commit}{dirty_suffix} {info.date or 'unknown'})"
