from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional


class BuildInfo(NamedTuple):
    version: Optional[str]
    commit: Optional[str]
    dirty: bool


def _run_git(args: list[str], cwd: str) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=cwd, stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (OSError, subprocess.CalledProcessError):
        return None


def _installed_version() -> Optional[str]:
    try:
        return importlib.metadata.version("scrollpad")
    except importlib.metadata.PackageNotFoundError:
        return None


def _from_git_repo() -> tuple[Optional[str], bool]:
    here = str(Path(__file__).resolve().parent)
    commit = _run_git(["rev-parse", "HEAD"], cwd=here)
    if commit is None:
        return None, False
    status = _run_git(["status", "--porcelain"], cwd=here)
    return commit, bool(status)


def _from_embedded_file() -> Optional[str]:
    # Generated at build time by the hatch build hook
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None
    return getattr(_build_info, "COMMIT", None)


def get_build_info() -> BuildInfo:
    # Priority: live git repo -> embedded file -> unknown
    commit, dirty = _from_git_repo()
    if commit is None:
        commit = _from_embedded_file()
    return BuildInfo(version=_installed_version(), commit=commit, dirty=dirty)


def get_version_string() -> str:
    info = get_build_info()
    version = info.version or "unknown"
    if info.commit is None:
        return f"scrollpad {version}"
    # Use short (7-character) git hashes
    dirty_suffix = "-dirty" if info.dirty else ""
    return f"scrollpad {version} ({info.commit[:7]}{dirty_suffix})"
