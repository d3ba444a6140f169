"""Hatchling build hook that records the git commit in the wheel."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

from hatchling.builders.hooks.plugin.interface import BuildHookInterface


class CustomBuildHook(BuildHookInterface):
    """Writes scrollpad/_build_info.py before the wheel is assembled."""

    def initialize(self, version: str, build_data: dict[str, Any]) -> None:
        target = Path(self.root) / "scrollpad" / "_build_info.py"
        commit = self._run_git(["rev-parse", "HEAD"], cwd=Path(self.root))
        target.write_text(f"# Auto-generated at build time.\nCOMMIT = {commit!r}\n", encoding="utf-8")
        build_data.setdefault("artifacts", []).append("scrollpad/_build_info.py")

    def _run_git(self, args: list[str], cwd: Path) -> str | None:
        try:
            out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
            return out.decode().strip() or None
        except (subprocess.CalledProcessError, OSError):
            # Builds outside a checkout simply have no commit
            return None
