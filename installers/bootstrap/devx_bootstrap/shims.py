"""Expose the fixed ``devx`` command name next to the downloaded binary."""

from __future__ import annotations

import shutil
from pathlib import Path


class CopyShim:
    """Platforms without an executable extension: the command is a copy."""

    def create(self, binary_path: Path, tool_name: str) -> Path:
        shim_path = binary_path.parent / tool_name
        if shim_path.resolve() != binary_path.resolve():
            shutil.copy2(binary_path, shim_path)
        return shim_path


class CmdShim:
    """Windows: a batch script that forwards every argument to the ``.exe``."""

    extension = ".cmd"

    def create(self, binary_path: Path, tool_name: str) -> Path:
        shim_path = binary_path.parent / f"{tool_name}{self.extension}"
        script = f'@echo off\r\n"%~dp0{binary_path.name}" %*\r\n'
        shim_path.write_text(script, encoding="utf-8", newline="")
        return shim_path


SHIM_STRATEGIES = {
    "linux": CopyShim(),
    "darwin": CopyShim(),
    "windows": CmdShim(),
}


def shim_for(os_name: str) -> CopyShim | CmdShim:
    return SHIM_STRATEGIES[os_name]
