"""``devx`` console script: run the installed binary, installing it on first use."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from .config import InstallerConfig
from .errors import UnsupportedPlatformError
from .logging_setup import configure_logging, get_logger
from .resolver import executable_suffix, host_platform
from .service import install


def binary_path(config: InstallerConfig) -> Path:
    return config.install_root / f"{config.tool_name}{executable_suffix(host_platform())}"


def ensure_binary(config: InstallerConfig) -> Path | None:
    path = binary_path(config)
    if not path.is_file():
        install(config)
    return path if path.is_file() else None


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = sys.argv[1:] if argv is None else argv
    config = InstallerConfig()
    try:
        binary = ensure_binary(config)
    except UnsupportedPlatformError as exc:
        get_logger().error(str(exc))
        binary = None
    if binary is None:
        get_logger().error(f"{config.tool_name} binary is not installed. Download it from {config.releases_page}")
        return 1
    return subprocess.run([str(binary), *args], check=False).returncode


if __name__ == "__main__":
    raise SystemExit(main())
