"""Run settings for the devx installer."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from .version import __version__


LATEST_VERSION = "0.0.0"
DEFAULT_REPO = "dever-labs/dever"
DEFAULT_HOST = "https://github.com"
DEFAULT_TOOL = "devx"


def default_install_root() -> Path:
    return Path(__file__).resolve().parent / "bin"


@dataclass(frozen=True)
class InstallerConfig:
    tool_name: str = DEFAULT_TOOL
    repo: str = DEFAULT_REPO
    host: str = DEFAULT_HOST
    version: str = __version__
    install_root: Path = field(default_factory=default_install_root)
    timeout_s: float = 60.0
    retries: int = 0
    max_redirects: int = 10
    user_agent: str = f"devx-python-installer/{__version__}"
    ca_bundle: Path | None = None

    @property
    def releases_page(self) -> str:
        return f"{self.host}/{self.repo}/releases"

    @property
    def pins_latest(self) -> bool:
        return self.version == LATEST_VERSION

    def with_overrides(self, **overrides: Any) -> "InstallerConfig":
        """Return a copy with every non-``None`` override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if "install_root" in values:
            values["install_root"] = Path(values["install_root"]).expanduser().resolve()
        if "ca_bundle" in values:
            values["ca_bundle"] = Path(values["ca_bundle"]).expanduser()
        if "timeout_s" in values:
            values["timeout_s"] = max(1.0, float(values["timeout_s"]))
        if "retries" in values:
            values["retries"] = max(0, int(values["retries"]))
        return replace(self, **values)
