"""Installer for the prebuilt devx binary published on GitHub Releases."""

from .config import InstallerConfig
from .errors import DownloadError, FormulaError, InstallerError, UnsupportedPlatformError
from .resolver import PlatformKey, ReleaseTarget, host_platform, locate_release, resolve_platform
from .service import InstalledArtifact, download_file, install, install_artifact
from .version import __version__

__all__ = [
    "DownloadError",
    "FormulaError",
    "InstalledArtifact",
    "InstallerConfig",
    "InstallerError",
    "PlatformKey",
    "ReleaseTarget",
    "UnsupportedPlatformError",
    "__version__",
    "download_file",
    "host_platform",
    "install",
    "install_artifact",
    "locate_release",
    "resolve_platform",
]
