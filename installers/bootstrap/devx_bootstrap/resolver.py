"""Release asset resolution for OS/architecture specific devx binaries."""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass

from .config import DEFAULT_HOST, DEFAULT_REPO, DEFAULT_TOOL, LATEST_VERSION
from .errors import UnsupportedPlatformError


# Raw host value -> release asset naming. Keys are lower-cased before lookup.
OS_NAMES = {
    "linux": "linux",
    "darwin": "darwin",
    "win32": "windows",
    "windows": "windows",
}

ARCH_NAMES = {
    "x64": "amd64",
    "x86_64": "amd64",
    "amd64": "amd64",
    "arm64": "arm64",
    "aarch64": "arm64",
}


@dataclass(frozen=True)
class PlatformKey:
    os_name: str
    arch: str


@dataclass(frozen=True)
class ReleaseTarget:
    platform: PlatformKey
    version: str
    asset_filename: str
    download_url: str
    binary_name: str


def resolve_platform(system: str, machine: str) -> PlatformKey:
    os_name = OS_NAMES.get(system.lower())
    if os_name is None:
        raise UnsupportedPlatformError("OS", system)
    arch = ARCH_NAMES.get(machine.lower())
    if arch is None:
        raise UnsupportedPlatformError("arch", machine)
    return PlatformKey(os_name=os_name, arch=arch)


def host_platform() -> PlatformKey:
    return resolve_platform(sys.platform, platform.machine())


def executable_suffix(key: PlatformKey) -> str:
    return ".exe" if key.os_name == "windows" else ""


def asset_filename(key: PlatformKey, tool_name: str = DEFAULT_TOOL) -> str:
    return f"{tool_name}-{key.os_name}-{key.arch}{executable_suffix(key)}"


def release_url(
    asset: str,
    version: str,
    repo: str = DEFAULT_REPO,
    host: str = DEFAULT_HOST,
) -> str:
    if version == LATEST_VERSION:
        return f"{host}/{repo}/releases/latest/download/{asset}"
    return f"{host}/{repo}/releases/download/v{version}/{asset}"


def locate_release(
    key: PlatformKey,
    version: str,
    tool_name: str = DEFAULT_TOOL,
    repo: str = DEFAULT_REPO,
    host: str = DEFAULT_HOST,
) -> ReleaseTarget:
    asset = asset_filename(key, tool_name)
    return ReleaseTarget(
        platform=key,
        version=version,
        asset_filename=asset,
        download_url=release_url(asset, version, repo=repo, host=host),
        binary_name=f"{tool_name}{executable_suffix(key)}",
    )
