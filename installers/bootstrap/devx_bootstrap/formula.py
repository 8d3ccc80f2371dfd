"""Homebrew formula rendering from release checksums."""

from __future__ import annotations

import hashlib
from pathlib import Path
from string import Template

from .config import DEFAULT_HOST, DEFAULT_REPO, DEFAULT_TOOL, LATEST_VERSION
from .errors import FormulaError
from .resolver import PlatformKey, asset_filename


FORMULA_PLATFORMS = (
    PlatformKey("darwin", "arm64"),
    PlatformKey("darwin", "amd64"),
    PlatformKey("linux", "arm64"),
    PlatformKey("linux", "amd64"),
)

_FORMULA = Template(
    """\
# Documentation: https://docs.brew.sh/Formula-Cookbook
class $class_name < Formula
  desc "$desc"
  homepage "$homepage"
  version "$version"
  license "MIT"

  on_macos do
    if Hardware::CPU.arm?
      url "$darwin_arm64_url"
      sha256 "$darwin_arm64_sha"
    else
      url "$darwin_amd64_url"
      sha256 "$darwin_amd64_sha"
    end
  end

  on_linux do
    if Hardware::CPU.arm?
      url "$linux_arm64_url"
      sha256 "$linux_arm64_sha"
    else
      url "$linux_amd64_url"
      sha256 "$linux_amd64_sha"
    end
  end

  def install
    os   = OS.mac? ? "darwin" : "linux"
    arch = Hardware::CPU.arm? ? "arm64" : "amd64"
    bin.install "$tool-#{os}-#{arch}" => "$tool"
  end

  test do
    assert_match "$tool v#{version}", shell_output("#{bin}/$tool version")
  end
end
"""
)


def parse_checksums(path: Path) -> dict[str, str]:
    out: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        parts = line.strip().split()
        if len(parts) >= 2:
            # sha256sum marks binary mode with a leading '*'
            out[parts[1].lstrip("*")] = parts[0].lower()
    return out


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as fh:
        for chunk in iter(lambda: fh.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def checksums_from_dist(dist_dir: Path, tool_name: str = DEFAULT_TOOL) -> dict[str, str]:
    out: dict[str, str] = {}
    for key in FORMULA_PLATFORMS:
        name = asset_filename(key, tool_name)
        path = dist_dir / name
        if path.is_file():
            out[name] = sha256_file(path)
    return out


def _class_name(tool_name: str) -> str:
    return "".join(part.capitalize() for part in tool_name.replace("_", "-").split("-"))


def render_formula(
    version: str,
    checksums: dict[str, str],
    tool_name: str = DEFAULT_TOOL,
    repo: str = DEFAULT_REPO,
    host: str = DEFAULT_HOST,
    desc: str = "Cross-platform dev environment orchestrator",
) -> str:
    if version == LATEST_VERSION:
        raise FormulaError("Formula needs a pinned release version")
    version = version[1:] if version.startswith("v") else version

    values = {
        "class_name": _class_name(tool_name),
        "desc": desc,
        "homepage": f"{host}/{repo}",
        "version": version,
        "tool": tool_name,
    }
    missing = []
    for key in FORMULA_PLATFORMS:
        name = asset_filename(key, tool_name)
        digest = checksums.get(name)
        if not digest:
            missing.append(name)
            continue
        prefix = f"{key.os_name}_{key.arch}"
        # Ruby interpolation, resolved by Homebrew
        values[f"{prefix}_url"] = f"{host}/{repo}/releases/download/v#{{version}}/{name}"
        values[f"{prefix}_sha"] = digest

    if missing:
        raise FormulaError(f"Missing checksums for: {', '.join(missing)}")
    return _FORMULA.substitute(values)
