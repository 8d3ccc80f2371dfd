"""Download and place the devx binary for the running host."""

from __future__ import annotations

import http.client
import platform
import ssl
import sys
import time
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urljoin, urlparse

import certifi

from .config import InstallerConfig
from .errors import DownloadError, InstallerError
from .logging_setup import get_logger
from .resolver import ReleaseTarget, locate_release, resolve_platform
from .shims import shim_for


REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})
REDIRECT_SCHEMES = frozenset({"http", "https"})
CHUNK_SIZE = 1024 * 1024
DEFAULT_USER_AGENT = InstallerConfig().user_agent

logger = get_logger()


class _NoRedirect(urllib.request.HTTPRedirectHandler):
    """Surface 3xx responses as ``HTTPError`` so every hop is handled here."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        return None


def _build_ssl_context(ca_bundle: Path | None = None) -> ssl.SSLContext:
    if ca_bundle is not None:
        return ssl.create_default_context(cafile=str(ca_bundle))
    return ssl.create_default_context(cafile=certifi.where())


def _urlopen(url: str, timeout: float, user_agent: str, ca_bundle: Path | None = None):
    request = urllib.request.Request(
        url,
        headers={
            "User-Agent": user_agent,
            "Accept": "application/octet-stream",
        },
    )
    opener = urllib.request.build_opener(
        _NoRedirect(),
        urllib.request.HTTPSHandler(context=_build_ssl_context(ca_bundle)),
    )
    return opener.open(request, timeout=timeout)


def _fetch(
    url: str,
    dest: Path,
    timeout: float,
    user_agent: str,
    ca_bundle: Path | None,
    max_redirects: int,
) -> Path:
    current = url
    last_status = None
    for _hop in range(max_redirects + 1):
        try:
            response = _urlopen(current, timeout=timeout, user_agent=user_agent, ca_bundle=ca_bundle)
        except urllib.error.HTTPError as exc:
            exc.close()
            if exc.code not in REDIRECT_STATUSES:
                raise DownloadError(current, exc.code) from exc
            location = exc.headers.get("Location") if exc.headers is not None else None
            if not location:
                raise DownloadError(current, exc.code, f"HTTP {exc.code} without Location") from exc
            target = urljoin(current, location)
            if urlparse(target).scheme.lower() not in REDIRECT_SCHEMES:
                raise DownloadError(current, exc.code, "redirect to unsupported scheme") from exc
            logger.debug(f"redirect {exc.code} -> {target}", extra={"event": "download_redirect"})
            last_status = exc.code
            current = target
            continue
        except (http.client.HTTPException, OSError) as exc:
            # URLError, TLS and socket failures are all OSError
            raise DownloadError(current) from exc

        with response, dest.open("wb") as fh:
            while True:
                try:
                    chunk = response.read(CHUNK_SIZE)
                except (http.client.HTTPException, OSError) as exc:
                    raise DownloadError(current, reason="transfer interrupted") from exc
                if not chunk:
                    break
                fh.write(chunk)
        return dest

    raise DownloadError(current, last_status, f"more than {max_redirects} redirects")


def download_file(
    url: str,
    dest: Path,
    timeout: float = 60.0,
    user_agent: str = DEFAULT_USER_AGENT,
    ca_bundle: Path | None = None,
    max_redirects: int = 10,
    retries: int = 0,
    backoff_s: float = 1.0,
) -> Path:
    """Fetch ``url`` into ``dest``, following redirects hop by hop.

    HTTP failures are final. Transport failures are retried ``retries`` times
    with exponential backoff before the last ``DownloadError`` propagates.
    """
    attempt = 0
    while True:
        try:
            return _fetch(url, dest, timeout, user_agent, ca_bundle, max_redirects)
        except DownloadError as exc:
            if exc.status is not None or attempt >= retries:
                raise
            delay = backoff_s * (2 ** attempt)
            attempt += 1
            logger.warning(f"{exc}; retrying in {delay:.1f}s ({attempt}/{retries})")
            time.sleep(delay)


def make_executable(path: Path) -> None:
    path.chmod(path.stat().st_mode | 0o755)


@dataclass(frozen=True)
class InstalledArtifact:
    target: ReleaseTarget
    binary_path: Path
    shim_path: Path


def install_artifact(
    config: InstallerConfig,
    system: str | None = None,
    machine: str | None = None,
) -> InstalledArtifact:
    """Resolve, fetch and place the binary; raises on any failure."""
    key = resolve_platform(system or sys.platform, machine or platform.machine())
    logger.debug(f"platform {key.os_name}/{key.arch}", extra={"event": "resolve_platform"})

    target = locate_release(
        key,
        config.version,
        tool_name=config.tool_name,
        repo=config.repo,
        host=config.host,
    )
    label = "latest" if config.pins_latest else f"v{config.version}"

    root = config.install_root
    root.mkdir(parents=True, exist_ok=True)
    binary_path = root / target.binary_name

    logger.info(f"Downloading {target.asset_filename} ({label})...", extra={"event": "download_start"})
    download_file(
        target.download_url,
        binary_path,
        timeout=config.timeout_s,
        user_agent=config.user_agent,
        ca_bundle=config.ca_bundle,
        max_redirects=config.max_redirects,
        retries=config.retries,
    )
    logger.debug(f"downloaded {target.download_url}", extra={"event": "download_complete"})

    make_executable(binary_path)
    shim_path = shim_for(key.os_name).create(binary_path, config.tool_name)
    logger.debug(f"command entry {shim_path}", extra={"event": "shim_created"})

    logger.info(f"Installed to {binary_path}")
    return InstalledArtifact(target=target, binary_path=binary_path, shim_path=shim_path)


def install(
    config: InstallerConfig | None = None,
    system: str | None = None,
    machine: str | None = None,
) -> InstalledArtifact | None:
    """Install entry point for package hooks; failures only produce warnings.

    A failing postinstall would abort the surrounding package transaction, so
    errors stop here and the user gets the manual download page instead.
    """
    config = config or InstallerConfig()
    try:
        return install_artifact(config, system=system, machine=machine)
    except (InstallerError, OSError) as exc:
        logger.warning(f"Postinstall failed: {exc}", extra={"event": "install_failed"})
        logger.warning(f"Install manually: {config.releases_page}")
        return None
