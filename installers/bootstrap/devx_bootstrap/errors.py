"""Installer failure types."""

from __future__ import annotations


class InstallerError(Exception):
    """Base class for failures raised by the installer pipeline."""


class UnsupportedPlatformError(InstallerError):
    def __init__(self, kind: str, value: str) -> None:
        self.kind = kind
        self.value = value
        super().__init__(f"Unsupported {kind}: {value}")


class DownloadError(InstallerError):
    """Fetch failed with an HTTP status or a transport error.

    ``status`` is ``None`` when the failure happened below HTTP (DNS, reset,
    timeout); the underlying exception is then available as ``__cause__``.
    """

    def __init__(self, url: str, status: int | None = None, reason: str | None = None) -> None:
        self.url = url
        self.status = status
        if reason is None:
            reason = f"HTTP {status}" if status is not None else "transport error"
        super().__init__(f"{reason} for {url}")


class FormulaError(InstallerError):
    pass
