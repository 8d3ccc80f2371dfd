"""Package version; ``0.0.0`` means the installer fetches the latest release."""

__version__ = "0.0.0"
