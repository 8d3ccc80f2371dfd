"""CLI for installing devx and producing its Homebrew formula."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import InstallerConfig
from .errors import FormulaError, UnsupportedPlatformError
from .formula import checksums_from_dist, parse_checksums, render_formula
from .logging_setup import configure_logging
from .resolver import host_platform, locate_release
from .service import install
from .version import __version__


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True))


def _config_from_args(args: argparse.Namespace) -> InstallerConfig:
    return InstallerConfig().with_overrides(
        version=getattr(args, "version", None),
        repo=getattr(args, "repo", None),
        install_root=getattr(args, "install_root", None),
        timeout_s=getattr(args, "timeout", None),
        retries=getattr(args, "retries", None),
        ca_bundle=getattr(args, "ca_bundle", None),
    )


def cmd_install(args: argparse.Namespace) -> int:
    configure_logging(
        log_file=Path(args.log_file) if args.log_file else None,
        verbose=args.verbose,
    )
    result = install(_config_from_args(args))
    if result is not None:
        _print_json({
            "target_os": result.target.platform.os_name,
            "target_arch": result.target.platform.arch,
            "asset": result.target.asset_filename,
            "url": result.target.download_url,
            "path": str(result.binary_path),
            "command": str(result.shim_path),
        })
    # installation problems never fail the surrounding package transaction
    return 0


def cmd_platform(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    try:
        key = host_platform()
    except UnsupportedPlatformError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    target = locate_release(key, config.version, tool_name=config.tool_name, repo=config.repo, host=config.host)
    _print_json({
        "os": key.os_name,
        "arch": key.arch,
        "asset": target.asset_filename,
        "url": target.download_url,
    })
    return 0


def cmd_formula(args: argparse.Namespace) -> int:
    try:
        if args.checksums:
            checksums = parse_checksums(Path(args.checksums))
        else:
            checksums = checksums_from_dist(Path(args.dist))
    except OSError as exc:
        print(f"Cannot read checksums: {exc}", file=sys.stderr)
        return 2

    config = _config_from_args(args)
    try:
        text = render_formula(args.version, checksums, tool_name=config.tool_name, repo=config.repo)
    except FormulaError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
    return 0


def cmd_version(_args: argparse.Namespace) -> int:
    print(f"devx-bootstrap v{__version__}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="devx-bootstrap", description="devx binary installer")
    sub = parser.add_subparsers(dest="command", required=True)

    install_cmd = sub.add_parser("install", help="Download the devx binary for this host")
    install_cmd.add_argument("--version", default=None, help="Release version, 0.0.0 for latest")
    install_cmd.add_argument("--repo", default=None, help="GitHub owner/repo")
    install_cmd.add_argument("--install-root", default=None, help="Directory receiving the binary")
    install_cmd.add_argument("--timeout", type=float, default=None, help="Network timeout in seconds")
    install_cmd.add_argument("--retries", type=int, default=None, help="Retries for transport failures")
    install_cmd.add_argument("--ca-bundle", default=None, help="PEM bundle used instead of certifi")
    install_cmd.add_argument("--log-file", default=None, help="Append JSON log records to this file")
    install_cmd.add_argument("--verbose", action="store_true")
    install_cmd.set_defaults(func=cmd_install)

    platform_cmd = sub.add_parser("platform", help="Print the release asset for this host")
    platform_cmd.add_argument("--version", default=None)
    platform_cmd.add_argument("--repo", default=None)
    platform_cmd.set_defaults(func=cmd_platform)

    formula_cmd = sub.add_parser("formula", help="Render the Homebrew formula")
    formula_cmd.add_argument("--version", required=True, help="Pinned release version")
    formula_cmd.add_argument("--repo", default=None)
    source = formula_cmd.add_mutually_exclusive_group(required=True)
    source.add_argument("--checksums", help="sha256sum-style checksums file")
    source.add_argument("--dist", help="Directory holding the built release assets")
    formula_cmd.add_argument("--output", default=None, help="Write the formula here instead of stdout")
    formula_cmd.set_defaults(func=cmd_formula)

    version_cmd = sub.add_parser("version", help="Print the installer version")
    version_cmd.set_defaults(func=cmd_version)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
