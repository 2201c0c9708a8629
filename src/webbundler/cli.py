"""
Command-line interface for webbundler.

This module provides the `webbundler` CLI tool, meant to be called from a
host build system as a pre-build step.
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from webbundler import __version__
from webbundler.build import ChangeTracker, ToolchainInvoker, WebBundler
from webbundler.cli_utils import (
    ConfigFlags,
    ConfigResolver,
    ErrorFormatter,
    PathValidator,
    setup_logging,
)
from webbundler.errors import ConfigError


@dataclass
class BundleArgs:
    """Arguments for the bundle command."""

    flags: ConfigFlags
    retries: int = 3
    verbose: bool = False


@dataclass
class WatchListArgs:
    """Arguments for the watch-list command."""

    flags: ConfigFlags
    verbose: bool = False


def bundle_command(args: BundleArgs) -> None:
    """Bundle the web application into the dist directory.

    Examples:
        webbundler bundle --config webbundler.ini
        webbundler bundle --from-env --src-dir ../frontend --workspace-root ..
        webbundler bundle --src-dir frontend --dist-dir dist --tmp-dir tmp \\
            --wasm-version 1.2.3 --release
    """
    try:
        config = ConfigResolver.resolve(args.flags)
        PathValidator.validate_src_dir(config.src_dir)

        if args.verbose:
            print(f"Bundling: {config.src_dir}")
            print(f"Output: {config.dist_dir}")
            print(f"Version: {config.wasm_version} ({'release' if config.release else 'dev'})")
            print()

        bundler = WebBundler(
            toolchain=ToolchainInvoker(retries=args.retries, show_progress=args.verbose),
            verbose=args.verbose,
        )
        result = bundler.bundle(config)

        if result.success:
            if args.verbose:
                ErrorFormatter.print_success("Bundle successful!")
                print(f"Index: {result.index_html_path}")
                print(f"Wasm: {result.wasm_path}")
                print(f"Bundle time: {result.bundle_time:.2f}s")
            sys.exit(0)
        else:
            print(f"Failed to build frontend. Error: {result.message}")
            sys.exit(1)

    except ConfigError as e:
        ErrorFormatter.handle_config_error(e)
    except PermissionError as e:
        ErrorFormatter.handle_permission_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def watch_list_command(args: WatchListArgs) -> None:
    """Print the rebuild directives without building anything."""
    try:
        config = ConfigResolver.resolve(args.flags)
        count = ChangeTracker().declare(config.watch_roots)
        if args.verbose:
            print(f"{count} watched paths", file=sys.stderr)
        sys.exit(0)

    except ConfigError as e:
        ErrorFormatter.handle_config_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        dest="config_file",
        type=Path,
        default=None,
        help="Read settings from a webbundler.ini file",
    )
    parser.add_argument(
        "--from-env",
        action="store_true",
        help="Read OUT_DIR, CARGO_PKG_VERSION and PROFILE as set by Cargo",
    )
    parser.add_argument("--src-dir", type=Path, default=None, help="Frontend crate directory")
    parser.add_argument("--dist-dir", type=Path, default=None, help="Output directory")
    parser.add_argument("--tmp-dir", type=Path, default=None, help="Scratch directory for wasm-pack")
    parser.add_argument("--wasm-version", default=None, help="Version for app-<version>.wasm")
    parser.add_argument(
        "--release",
        dest="release",
        action="store_const",
        const=True,
        default=None,
        help="Build in release mode",
    )
    parser.add_argument(
        "--dev",
        dest="release",
        action="store_const",
        const=False,
        help="Build in development mode",
    )
    parser.add_argument(
        "--workspace-root",
        type=Path,
        default=None,
        help="Workspace root; web-target/ is placed here (default: .)",
    )
    parser.add_argument("--base-url", default=None, help="Template base_url (default: /)")
    parser.add_argument(
        "--watch",
        dest="watch_dirs",
        type=Path,
        action="append",
        default=[],
        help="Additional directory to watch for changes (repeatable)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )


def _config_flags(parsed_args: argparse.Namespace) -> ConfigFlags:
    return ConfigFlags(
        config_file=parsed_args.config_file,
        from_env=parsed_args.from_env,
        src_dir=parsed_args.src_dir,
        dist_dir=parsed_args.dist_dir,
        tmp_dir=parsed_args.tmp_dir,
        wasm_version=parsed_args.wasm_version,
        release=parsed_args.release,
        workspace_root=parsed_args.workspace_root,
        base_url=parsed_args.base_url,
        watch_dirs=list(parsed_args.watch_dirs),
    )


def main(argv: Optional[List[str]] = None) -> None:
    """webbundler - bundle a WebAssembly SPA for publishing."""
    parser = argparse.ArgumentParser(
        prog="webbundler",
        description="webbundler - bundle a WebAssembly single-page app for publishing",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"webbundler {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Bundle command
    bundle_parser = subparsers.add_parser(
        "bundle",
        help="Run wasm-pack and assemble the dist directory",
    )
    _add_config_arguments(bundle_parser)
    bundle_parser.add_argument(
        "--retries",
        type=int,
        default=3,
        help="Retries after the first attempt on wasm-pack cache races (default: 3)",
    )

    # Watch-list command
    watch_parser = subparsers.add_parser(
        "watch-list",
        help="Print rebuild directives for the watched directories",
    )
    _add_config_arguments(watch_parser)

    # Parse arguments
    parsed_args = parser.parse_args(argv)

    # If no command specified, show help
    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    setup_logging(parsed_args.verbose)

    # Execute command
    if parsed_args.command == "bundle":
        bundle_command(
            BundleArgs(
                flags=_config_flags(parsed_args),
                retries=parsed_args.retries,
                verbose=parsed_args.verbose,
            )
        )
    elif parsed_args.command == "watch-list":
        watch_list_command(
            WatchListArgs(
                flags=_config_flags(parsed_args),
                verbose=parsed_args.verbose,
            )
        )


if __name__ == "__main__":
    main()
