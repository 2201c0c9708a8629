"""CLI utility functions for webbundler.

This module provides common utilities used across CLI commands including:
- Resolving a BundlerConfig from an INI file, cargo env vars or flags
- Error handling and formatting
- Logging setup
"""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from webbundler.config import BundlerConfig, BundlerIniConfig
from webbundler.errors import ConfigError


@dataclass
class ConfigFlags:
    """Configuration-related command-line flags. None means 'not given'."""

    config_file: Optional[Path] = None
    from_env: bool = False
    src_dir: Optional[Path] = None
    dist_dir: Optional[Path] = None
    tmp_dir: Optional[Path] = None
    wasm_version: Optional[str] = None
    release: Optional[bool] = None
    workspace_root: Optional[Path] = None
    base_url: Optional[str] = None
    watch_dirs: List[Path] = field(default_factory=list)


class ConfigResolver:
    """Builds a BundlerConfig from the CLI flags."""

    @staticmethod
    def resolve(flags: ConfigFlags) -> BundlerConfig:
        """Resolve the configuration for a run.

        The base comes from --config, or from cargo environment variables
        with --from-env, or from the flags alone. Flags given explicitly
        always override the base.

        Args:
            flags: Parsed configuration flags

        Returns:
            BundlerConfig for the run

        Raises:
            ConfigError: If required settings are missing
        """
        overrides = dict(
            src_dir=flags.src_dir,
            dist_dir=flags.dist_dir,
            tmp_dir=flags.tmp_dir,
            wasm_version=flags.wasm_version,
            release=flags.release,
            workspace_root=flags.workspace_root,
            base_url=flags.base_url,
            additional_watch_dirs=tuple(flags.watch_dirs) if flags.watch_dirs else None,
        )

        if flags.config_file is not None:
            base = BundlerIniConfig(flags.config_file).to_bundler_config()
            return base.with_overrides(**overrides)

        if flags.from_env:
            base = BundlerConfig.from_env(
                src_dir=flags.src_dir or Path("."),
                workspace_root=flags.workspace_root or Path("."),
            )
            return base.with_overrides(**overrides)

        required = {
            "--src-dir": flags.src_dir,
            "--dist-dir": flags.dist_dir,
            "--tmp-dir": flags.tmp_dir,
            "--wasm-version": flags.wasm_version,
        }
        missing = [name for name, value in required.items() if value is None]
        if missing:
            raise ConfigError(
                f"Missing required options: {', '.join(missing)} "
                + "(or pass --config / --from-env)"
            )

        return BundlerConfig(
            src_dir=flags.src_dir,
            dist_dir=flags.dist_dir,
            tmp_dir=flags.tmp_dir,
            wasm_version=flags.wasm_version,
            release=bool(flags.release),
            workspace_root=flags.workspace_root or Path("."),
            base_url=flags.base_url,
            additional_watch_dirs=tuple(flags.watch_dirs),
        )


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger to write to stderr.

    stdout is reserved for rebuild directives read by the host build system.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)


class ErrorFormatter:
    """Formats and displays error messages with ANSI color codes."""

    # ANSI color codes
    RED = "\033[1;31m"
    GREEN = "\033[1;32m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def print_error(title: str, message: str) -> None:
        """Print formatted error message.

        Args:
            title: Error title (e.g., "Bundle failed!")
            message: Error message details
        """
        print()
        print(f"{ErrorFormatter.RED}✗ {title}{ErrorFormatter.RESET}")
        print()
        print(message)
        print()

    @staticmethod
    def print_success(message: str) -> None:
        """Print formatted success message."""
        print()
        print(f"{ErrorFormatter.GREEN}✓ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def print_warning(message: str) -> None:
        """Print formatted warning message."""
        print()
        print(f"{ErrorFormatter.YELLOW}✗ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def handle_config_error(error: ConfigError) -> None:
        """Handle ConfigError with standard formatting."""
        ErrorFormatter.print_error("Error: Invalid configuration", str(error))
        sys.exit(2)

    @staticmethod
    def handle_permission_error(error: PermissionError) -> None:
        """Handle PermissionError with standard formatting."""
        ErrorFormatter.print_error("Error: Permission denied", str(error))
        sys.exit(1)

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        """Handle KeyboardInterrupt with standard formatting."""
        ErrorFormatter.print_warning("Bundle interrupted")
        sys.exit(130)  # Standard exit code for SIGINT

    @staticmethod
    def handle_unexpected_error(error: Exception, verbose: bool = False) -> None:
        """Handle unexpected errors with standard formatting.

        Args:
            error: The exception to handle
            verbose: Whether to print traceback
        """
        message = f"{type(error).__name__}: {error}"
        ErrorFormatter.print_error("Unexpected error", message)

        if verbose:
            import traceback

            print("Traceback:")
            print(traceback.format_exc())

        sys.exit(1)


class PathValidator:
    """Validates project paths and directories."""

    @staticmethod
    def validate_src_dir(src_dir: Path) -> None:
        """Validate that the source directory exists and is a directory.

        Raises:
            SystemExit: If path doesn't exist or isn't a directory
        """
        if not src_dir.exists():
            print(
                f"{ErrorFormatter.RED}✗ Error: Path does not exist: {src_dir}{ErrorFormatter.RESET}"
            )
            sys.exit(2)
        if not src_dir.is_dir():
            print(
                f"{ErrorFormatter.RED}✗ Error: Path is not a directory: {src_dir}{ErrorFormatter.RESET}"
            )
            sys.exit(2)
