"""wasm-pack invocation with retry on shared-cache contention.

This module runs wasm-pack for the application crate and hands back the
paths of what it produced.

Design:
    - Fixed argument contract: web target, release/dev, no TypeScript output,
      out-name 'package', out-dir = the run's tmp directory
    - CARGO_TARGET_DIR is passed only to the child process, pointing at
      <workspace_root>/web-target, so the host's own target dir is untouched
    - Parallel wasm-pack processes share one global cache (WASM_PACK_CACHE)
      and can trip over each other. Those failures are recognised by their
      stderr text and retried after a random 1-5s wait, which spreads
      colliding builds apart. Nothing here can lock that cache.
    - Any other non-zero exit fails immediately with stdout and stderr attached
    - The tmp directory is emptied before the first attempt, so output left by
      an earlier run (for example snippets/ from since-removed inline JS)
      never reaches dist
"""

import logging
import os
import random
import shutil
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from ..config import BundlerConfig
from ..errors import StagingError, ToolchainError


WASM_PACK = "wasm-pack"
OUT_NAME = "package"

# Known wasm-pack messages for cache races between concurrent invocations:
# a cache directory found non-empty by another process, and a cached binary
# removed while it was being read.
CACHE_CONTENTION_SIGNATURES = (
    "Error: Directory not empty",
    "binary does not exist",
)

MIN_BACKOFF_SECONDS = 1.0
MAX_BACKOFF_SECONDS = 5.0


def is_cache_contention_error(stderr: str) -> bool:
    """
    Classify a wasm-pack failure as a transient cache race.

    This matches human-readable wasm-pack output and will break if the
    wording changes. Swap it for a structured signal if wasm-pack ever
    offers one.

    Args:
        stderr: Captured standard error of the failed invocation

    Returns:
        True if the failure is a known cache-contention race
    """
    return any(signature in stderr for signature in CACHE_CONTENTION_SIGNATURES)


@dataclass(frozen=True)
class CompiledModuleArtifact:
    """Files wasm-pack wrote to the tmp directory."""

    out_dir: Path
    attempts: int = 1

    @property
    def wasm_path(self) -> Path:
        """The compiled binary module."""
        return self.out_dir / f"{OUT_NAME}_bg.wasm"

    @property
    def js_path(self) -> Path:
        """The bootstrap script that loads and initialises the module."""
        return self.out_dir / f"{OUT_NAME}.js"

    @property
    def snippets_dir(self) -> Path:
        """Auxiliary JS snippets; only present for crates that use them."""
        return self.out_dir / "snippets"


class ToolchainInvoker:
    """Runs wasm-pack, retrying known cache-contention failures.

    The retry budget counts retries after the first attempt: with retries=3
    wasm-pack runs at most 4 times.
    """

    def __init__(
        self,
        retries: int = 3,
        command: str = WASM_PACK,
        runner: Optional[Callable[..., subprocess.CompletedProcess]] = None,
        sleep: Optional[Callable[[float], None]] = None,
        rng: Optional[random.Random] = None,
        show_progress: bool = False,
    ):
        """Initialize toolchain invoker.

        Args:
            retries: Retries allowed after the first attempt on cache races
            command: wasm-pack executable name or path
            runner: subprocess.run replacement (for testing)
            sleep: time.sleep replacement (for testing)
            rng: Random source for backoff jitter
            show_progress: Whether to print progress messages
        """
        if retries < 0:
            raise ValueError("retries must not be negative")

        self.retries = retries
        self.command = command
        self.runner = runner if runner is not None else subprocess.run
        self.sleep = sleep if sleep is not None else time.sleep
        self.rng = rng if rng is not None else random.Random()
        self.show_progress = show_progress

    def build_command(self, config: BundlerConfig) -> List[str]:
        """Build the wasm-pack command line for a configuration."""
        return [
            self.command,
            "build",
            "--target",
            "web",
            "--release" if config.release else "--dev",
            "--no-typescript",
            "--out-name",
            OUT_NAME,
            "--out-dir",
            str(config.tmp_dir),
        ]

    def build_env(self, config: BundlerConfig) -> dict:
        """Environment for the child process, with the target dir override."""
        env = dict(os.environ)
        env["CARGO_TARGET_DIR"] = str(config.target_dir)
        return env

    def clear_out_dir(self, tmp_dir: Path) -> None:
        """Remove stale wasm-pack output from a previous run.

        Raises:
            StagingError: If the directory cannot be removed
        """
        if not tmp_dir.is_dir():
            return

        try:
            shutil.rmtree(tmp_dir)
        except OSError as e:
            raise StagingError(
                f"Failed to clear old tmp directory ({tmp_dir}): {e}"
            ) from e

    def invoke(self, config: BundlerConfig) -> CompiledModuleArtifact:
        """Run wasm-pack until it succeeds or fails for good.

        Args:
            config: Bundler configuration

        Returns:
            CompiledModuleArtifact describing the tmp directory output

        Raises:
            StagingError: If stale output in tmp_dir cannot be removed
            ToolchainError: If wasm-pack cannot be started, fails with a
                non-transient error, or keeps hitting cache races after
                the retry budget is spent
        """
        self.clear_out_dir(config.tmp_dir)

        cmd = self.build_command(config)
        env = self.build_env(config)

        attempts = 0
        while True:
            attempts += 1

            if self.show_progress:
                print(f"Running wasm-pack (attempt {attempts})...")
            logging.info(f"Running {' '.join(cmd)} in {config.src_dir} (attempt {attempts})")

            try:
                result = self.runner(
                    cmd,
                    cwd=str(config.src_dir),
                    env=env,
                    capture_output=True,
                )
            except OSError as e:
                raise ToolchainError(
                    f"Failed to run {self.command}: {e}", attempts=attempts
                ) from e

            if result.returncode == 0:
                return CompiledModuleArtifact(out_dir=config.tmp_dir, attempts=attempts)

            stdout = _decode(result.stdout)
            stderr = _decode(result.stderr)

            retries_used = attempts - 1
            if is_cache_contention_error(stderr) and retries_used < self.retries:
                wait_seconds = self.rng.uniform(MIN_BACKOFF_SECONDS, MAX_BACKOFF_SECONDS)
                logging.warning(
                    f"wasm-pack hit a shared cache race; retrying in {wait_seconds:.2f}s "
                    f"({self.retries - retries_used} retries left)"
                )
                self.sleep(wait_seconds)
                continue

            raise ToolchainError(
                f"wasm-pack failed to build the package.\nstdout:\n{stdout}\nstderr:\n{stderr}",
                stdout=stdout,
                stderr=stderr,
                attempts=attempts,
            )


def _decode(output) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output
