"""
Bundle orchestration for webbundler.

This module runs one full, non-incremental bundling pass:
1. Declare watched inputs to the host build system
2. Run wasm-pack (retrying shared-cache races)
3. Clear and recreate the dist directory
4. Copy static files
5. Copy JS snippets
6. Render index.html
7. Place the versioned wasm module

Stages run strictly in this order; each one must finish before the next
starts. Any failure aborts the run. The dist directory is not rolled back,
it is simply cleared again on the next run.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import BundlerConfig
from ..errors import BundlerError
from .artifact_placer import ArtifactPlacer
from .asset_copier import AssetCopier
from .change_tracker import ChangeTracker
from .document_assembler import DocumentAssembler
from .output_stager import OutputStager
from .toolchain_invoker import ToolchainInvoker


@dataclass
class BundleResult:
    """Result of a complete bundling run."""

    success: bool
    index_html_path: Optional[Path]
    wasm_path: Optional[Path]
    bundle_time: float
    message: str
    toolchain_attempts: int = 0
    error: Optional[BundlerError] = None


class WebBundler:
    """
    Orchestrates a bundling run for a Seed-style SPA crate.

    Example usage:
        bundler = WebBundler(verbose=True)
        result = bundler.bundle(config)
        if result.success:
            print(f"Index: {result.index_html_path}")
    """

    def __init__(
        self,
        change_tracker: Optional[ChangeTracker] = None,
        toolchain: Optional[ToolchainInvoker] = None,
        stager: Optional[OutputStager] = None,
        asset_copier: Optional[AssetCopier] = None,
        assembler: Optional[DocumentAssembler] = None,
        placer: Optional[ArtifactPlacer] = None,
        verbose: bool = False,
    ):
        """
        Initialize the bundler. Every stage can be replaced for testing.

        Args:
            change_tracker: Emits rebuild directives
            toolchain: Runs wasm-pack
            stager: Prepares the dist directory
            asset_copier: Copies static files and snippets
            assembler: Renders index.html
            placer: Places the versioned wasm module
            verbose: Print stage progress
        """
        self.change_tracker = change_tracker or ChangeTracker()
        self.toolchain = toolchain or ToolchainInvoker(show_progress=verbose)
        self.stager = stager or OutputStager()
        self.asset_copier = asset_copier or AssetCopier()
        self.assembler = assembler or DocumentAssembler()
        self.placer = placer or ArtifactPlacer()
        self.verbose = verbose

    def bundle(self, config: BundlerConfig) -> BundleResult:
        """
        Execute a complete bundling run.

        Args:
            config: Bundler configuration

        Returns:
            BundleResult with status and output paths. On failure the
            exception is kept in BundleResult.error.
        """
        start_time = time.time()
        attempts = 0

        try:
            self._phase(1, "Declaring watched files...")
            self.change_tracker.declare(config.watch_roots)

            self._phase(2, "Building wasm package...")
            artifact = self.toolchain.invoke(config)
            attempts = artifact.attempts

            self._phase(3, "Preparing dist directory...")
            self.stager.prepare(config.dist_dir)

            self._phase(4, "Copying static files and snippets...")
            self.asset_copier.copy_static(config.src_dir, config.dist_dir)
            self.asset_copier.copy_snippets(config.tmp_dir, config.dist_dir)

            self._phase(5, "Rendering index.html...")
            index_html_path = self.assembler.assemble(config, artifact)

            self._phase(6, "Placing versioned wasm...")
            wasm_path = self.placer.place(artifact, config.dist_dir, config.wasm_version)

            bundle_time = time.time() - start_time
            if self.verbose:
                print(f"Bundle complete in {bundle_time:.2f}s")

            return BundleResult(
                success=True,
                index_html_path=index_html_path,
                wasm_path=wasm_path,
                bundle_time=bundle_time,
                message="Bundle successful",
                toolchain_attempts=attempts,
            )

        except BundlerError as e:
            return BundleResult(
                success=False,
                index_html_path=None,
                wasm_path=None,
                bundle_time=time.time() - start_time,
                message=str(e),
                toolchain_attempts=getattr(e, "attempts", attempts),
                error=e,
            )

    def _phase(self, number: int, message: str) -> None:
        if self.verbose:
            print(f"[{number}/6] {message}")


def run(config: BundlerConfig, verbose: bool = False) -> BundleResult:
    """
    Bundle config and raise on failure.

    Raises:
        BundlerError: The error that aborted the run
    """
    result = WebBundler(verbose=verbose).bundle(config)
    if result.error is not None:
        raise result.error
    return result
