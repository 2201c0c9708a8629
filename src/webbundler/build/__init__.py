"""
Build pipeline components for webbundler.

This module provides the bundling stages:
- Rebuild-trigger declaration (ChangeTracker)
- wasm-pack invocation with retries (ToolchainInvoker)
- dist directory staging (OutputStager)
- Static file and snippet copying (AssetCopier)
- index.html rendering (DocumentAssembler)
- Versioned wasm placement (ArtifactPlacer)
- Orchestration of all of the above (WebBundler)
"""

from .artifact_placer import ArtifactPlacer, versioned_wasm_name
from .asset_copier import AssetCopier
from .change_tracker import ChangeTracker
from .document_assembler import DocumentAssembler, loader_markup
from .orchestrator import BundleResult, WebBundler, run
from .output_stager import OutputStager
from .toolchain_invoker import (
    CompiledModuleArtifact,
    ToolchainInvoker,
    is_cache_contention_error,
)

__all__ = [
    "ArtifactPlacer",
    "AssetCopier",
    "BundleResult",
    "ChangeTracker",
    "CompiledModuleArtifact",
    "DocumentAssembler",
    "OutputStager",
    "ToolchainInvoker",
    "WebBundler",
    "is_cache_contention_error",
    "loader_markup",
    "run",
    "versioned_wasm_name",
]
