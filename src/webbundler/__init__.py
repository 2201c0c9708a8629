"""webbundler - bundles a single-page WebAssembly web application for publishing.

The pipeline runs wasm-pack for the application crate, then assembles the
output directory: a versioned .wasm module, its JS snippets, static files and
an index.html rendered from the project's template with the compiled
stylesheet inlined.
"""

from .build import BundleResult, WebBundler, run
from .config import BundlerConfig, BundlerIniConfig
from .errors import BundlerError

__version__ = "0.1.0"

__all__ = [
    "BundleResult",
    "BundlerConfig",
    "BundlerError",
    "BundlerIniConfig",
    "WebBundler",
    "run",
]
