"""Exceptions raised by the bundling pipeline.

Every failure the pipeline can report derives from BundlerError, so callers
(and the orchestrator) can catch a single type. Each stage raises its own
subclass with the offending path in the message, chaining the underlying
OSError or engine error.
"""


class BundlerError(Exception):
    """Base class for all bundling failures."""
    pass


class ConfigError(BundlerError):
    """Raised when the bundler configuration is missing or invalid."""
    pass


class ToolchainError(BundlerError):
    """Raised when wasm-pack fails, or keeps failing after retries.

    Attributes:
        stdout: Captured standard output of the last attempt
        stderr: Captured standard error of the last attempt
        attempts: Number of times the toolchain was invoked
    """

    def __init__(self, message: str, stdout: str = "", stderr: str = "", attempts: int = 0):
        super().__init__(message)
        self.stdout = stdout
        self.stderr = stderr
        self.attempts = attempts


class StagingError(BundlerError):
    """Raised when the dist directory cannot be cleared or created."""
    pass


class AssetCopyError(BundlerError):
    """Raised when static files or JS snippets cannot be copied."""
    pass


class DocumentAssemblyError(BundlerError):
    """Raised when index.html cannot be produced."""
    pass


class StylesheetError(DocumentAssemblyError):
    """Raised when the stylesheet fails to compile."""
    pass


class TemplateRenderError(DocumentAssemblyError):
    """Raised when the index.html template fails to render."""
    pass


class ArtifactError(BundlerError):
    """Raised when the compiled wasm module cannot be placed in dist."""
    pass
