"""
index.html generation.

The project's index.html is a Jinja2 template. It is rendered with three
variables:
- base_url: for <base href="{{ base_url }}">, '/' unless configured
- javascript: package.js wrapped in a module script that calls
  init('app-<version>.wasm')
- stylesheet: css/style.scss compiled by libsass and wrapped in <style>

Autoescaping is on, so the template must mark the two HTML fragments with
the 'safe' filter:

    {{ stylesheet | safe }}
    {{ javascript | safe }}
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import jinja2
import sass

from ..config import BundlerConfig
from ..errors import DocumentAssemblyError, StylesheetError, TemplateRenderError
from .artifact_placer import versioned_wasm_name
from .toolchain_invoker import CompiledModuleArtifact


INDEX_HTML = "index.html"
DEFAULT_STYLESHEET = Path("css") / "style.scss"
DEFAULT_BASE_URL = "/"


class DocumentAssembler:
    """
    Renders index.html from the project template.

    Example usage:
        assembler = DocumentAssembler()
        index_path = assembler.assemble(config, artifact)
    """

    def __init__(
        self,
        stylesheet_path: Path = DEFAULT_STYLESHEET,
        precision: int = 4,
        indented_syntax: bool = True,
    ):
        """
        Initialize document assembler.

        Args:
            stylesheet_path: Stylesheet location relative to the source dir
            precision: Decimal precision of compiled CSS numbers
            indented_syntax: Parse the stylesheet as indented (Sass) syntax
        """
        self.stylesheet_path = Path(stylesheet_path)
        self.precision = precision
        self.indented_syntax = indented_syntax
        self.environment = jinja2.Environment(
            autoescape=True,
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
        )

    def assemble(self, config: BundlerConfig, artifact: CompiledModuleArtifact) -> Path:
        """
        Render index.html into the dist directory.

        Args:
            config: Bundler configuration
            artifact: wasm-pack output (provides package.js)

        Returns:
            Path to the written index.html

        Raises:
            DocumentAssemblyError: If an input is missing or the write fails
            StylesheetError: If the stylesheet fails to compile
            TemplateRenderError: If the template fails to render
        """
        template_path = config.src_dir / INDEX_HTML
        template_text = _read_text(
            template_path,
            "This should be a source code file checked into the repo.",
        )

        package_js = _read_text(
            artifact.js_path,
            "This should have been produced by wasm-pack.",
        )

        context = self.build_context(
            package_js=package_js,
            stylesheet_css=self.compile_stylesheet(config.src_dir / self.stylesheet_path),
            wasm_version=config.wasm_version,
            base_url=config.base_url,
        )

        rendered = self.render(template_text, context)

        dest_path = config.dist_dir / INDEX_HTML
        try:
            dest_path.write_text(rendered, encoding="utf-8")
        except OSError as e:
            raise DocumentAssemblyError(
                f"Failed to write the index.html file to {dest_path}: {e}"
            ) from e

        logging.info(f"Wrote {dest_path}")
        return dest_path

    def build_context(
        self,
        package_js: str,
        stylesheet_css: str,
        wasm_version: str,
        base_url: Optional[str] = None,
    ) -> Dict[str, str]:
        """Build the template variables for one render."""
        return {
            "base_url": base_url if base_url is not None else DEFAULT_BASE_URL,
            "javascript": loader_markup(package_js, wasm_version),
            "stylesheet": f"<style>{stylesheet_css}</style>",
        }

    def compile_stylesheet(self, stylesheet_path: Path) -> str:
        """
        Compile the project stylesheet to compressed CSS.

        Raises:
            StylesheetError: If the file is missing or libsass rejects it
        """
        try:
            source = stylesheet_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StylesheetError(
                f"Failed to read stylesheet {stylesheet_path}: {e}"
            ) from e

        try:
            return sass.compile(
                string=source,
                output_style="compressed",
                precision=self.precision,
                indented=self.indented_syntax,
                include_paths=[str(stylesheet_path.parent)],
            )
        except sass.CompileError as e:
            raise StylesheetError(f"Sass compilation failed: {e}") from e

    def render(self, template_text: str, context: Dict[str, str]) -> str:
        """Render template text against context with autoescaping on."""
        try:
            return self.environment.from_string(template_text).render(context)
        except jinja2.TemplateError as e:
            raise TemplateRenderError(f"Failed to render index.html: {e}") from e


def loader_markup(package_js: str, wasm_version: str) -> str:
    """Wrap package.js in a module script that loads the versioned wasm."""
    return (
        f"<script type=\"module\">{package_js} "
        f"init('{versioned_wasm_name(wasm_version)}'); </script>"
    )


def _read_text(path: Path, hint: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentAssemblyError(f"Failed to read {path}. {hint} ({e})") from e
