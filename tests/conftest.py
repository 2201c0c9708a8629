"""Shared fixtures for webbundler tests."""

import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

from webbundler.config import BundlerConfig


INDEX_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
    <head>
        <base href="{{ base_url }}">
        <meta charset="utf-8">
        {{ stylesheet | safe }}
        <title>Test App</title>
    </head>
    <body>
        <div id="app"></div>
        {{ javascript | safe }}
    </body>
</html>
"""

STYLESHEET = """$primary: #336699

body
  color: $primary
  margin: 0
"""


class FakeWasmPack:
    """Stands in for subprocess.run when running wasm-pack.

    Each entry in outcomes is (returncode, stderr) for one call; once the
    list runs out every further call succeeds. Successful calls write
    package.js, package_bg.wasm and optionally snippets/ to --out-dir.
    """

    PACKAGE_JS = "import * as snippet from './snippets/app-1234/inline0.js'; export default function init(path) {}"
    PACKAGE_WASM = b"\x00asm\x01\x00\x00\x00"
    CACHE_RACE_STDERR = b"Error: Directory not empty (os error 39)"

    def __init__(
        self,
        outcomes: Optional[List[Tuple[int, bytes]]] = None,
        with_snippets: bool = False,
        write_js: bool = True,
    ):
        self.outcomes = list(outcomes or [])
        self.with_snippets = with_snippets
        self.write_js = write_js
        self.calls = []

    def __call__(self, cmd, cwd=None, env=None, capture_output=False):
        self.calls.append({"cmd": list(cmd), "cwd": cwd, "env": env})

        if self.outcomes:
            returncode, stderr = self.outcomes.pop(0)
        else:
            returncode, stderr = 0, b""

        if returncode == 0:
            out_dir = Path(cmd[cmd.index("--out-dir") + 1])
            out_dir.mkdir(parents=True, exist_ok=True)
            if self.write_js:
                (out_dir / "package.js").write_text(self.PACKAGE_JS)
            (out_dir / "package_bg.wasm").write_bytes(self.PACKAGE_WASM)
            if self.with_snippets:
                snippet_dir = out_dir / "snippets" / "app-1234"
                snippet_dir.mkdir(parents=True, exist_ok=True)
                (snippet_dir / "inline0.js").write_text("export function hello() {}")

        return subprocess.CompletedProcess(
            args=cmd,
            returncode=returncode,
            stdout=b"[INFO]: Compiling to Wasm...",
            stderr=stderr,
        )


@pytest.fixture
def src_dir(tmp_path):
    """Create a frontend source tree with template and stylesheet."""
    src = tmp_path / "frontend"
    (src / "css").mkdir(parents=True)
    (src / "src").mkdir()
    (src / "index.html").write_text(INDEX_TEMPLATE)
    (src / "css" / "style.scss").write_text(STYLESHEET)
    (src / "src" / "lib.rs").write_text("pub fn start() {}\n")
    return src


@pytest.fixture
def config(tmp_path, src_dir):
    """Bundler configuration writing into tmp_path/out."""
    out = tmp_path / "out"
    return BundlerConfig(
        src_dir=src_dir,
        dist_dir=out / "ui",
        tmp_dir=out / "tmp",
        wasm_version="1.2.3",
        release=False,
        workspace_root=tmp_path,
    )


@pytest.fixture
def sleeps():
    """Collects requested backoff durations; pass sleeps.append as the sleep function."""
    return []


@pytest.fixture
def fake_wasm_pack():
    """The FakeWasmPack class, for building runners with scripted outcomes."""
    return FakeWasmPack
