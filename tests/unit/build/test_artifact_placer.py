"""Tests for versioned wasm placement."""

import pytest

from webbundler.build.artifact_placer import ArtifactPlacer, versioned_wasm_name
from webbundler.build.toolchain_invoker import CompiledModuleArtifact
from webbundler.errors import ArtifactError


class TestArtifactPlacer:
    """Test copying package_bg.wasm to app-<version>.wasm."""

    def test_versioned_wasm_name(self):
        """Test the versioned filename scheme."""
        assert versioned_wasm_name("1.2.3") == "app-1.2.3.wasm"

    def test_place(self, tmp_path):
        """Test the module is copied byte for byte under the versioned name."""
        tmp = tmp_path / "tmp"
        tmp.mkdir()
        (tmp / "package_bg.wasm").write_bytes(b"\x00asm\x01\x00\x00\x00")
        dist = tmp_path / "dist"
        dist.mkdir()

        placed = ArtifactPlacer().place(CompiledModuleArtifact(out_dir=tmp), dist, "1.2.3")

        assert placed == dist / "app-1.2.3.wasm"
        assert placed.read_bytes() == b"\x00asm\x01\x00\x00\x00"
        assert (tmp / "package_bg.wasm").exists()

    def test_missing_module_is_fatal(self, tmp_path):
        """Test a missing package_bg.wasm raises ArtifactError."""
        tmp = tmp_path / "tmp"
        tmp.mkdir()
        dist = tmp_path / "dist"
        dist.mkdir()

        with pytest.raises(ArtifactError, match="package_bg.wasm"):
            ArtifactPlacer().place(CompiledModuleArtifact(out_dir=tmp), dist, "1.2.3")
