"""Unit tests for the webbundler command-line entry points."""

from pathlib import Path

import pytest

from webbundler import cli
from webbundler.build import BundleResult
from webbundler.errors import ToolchainError


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep main() from installing root logger handlers during tests."""
    monkeypatch.setattr(cli, "setup_logging", lambda verbose=False: None)


def bundle_argv(config):
    """Command line equivalent of the shared config fixture."""
    return [
        "bundle",
        "--src-dir",
        str(config.src_dir),
        "--dist-dir",
        str(config.dist_dir),
        "--tmp-dir",
        str(config.tmp_dir),
        "--wasm-version",
        config.wasm_version,
    ]


class TestMain:
    """Tests for argument parsing and dispatch."""

    def test_no_command_prints_help(self, capsys):
        """Test running without a command shows help and exits 0."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        assert exc_info.value.code == 0
        assert "bundle" in capsys.readouterr().out

    def test_version(self, capsys):
        """Test --version prints the package version."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--version"])

        assert exc_info.value.code == 0
        assert "webbundler" in capsys.readouterr().out

    def test_bundle_missing_options(self, capsys):
        """Test bundle without configuration exits 2."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["bundle"])

        assert exc_info.value.code == 2
        assert "Missing required options" in capsys.readouterr().out

    def test_bundle_dispatches(self, config, monkeypatch):
        """Test flags reach bundle_command."""
        received = []
        monkeypatch.setattr(cli, "bundle_command", received.append)

        cli.main(bundle_argv(config) + ["--release", "--retries", "5", "--watch", "shared"])

        args = received[0]
        assert args.retries == 5
        assert args.flags.release is True
        assert args.flags.watch_dirs == [Path("shared")]
        assert args.flags.src_dir == config.src_dir

    def test_dev_flag(self, config, monkeypatch):
        """Test --dev sets release to False explicitly."""
        received = []
        monkeypatch.setattr(cli, "bundle_command", received.append)

        cli.main(bundle_argv(config) + ["--dev"])

        assert received[0].flags.release is False


class TestBundleCommand:
    """Tests for bundle_command outcomes."""

    def test_success_exits_0(self, config, monkeypatch):
        """Test a successful bundle exits 0."""
        result = BundleResult(
            success=True,
            index_html_path=config.dist_dir / "index.html",
            wasm_path=config.dist_dir / "app-1.2.3.wasm",
            bundle_time=0.1,
            message="Bundle successful",
        )
        monkeypatch.setattr(cli.WebBundler, "bundle", lambda self, cfg: result)

        with pytest.raises(SystemExit) as exc_info:
            cli.main(bundle_argv(config))

        assert exc_info.value.code == 0

    def test_failure_exits_1(self, config, monkeypatch, capsys):
        """Test a failed bundle reports the error and exits 1."""
        error = ToolchainError("wasm-pack failed to build the package.", attempts=4)
        result = BundleResult(
            success=False,
            index_html_path=None,
            wasm_path=None,
            bundle_time=0.1,
            message=str(error),
            toolchain_attempts=4,
            error=error,
        )
        monkeypatch.setattr(cli.WebBundler, "bundle", lambda self, cfg: result)

        with pytest.raises(SystemExit) as exc_info:
            cli.main(bundle_argv(config))

        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert "Failed to build frontend. Error: wasm-pack failed to build the package." in out

    def test_missing_src_dir_exits_2(self, config, tmp_path):
        """Test a nonexistent source directory exits 2."""
        argv = bundle_argv(config)
        argv[argv.index("--src-dir") + 1] = str(tmp_path / "missing")

        with pytest.raises(SystemExit) as exc_info:
            cli.main(argv)

        assert exc_info.value.code == 2


class TestWatchListCommand:
    """Tests for the watch-list command."""

    def test_prints_directives(self, config, capsys):
        """Test directives for the source tree go to stdout."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["watch-list"] + bundle_argv(config)[1:])

        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert f"cargo:rerun-if-changed={config.src_dir / 'index.html'}" in out

    def test_invalid_ini_value_exits_2(self, tmp_path):
        """Test a bad value in webbundler.ini is a configuration error."""
        ini_path = tmp_path / "webbundler.ini"
        ini_path.write_text(
            "[bundle]\nsrc_dir = f\ndist_dir = d\ntmp_dir = t\nwasm_version = 1\nbase_url = /a$b/\n"
        )

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["watch-list", "--config", str(ini_path)])

        assert exc_info.value.code == 2
