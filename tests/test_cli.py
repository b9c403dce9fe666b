"""Tests for the command line interface."""

import json
import tempfile
from pathlib import Path

import pytest

from cli import main, parse_args


def _write(root: Path, relative: str, text: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _project(root: Path) -> None:
    _write(root, "contracts/Token.sol", 'pragma solidity ^0.8.20;\nimport "./Base.sol";\ncontract Token is Base {}\n')
    _write(root, "contracts/Base.sol", "pragma solidity ^0.8.20;\ncontract Base {}\n")


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test default option values."""
        parsed = parse_args(["--file", "Token.sol", "--out", "flat/Token"])

        assert parsed.file == "Token.sol"
        assert parsed.out == "flat/Token"
        assert parsed.out_auto is None
        assert parsed.newline == "crlf"
        assert parsed.verbose == 0

    def test_out_auto_without_value(self):
        """Test that a bare --out-auto means no sub directory."""
        parsed = parse_args(["--file", "Token.sol", "--out-auto"])

        assert parsed.out_auto == ""

    def test_source_required(self):
        """Test that one of --file, --batch or --dir is required."""
        with pytest.raises(SystemExit):
            parse_args([])

    def test_unknown_evm_version(self):
        """Test that EVM versions are validated."""
        with pytest.raises(SystemExit):
            parse_args(["--file", "Token.sol", "--out-auto", "--evm-version", "frontier"])


class TestMain:
    """Tests for the main entry point."""

    def test_single_file(self, monkeypatch):
        """Test flattening one file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            _project(root)
            monkeypatch.chdir(root)

            code = main([
                "--file", "contracts/Token.sol",
                "--out", "out/Token",
                "--evm-version", "london",
                "--newline", "lf",
                "--package-root", str(root),
            ])

            assert code == 0
            out_dir = root / "out" / "Token"
            document = json.loads((out_dir / "Token.json").read_text())
            assert document["settings"]["evmVersion"] == "london"
            flat = (out_dir / "Token.sol").read_bytes().decode("utf-8")
            assert "\r\n" not in flat
            assert flat.index("contract Base {}") < flat.index("contract Token is Base {}")

    def test_missing_output(self, monkeypatch):
        """Test that --file without --out or --out-auto fails."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            _project(root)
            monkeypatch.chdir(root)

            assert main(["--file", "contracts/Token.sol"]) == 1

    def test_directory(self, monkeypatch):
        """Test flattening every file under a directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            _project(root)
            monkeypatch.chdir(root)

            code = main(["--dir", "contracts", "--out-auto", "all", "--package-root", str(root)])

            assert code == 0
            assert (root / "flat" / "all" / "Token" / "Token.sol").is_file()
            assert (root / "flat" / "all" / "Base" / "Base.info.json").is_file()

    def test_directory_needs_out_auto(self, monkeypatch):
        """Test that --dir requires --out-auto."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            _project(root)
            monkeypatch.chdir(root)

            assert main(["--dir", "contracts"]) == 1

    def test_batch_with_failure(self, monkeypatch):
        """Test that a failing batch target gives a non-zero exit code."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            _project(root)
            _write(root, "contracts/Broken.sol", 'import "./Gone.sol";\n')
            batch = _write(
                root,
                "flatten.yaml",
                "evmVersion: cancun\n"
                "targets:\n"
                "  - file: contracts/Broken.sol\n"
                "    out: out/Broken\n"
                "  - file: contracts/Token.sol\n"
                "    out: out/Token\n",
            )
            monkeypatch.chdir(root)

            code = main(["--batch", str(batch), "--package-root", str(root), "-q"])

            assert code == 1
            document = json.loads((root / "out" / "Token" / "Token.json").read_text())
            assert document["settings"]["evmVersion"] == "cancun"

    def test_directory_rejects_out(self, monkeypatch):
        """Test that --dir with --out fails instead of ignoring --out."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            _project(root)
            monkeypatch.chdir(root)

            assert main(["--dir", "contracts", "--out", "x", "--out-auto", "all"]) == 1
            assert not (root / "flat").exists()
            assert not (root / "x").exists()

    def test_batch_rejects_output_options(self, monkeypatch):
        """Test that --batch with --out or --out-auto fails before flattening."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            _project(root)
            batch = _write(
                root,
                "flatten.yaml",
                "targets:\n"
                "  - file: contracts/Token.sol\n"
                "    out: out/Token\n",
            )
            monkeypatch.chdir(root)

            assert main(["--batch", str(batch), "--out", "x"]) == 1
            assert main(["--batch", str(batch), "--out-auto"]) == 1
            assert not (root / "out").exists()
