"""End-to-end tests running ``python -m fhevm_tools`` as a subprocess.

These tests drive the real CLI against a throw-away hub built in
``tmp_path`` and check exit codes and the files left on disk.  No network,
Node.js or Hardhat toolchain is required; the git scenario is skipped when
git is not installed.
"""

from __future__ import annotations

import json
import shutil
import subprocess
import sys
from pathlib import Path

import pytest


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(cwd: Path, *args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "fhevm_tools", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        timeout=120,
    )


def _tree(root: Path) -> list[str]:
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


@pytest.mark.integration
class TestGenerateExampleEndToEnd:
    def test_default_destination(self, hub: Path):
        result = _run(hub, "generate-example", "fhe-counter")
        assert result.returncode == 0, result.stderr

        project = hub / "output" / "fhevm-example-fhe-counter"
        manifest = json.loads((project / "package.json").read_text(encoding="utf-8"))
        assert manifest["name"] == "fhevm-example-fhe-counter"
        assert (project / "contracts" / "FHECounter.sol").read_bytes() == (
            hub / "contracts/basic/FHECounter.sol"
        ).read_bytes()
        assert "contracts/FHECounter.sol" in _tree(project)
        assert "node_modules" not in {p.split("/")[0] for p in _tree(project)}

    def test_unknown_name_writes_nothing(self, hub: Path):
        result = _run(hub, "generate-example", "does-not-exist")
        assert result.returncode == 1
        assert "Unknown example" in result.stderr
        assert not (hub / "output").exists()

    def test_second_run_refuses(self, hub: Path, tmp_path: Path):
        dest = tmp_path / "c1"
        assert _run(hub, "generate-example", "fhe-counter", str(dest)).returncode == 0
        before = _tree(dest)
        result = _run(hub, "generate-example", "fhe-counter", str(dest))
        assert result.returncode == 1
        assert _tree(dest) == before

    @pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
    def test_init_git(self, hub: Path, tmp_path: Path):
        dest = tmp_path / "c1"
        result = _run(hub, "generate-example", "fhe-counter", str(dest), "--init-git")
        assert result.returncode == 0, result.stderr
        assert (dest / ".git").is_dir()


@pytest.mark.integration
class TestGenerateCategoryEndToEnd:
    def test_partial_category(self, hub: Path, tmp_path: Path):
        (hub / "contracts/basic/FHECounter.sol").unlink()
        dest = tmp_path / "basic"
        result = _run(hub, "generate-category", "basic", str(dest))
        assert result.returncode == 0, result.stderr
        assert sorted(p.name for p in (dest / "contracts").iterdir()) == [
            "EncryptMultipleValues.sol",
            "EncryptSingleValue.sol",
        ]
        assert "Skipping fhe-counter" in result.stdout


@pytest.mark.integration
class TestGenerateDocsEndToEnd:
    def test_all_is_idempotent(self, hub: Path):
        assert _run(hub, "generate-docs", "--all").returncode == 0
        summary = (hub / "examples" / "SUMMARY.md").read_text(encoding="utf-8")
        assert _run(hub, "generate-docs", "--all").returncode == 0
        assert (hub / "examples" / "SUMMARY.md").read_text(encoding="utf-8") == summary

    def test_usage_error(self, hub: Path):
        result = _run(hub, "generate-docs")
        assert result.returncode == 2
