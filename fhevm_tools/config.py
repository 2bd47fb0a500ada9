"""FHEVM example tools configuration.

Centralised, typed configuration for the scaffolder and the documentation
generator.  All settings use Pydantic v2 models so they can be validated at
construction time and loaded from JSON or environment variables without
boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

# Directory names never copied out of the template tree.
DEFAULT_EXCLUDED_DIRS: list[str] = [
    "node_modules",
    "artifacts",
    "cache",
    "coverage",
    "types",
    "dist",
    ".git",
]


class Config(BaseModel):
    """Global configuration for a single tool invocation.

    Holds the location of the example hub and every path derived from it.
    Instances are created once by the CLI entry point and passed to the
    generators.
    """

    root_dir: Path = Field(default=Path("."), description="Root of the example hub")
    template_dir_name: str = Field(default="fhevm-hardhat-template")
    output_dir: Path = Field(default=Path("./output"))
    docs_dir_name: str = Field(default="examples")
    excluded_dirs: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS))
    homepage_base: str = Field(default="https://github.com/zama-ai/fhevm-examples")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def template_path(self) -> Path:
        """Base Hardhat project copied into every generated project."""
        return self.root_dir / self.template_dir_name

    @property
    def docs_path(self) -> Path:
        """Directory receiving the generated Markdown pages."""
        return self.root_dir / self.docs_dir_name

    @property
    def summary_path(self) -> Path:
        """Path to the GitBook ``SUMMARY.md`` index."""
        return self.docs_path / "SUMMARY.md"

    def default_example_output(self, name: str) -> Path:
        """Default destination for ``generate-example <name>``."""
        return self.output_dir / f"fhevm-example-{name}"

    def default_category_output(self, key: str) -> Path:
        """Default destination for ``generate-category <key>``."""
        return self.output_dir / f"fhevm-examples-{key}"

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a configuration from a JSON file.

        Args:
            path: The JSON file to read.

        Returns:
            A validated ``Config`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            FHEVM_ROOT_DIR, FHEVM_TEMPLATE_DIR, FHEVM_OUTPUT_DIR,
            FHEVM_DOCS_DIR, FHEVM_HOMEPAGE_BASE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("FHEVM_ROOT_DIR"):
            kwargs["root_dir"] = Path(os.environ["FHEVM_ROOT_DIR"])
        if os.environ.get("FHEVM_TEMPLATE_DIR"):
            kwargs["template_dir_name"] = os.environ["FHEVM_TEMPLATE_DIR"]
        if os.environ.get("FHEVM_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["FHEVM_OUTPUT_DIR"])
        if os.environ.get("FHEVM_DOCS_DIR"):
            kwargs["docs_dir_name"] = os.environ["FHEVM_DOCS_DIR"]
        if os.environ.get("FHEVM_HOMEPAGE_BASE"):
            kwargs["homepage_base"] = os.environ["FHEVM_HOMEPAGE_BASE"]
        return cls(**kwargs)
