"""FHEVM example scaffolder -- generates standalone example projects.

This module copies the hub's base Hardhat template, drops in one example's
contract and test (or every example of a category), and renders the
project's ``package.json``, deployment script and README.

Quick usage::

    from fhevm_tools.config import Config
    from fhevm_tools.scaffolder import CategoryGenerator, ExampleGenerator

    config = Config(root_dir=Path("/path/to/hub"))
    ExampleGenerator(config).generate("fhe-counter", "./out/c1")
    CategoryGenerator(config).generate("basic", "./out/basic")
"""

from fhevm_tools.scaffolder.category import CategoryGenerator
from fhevm_tools.scaffolder.generator import ExampleGenerator, GeneratedProject, SkippedExample
from fhevm_tools.scaffolder.resolver import ResolvedExample, extract_type_name, resolve_example
from fhevm_tools.scaffolder.template_source import TemplateSource
from fhevm_tools.scaffolder.templates import TemplateRenderer

__all__ = [
    "CategoryGenerator",
    "ExampleGenerator",
    "GeneratedProject",
    "ResolvedExample",
    "SkippedExample",
    "TemplateRenderer",
    "TemplateSource",
    "extract_type_name",
    "resolve_example",
]
