"""Command-line entry point for the FHEVM example tools.

Usage::

    python -m fhevm_tools generate-example fhe-counter ./output/my-fhe-counter
    python -m fhevm_tools generate-category basic ./output/basic-examples
    python -m fhevm_tools generate-docs --all
    python -m fhevm_tools list
"""

from __future__ import annotations

import argparse
from pathlib import Path

from pydantic import ValidationError
from rich.table import Table

from fhevm_tools.catalog import CATEGORIES, EXAMPLES
from fhevm_tools.config import Config
from fhevm_tools.errors import ScaffoldError
from fhevm_tools.reporter import DocsGenerator
from fhevm_tools.scaffolder import CategoryGenerator, ExampleGenerator
from fhevm_tools.utils import console, print_error, print_success, print_warning


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _catalog_epilog() -> str:
    """Plain-text listing of every known example and category."""
    lines = ["Available examples:"]
    for name, example in EXAMPLES.items():
        lines.append(f"  {name}")
        lines.append(f"      {example.description}")
    lines.append("")
    lines.append("Available categories:")
    for key, category in CATEGORIES.items():
        lines.append(f"  {key} ({len(category.examples)} contracts)")
        lines.append(f"      {category.name}: {category.description}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    epilog = _catalog_epilog()
    parser = argparse.ArgumentParser(
        prog="fhevm-tools",
        description="FHEVM example tools -- scaffold example projects and generate docs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  fhevm-tools generate-example fhe-counter ./output/my-fhe-counter\n"
            "  fhevm-tools generate-category basic ./output/basic-examples\n"
            "  fhevm-tools generate-docs --all\n\n" + epilog
        ),
    )
    parser.add_argument(
        "--root",
        default=None,
        help="Root of the example hub (default: $FHEVM_ROOT_DIR or the current directory)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON configuration file (overrides environment variables)",
    )

    sub = parser.add_subparsers(dest="command", metavar="<command>")
    sub.required = True

    example = sub.add_parser(
        "generate-example",
        help="Generate a standalone project for one example",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    example.add_argument("name", help="Example name")
    example.add_argument(
        "output_dir",
        nargs="?",
        default=None,
        help="Output directory (default: ./output/fhevm-example-<name>)",
    )
    example.add_argument("--init-git", action="store_true", help="Initialise a git repository")

    category = sub.add_parser(
        "generate-category",
        help="Generate one project with every example of a category",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    category.add_argument("category", help="Category key")
    category.add_argument(
        "output_dir",
        nargs="?",
        default=None,
        help="Output directory (default: ./output/fhevm-examples-<category>)",
    )
    category.add_argument("--init-git", action="store_true", help="Initialise a git repository")

    docs = sub.add_parser(
        "generate-docs",
        help="Generate GitBook documentation for one or all examples",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    docs.add_argument("name", nargs="?", default=None, help="Example name")
    docs.add_argument("--all", action="store_true", help="Generate documentation for all examples")

    sub.add_parser(
        "list",
        help="List known examples and categories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )

    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _load_config(args: argparse.Namespace) -> Config:
    config = Config.load(Path(args.config)) if args.config else Config.from_env()
    if args.root:
        config.root_dir = Path(args.root)
    return config


def _cmd_generate_example(args: argparse.Namespace, config: Config) -> int:
    ExampleGenerator(config).generate(args.name, args.output_dir, init_git=args.init_git)
    return 0


def _cmd_generate_category(args: argparse.Namespace, config: Config) -> int:
    project = CategoryGenerator(config).generate(
        args.category, args.output_dir, init_git=args.init_git
    )
    if project.skipped:
        print_warning(f"{len(project.skipped)} example(s) skipped")
    return 0


def _cmd_generate_docs(args: argparse.Namespace, config: Config) -> int:
    generator = DocsGenerator(config)
    if not args.all:
        generator.generate(args.name)
        return 0

    result = generator.generate_all()
    print_success(f"Generated {len(result.generated)} documentation page(s)")
    if not result.ok:
        print_error(f"{len(result.failed)} example(s) failed: {', '.join(result.failed)}")
        return 1
    return 0


def _cmd_list(args: argparse.Namespace, config: Config) -> int:
    examples = Table(title="Examples", show_header=True, header_style="bold cyan")
    examples.add_column("Name", style="green", no_wrap=True)
    examples.add_column("Category")
    examples.add_column("Description")
    for name, example in EXAMPLES.items():
        examples.add_row(name, example.category, example.description)
    console.print(examples)

    categories = Table(title="Categories", show_header=True, header_style="bold cyan")
    categories.add_column("Key", style="green", no_wrap=True)
    categories.add_column("Name")
    categories.add_column("Examples")
    for key, category in CATEGORIES.items():
        categories.add_row(key, category.name, ", ".join(category.examples))
    console.print(categories)
    return 0


_COMMANDS = {
    "generate-example": _cmd_generate_example,
    "generate-category": _cmd_generate_category,
    "generate-docs": _cmd_generate_docs,
    "list": _cmd_list,
}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.  Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "generate-docs" and bool(args.name) == bool(args.all):
        parser.error("generate-docs takes either an example name or --all")

    try:
        config = _load_config(args)
    except (OSError, UnicodeDecodeError, ValidationError) as exc:
        print_error(f"Invalid configuration: {exc}")
        return 1

    try:
        return _COMMANDS[args.command](args, config)
    except ScaffoldError as exc:
        print_error(str(exc))
        return 1
