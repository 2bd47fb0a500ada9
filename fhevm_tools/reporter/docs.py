"""GitBook documentation generator.

Produces one ``<example>.md`` page per example from the contract's and the
test's documentation blocks, and keeps ``SUMMARY.md`` (the GitBook index)
up to date.  Index updates are idempotent: a link is only added when no line
of the index already points at the same page.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from fhevm_tools.catalog import CATEGORIES, EXAMPLES, ExampleDescriptor, get_example
from fhevm_tools.config import Config
from fhevm_tools.errors import ScaffoldError, SourceMissingError
from fhevm_tools.scaffolder.templates import TemplateRenderer
from fhevm_tools.utils import print_error, print_info, print_success, read_source

from .extractor import DocumentationUnit, extract_unit

_TEMPLATE_DIR = Path(__file__).parent / "templates"

_LANGUAGES: dict[str, str] = {
    ".sol": "solidity",
    ".ts": "typescript",
    ".js": "javascript",
}


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------


class DocsBatchResult(BaseModel):
    """Outcome of a multi-example documentation run."""

    generated: list[Path] = Field(default_factory=list)
    failed: dict[str, str] = Field(default_factory=dict, description="Example name -> error")

    @property
    def ok(self) -> bool:
        return not self.failed


# ---------------------------------------------------------------------------
# DocsGenerator
# ---------------------------------------------------------------------------


class DocsGenerator:
    """Generates Markdown pages and the ``SUMMARY.md`` index for examples."""

    def __init__(self, config: Config, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer(_TEMPLATE_DIR)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(self, name: str) -> Path:
        """Generate the page for example *name* and index it.

        Raises:
            UnknownExampleError: if *name* is not in the example table.
            SourceMissingError: if the contract or the test is missing.
            MalformedSourceError: if the contract has no documentation block.
        """
        descriptor = get_example(name)
        contract_path = self.config.root_dir / descriptor.contract
        test_path = self.config.root_dir / descriptor.test

        if not contract_path.is_file():
            raise SourceMissingError("contract", descriptor.contract, name)
        if not test_path.is_file():
            raise SourceMissingError("test", descriptor.test, name)

        print_info(f"Generating documentation for: {name}")

        contract_unit = extract_unit(contract_path)
        test_unit = extract_unit(test_path, require_block=False)

        context = self._build_context(descriptor, contract_unit, test_unit)
        docs_dir = self.config.docs_path
        docs_dir.mkdir(parents=True, exist_ok=True)

        output = self.renderer.render_to_file("example.md.j2", docs_dir / f"{name}.md", context)
        print_success(f"Documentation generated: {output}")

        if self.update_summary(descriptor, context["title"]):
            print_success("SUMMARY.md updated")
        return output

    def generate_all(self) -> DocsBatchResult:
        """Generate pages for every known example.

        A failing example is reported and recorded; the remaining examples
        are still processed.
        """
        result = DocsBatchResult()
        for name in EXAMPLES:
            try:
                result.generated.append(self.generate(name))
            except ScaffoldError as exc:
                print_error(str(exc))
                result.failed[name] = str(exc)
        return result

    # ------------------------------------------------------------------
    # Index
    # ------------------------------------------------------------------

    def update_summary(self, descriptor: ExampleDescriptor, title: str) -> bool:
        """Add the example's link to ``SUMMARY.md`` if it is not there yet.

        Returns ``True`` when the file changed.
        """
        summary_path = self.config.summary_path
        if summary_path.exists():
            content = read_source(summary_path, "index")
        else:
            content = self.renderer.render("SUMMARY.md.j2", {"headings": _default_headings()})

        updated = insert_index_link(
            content,
            heading=_category_heading(descriptor.category),
            link=f"* [{title}]({descriptor.name}.md)",
            target=f"{descriptor.name}.md",
        )
        if updated == content and summary_path.exists():
            return False

        summary_path.parent.mkdir(parents=True, exist_ok=True)
        summary_path.write_text(updated, encoding="utf-8")
        return True

    # ------------------------------------------------------------------
    # Context building
    # ------------------------------------------------------------------

    def _build_context(
        self,
        descriptor: ExampleDescriptor,
        contract: DocumentationUnit,
        test: DocumentationUnit,
    ) -> dict[str, Any]:
        tags: list[tuple[str, str]] = []
        for pair in [*contract.tags, *test.tags]:
            if pair not in tags:
                tags.append(pair)

        return {
            "title": contract.title or descriptor.title or descriptor.name,
            "description": contract.description or test.description or descriptor.description,
            "tags": tags,
            "functions": contract.functions,
            "contract_source": _read_source(contract.path),
            "contract_language": _language_for(contract.path),
            "test_source": _read_source(test.path),
            "test_language": _language_for(test.path),
            "category_name": _category_heading(descriptor.category),
        }


# ---------------------------------------------------------------------------
# Index editing
# ---------------------------------------------------------------------------


def insert_index_link(content: str, *, heading: str, link: str, target: str) -> str:
    """Return *content* with *link* appended to the ``## heading`` section.

    Nothing changes when any line already links to ``(target)``.  A missing
    section is appended at the end of the document.
    """
    lines = content.splitlines()
    if any(f"]({target})" in line for line in lines):
        return content

    heading_line = f"## {heading}"
    try:
        start = next(i for i, line in enumerate(lines) if line.strip() == heading_line)
    except StopIteration:
        while lines and not lines[-1].strip():
            lines.pop()
        lines.extend(["", heading_line, "", link])
        return "\n".join(lines) + "\n"

    end = next(
        (i for i in range(start + 1, len(lines)) if lines[i].lstrip().startswith("#")),
        len(lines),
    )
    last_content = max(
        (i for i in range(start + 1, end) if lines[i].strip()),
        default=None,
    )
    if last_content is None:
        new_lines = ["", link]
        if end < len(lines):
            new_lines.append("")
        lines[start + 1:end] = new_lines
    else:
        lines.insert(last_content + 1, link)
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _default_headings() -> list[str]:
    """Section headings for categories that own at least one example."""
    used = {descriptor.category for descriptor in EXAMPLES.values()}
    return [category.name for key, category in CATEGORIES.items() if key in used]


def _category_heading(key: str) -> str:
    category = CATEGORIES.get(key)
    return category.name if category else key.replace("-", " ").title()


def _language_for(path: Path) -> str:
    return _LANGUAGES.get(path.suffix, "")


def _read_source(path: Path) -> str:
    return read_source(path).rstrip("\n")
