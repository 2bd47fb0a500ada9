"""Category project generator.

Bundles every example of a category into one Hardhat project with a single
deployment script.  Unlike :class:`~fhevm_tools.scaffolder.generator.ExampleGenerator`
this is best effort: an example whose sources are missing or whose contract
name cannot be determined is skipped with a warning, and the project is
generated from the rest.  Only an unknown category, an existing destination
or a broken template abort the run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fhevm_tools.catalog import examples_in_category, get_category
from fhevm_tools.errors import ScaffoldError
from fhevm_tools.utils import (
    console,
    display_path,
    print_info,
    print_step,
    print_success,
    print_summary_table,
    print_warning,
)

from .generator import BaseProjectGenerator, GeneratedProject, SkippedExample, staged_directory
from .resolver import ResolvedExample, resolve_example


class CategoryGenerator(BaseProjectGenerator):
    """Generates one project containing all examples of a category."""

    def generate(
        self,
        key: str,
        destination: str | Path | None = None,
        *,
        init_git: bool = False,
    ) -> GeneratedProject:
        """Generate the project for category *key*.

        Args:
            key: Category key from the category table.
            destination: Project directory to create.  Defaults to
                ``<output_dir>/fhevm-examples-<key>``.
            init_git: Initialise a git repository in the new project.

        Returns:
            A ``GeneratedProject`` listing the deployed type names in declared
            order and the skipped examples.
        """
        category = get_category(key)
        dest = Path(destination) if destination else self.config.default_category_output(key)
        self._check_destination(dest)
        template = self._load_template()

        resolved, skipped = self._resolve_all(key)
        type_names = [r.type_name for r in resolved]
        project_name = f"fhevm-examples-{key}"

        print_info(f"Creating FHEVM project: {category.name}")
        print_info(f"Output directory: {dest}")

        with staged_directory(dest) as root:
            print_step(1, "Copying template")
            template.write_to(root)
            print_success("Template copied")

            print_step(2, "Copying contracts and tests")
            for example in resolved:
                self._copy_example(example, root)
                console.print(f"  [green]✓[/green] {example.contract_filename}", highlight=False)
                console.print(f"  [green]✓[/green] {example.test_filename}", highlight=False)
            print_success(f"Copied {len(resolved)} contracts and their tests")

            print_step(3, "Generating deployment script")
            self._render_deploy_script(
                root,
                type_names,
                func_id="deploy_all",
                tags=["all", *type_names],
                with_comments=True,
            )
            print_success("Deployment script generated")

            print_step(4, "Updating package.json")
            self._rewrite_manifest(root, project_name, category.description, key)
            print_success("package.json updated")

            print_step(5, "Generating README")
            self.renderer.render_to_file(
                "category_README.md.j2",
                root / "README.md",
                {
                    "category_name": category.name,
                    "description": category.description,
                    "examples": [_readme_entry(r) for r in resolved],
                },
            )
            print_success("README.md generated")

        if init_git:
            self._init_git(dest)

        console.print()
        print_success(f"FHEVM {category.name} project created successfully!")
        print_summary_table(
            {
                "Category": category.name,
                "Contracts": str(len(type_names)),
                "Skipped": str(len(skipped)),
                "Location": display_path(dest),
            },
            title="Project Summary",
        )
        self._print_next_steps(dest)

        return GeneratedProject(
            path=dest,
            project_name=project_name,
            type_names=type_names,
            skipped=skipped,
        )

    def _resolve_all(self, key: str) -> tuple[list[ResolvedExample], list[SkippedExample]]:
        """Resolve the category's examples in order, skipping broken ones."""
        resolved: list[ResolvedExample] = []
        skipped: list[SkippedExample] = []
        seen_types: set[str] = set()
        seen_tests: set[str] = set()

        for descriptor in examples_in_category(key):
            try:
                example = resolve_example(descriptor, self.config.root_dir)
            except ScaffoldError as exc:
                print_warning(f"Skipping {descriptor.name}: {exc}")
                skipped.append(SkippedExample(name=descriptor.name, reason=str(exc)))
                continue

            # Both copies land in flat directories; a repeated name would overwrite.
            reason = None
            if example.type_name in seen_types:
                reason = f"Duplicate contract name {example.type_name}"
            elif example.test_filename in seen_tests:
                reason = f"Duplicate test file name {example.test_filename}"
            if reason:
                print_warning(f"Skipping {descriptor.name}: {reason}")
                skipped.append(SkippedExample(name=descriptor.name, reason=reason))
                continue

            seen_types.add(example.type_name)
            seen_tests.add(example.test_filename)
            resolved.append(example)

        return resolved, skipped


def _readme_entry(example: ResolvedExample) -> dict[str, Any]:
    return {
        "name": example.descriptor.name,
        "description": example.descriptor.description,
        "type_name": example.type_name,
        "test_filename": example.test_filename,
    }
