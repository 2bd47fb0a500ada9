"""Standalone example project generator.

Takes a symbolic example name and materialises a complete Hardhat project
for it: the base template with its placeholder example removed, the
example's contract and test, a rewritten ``package.json``, a deployment
script and a README.

Every check (unknown name, existing destination, missing sources, broken
template) runs before the first write.  The project is then assembled in a
staging directory next to the destination and renamed into place, so a
failed run never leaves a half-written destination behind.

Invocations are not coordinated with each other: callers must not run two
generations against the same destination path at the same time.
"""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from fhevm_tools.catalog import get_example
from fhevm_tools.config import Config
from fhevm_tools.errors import DestinationExistsError
from fhevm_tools.utils import (
    console,
    display_path,
    print_info,
    print_step,
    print_success,
    print_warning,
    run_command,
    slugify,
)

from .manifest import rewrite_manifest
from .resolver import ResolvedExample, resolve_example
from .template_source import MANIFEST_NAME, TemplateSource
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


class SkippedExample(BaseModel):
    """An example left out of a category project, with the reason."""

    name: str
    reason: str


class GeneratedProject(BaseModel):
    """Summary of a finished generation run."""

    path: Path
    project_name: str
    type_names: list[str] = Field(default_factory=list)
    skipped: list[SkippedExample] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Shared machinery
# ---------------------------------------------------------------------------


class BaseProjectGenerator:
    """Template loading, staging and file placement shared by the generators."""

    def __init__(self, config: Config, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    # -- Pre-flight --------------------------------------------------------

    def _check_destination(self, destination: Path) -> None:
        if destination.exists():
            raise DestinationExistsError(destination)

    def _load_template(self) -> TemplateSource:
        return TemplateSource.load(self.config.template_path, self.config.excluded_dirs)

    # -- Writing -----------------------------------------------------------

    def _copy_example(self, resolved: ResolvedExample, project_root: Path) -> None:
        """Copy the contract (renamed after its type) and the test file."""
        contracts_dir = project_root / "contracts"
        tests_dir = project_root / "test"
        contracts_dir.mkdir(parents=True, exist_ok=True)
        tests_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(resolved.contract_path, contracts_dir / resolved.contract_filename)
        shutil.copyfile(resolved.test_path, tests_dir / resolved.test_filename)

    def _render_deploy_script(
        self,
        project_root: Path,
        type_names: list[str],
        func_id: str,
        tags: list[str],
        with_comments: bool,
    ) -> Path:
        context: dict[str, Any] = {
            "type_names": type_names,
            "func_id": func_id,
            "tags": tags,
            "with_comments": with_comments,
        }
        return self.renderer.render_to_file(
            "deploy/deploy.ts.j2", project_root / "deploy" / "deploy.ts", context
        )

    def _rewrite_manifest(self, project_root: Path, name: str, description: str, slug: str) -> None:
        rewrite_manifest(
            project_root / MANIFEST_NAME,
            name=name,
            description=description,
            homepage=f"{self.config.homepage_base.rstrip('/')}/{slug}",
        )

    # -- Post-generation ---------------------------------------------------

    def _init_git(self, project_root: Path) -> bool:
        """Initialise a git repository with an initial commit.

        Failure is reported as a warning; the generated project stays valid.
        """
        for cmd in (
            ["git", "init"],
            ["git", "add", "."],
            ["git", "commit", "-m", "Initial commit: FHEVM example repository"],
        ):
            returncode, _stdout, stderr = run_command(cmd, cwd=project_root)
            if returncode != 0:
                print_warning(f"Could not initialize git repository ({stderr or 'git failed'})")
                return False
        print_success("Git repository initialized")
        return True

    def _print_next_steps(self, project_root: Path) -> None:
        console.print("\n[yellow]Next steps:[/yellow]")
        console.print(f"  cd {display_path(project_root)}", markup=False)
        console.print("  npm install")
        console.print("  npm run compile")
        console.print("  npm run test")


@contextmanager
def staged_directory(destination: Path) -> Iterator[Path]:
    """Yield a staging directory that becomes *destination* on success.

    The staging directory is a sibling of *destination*, so the final rename
    stays on one file system.  On any error it is removed and the error
    propagates.
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    staging = Path(
        tempfile.mkdtemp(prefix=f".{destination.name}.", suffix=".staging", dir=destination.parent)
    )
    staging.chmod(0o755)
    try:
        yield staging
        if destination.exists():
            raise DestinationExistsError(destination)
        staging.rename(destination)
    except BaseException:
        shutil.rmtree(staging, ignore_errors=True)
        raise


# ---------------------------------------------------------------------------
# Single-example generator
# ---------------------------------------------------------------------------


class ExampleGenerator(BaseProjectGenerator):
    """Generates a standalone project for one example.

    Any problem with the example is fatal: unknown name, existing
    destination, missing contract or test, or a contract without a primary
    ``contract`` declaration.
    """

    def generate(
        self,
        name: str,
        destination: str | Path | None = None,
        *,
        init_git: bool = False,
    ) -> GeneratedProject:
        """Generate the project for example *name*.

        Args:
            name: Symbolic example name from the example table.
            destination: Project directory to create.  Defaults to
                ``<output_dir>/fhevm-example-<name>``.
            init_git: Initialise a git repository in the new project.

        Returns:
            A ``GeneratedProject`` describing the written project.
        """
        descriptor = get_example(name)
        dest = Path(destination) if destination else self.config.default_example_output(name)
        self._check_destination(dest)

        resolved = resolve_example(descriptor, self.config.root_dir)
        template = self._load_template()

        slug = slugify(name)
        project_name = f"fhevm-example-{slug}"

        print_info(f"Creating FHEVM example: {name}")
        print_info(f"Output directory: {dest}")

        with staged_directory(dest) as root:
            print_step(1, "Copying template")
            template.write_to(root)
            print_success("Template copied")

            print_step(2, "Copying contract and test")
            self._copy_example(resolved, root)
            print_success(f"Contract copied: {resolved.contract_filename}")
            print_success(f"Test copied: {resolved.test_filename}")

            print_step(3, "Updating configuration")
            self._rewrite_manifest(root, project_name, descriptor.description, slug)
            self._render_deploy_script(
                root,
                [resolved.type_name],
                func_id=f"deploy_{resolved.type_name.lower()}",
                tags=[resolved.type_name],
                with_comments=False,
            )
            print_success("Configuration updated")

            print_step(4, "Generating README")
            self.renderer.render_to_file(
                "README.md.j2",
                root / "README.md",
                {
                    "example_name": name,
                    "description": descriptor.description,
                    "type_name": resolved.type_name,
                },
            )
            print_success("README.md generated")

        if init_git:
            self._init_git(dest)

        console.print()
        print_success(f'FHEVM example "{name}" created successfully!')
        self._print_next_steps(dest)

        return GeneratedProject(
            path=dest,
            project_name=project_name,
            type_names=[resolved.type_name],
        )
