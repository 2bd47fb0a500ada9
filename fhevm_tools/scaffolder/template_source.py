"""In-memory snapshot of the base project template.

The template tree is read once, before anything is written, so a broken or
missing template is reported while the destination is still untouched.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from fhevm_tools.errors import TemplateError

MANIFEST_NAME = "package.json"

# (directory, suffixes) pairs: top-level files of these directories belong to
# the template's own example and are replaced by the generated project's.
PLACEHOLDER_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("contracts", (".sol",)),
    ("test", (".ts", ".js")),
    ("deploy", (".ts",)),
)


@dataclass(frozen=True)
class TemplateFile:
    """One file of the template tree."""

    relative_path: PurePosixPath
    content: bytes
    mode: int = 0o644

    @property
    def is_placeholder(self) -> bool:
        parts = self.relative_path.parts
        if len(parts) != 2:
            return False
        directory, filename = parts
        return any(
            directory == rule_dir and filename.endswith(suffixes)
            for rule_dir, suffixes in PLACEHOLDER_RULES
        )


@dataclass
class TemplateSource:
    """The template's files, keyed by POSIX relative path."""

    root: Path
    files: list[TemplateFile] = field(default_factory=list)

    @classmethod
    def load(cls, template_dir: Path, excluded_dirs: list[str] | None = None) -> "TemplateSource":
        """Read every file under *template_dir*, skipping excluded directories.

        Raises:
            TemplateError: if the directory is missing or has no ``package.json``.
        """
        root = Path(template_dir)
        if not root.is_dir():
            raise TemplateError(f"Template directory not found: {root}")
        if not (root / MANIFEST_NAME).is_file():
            raise TemplateError(f"Template has no {MANIFEST_NAME}: {root}")

        excluded = set(excluded_dirs or [])
        files: list[TemplateFile] = []
        _collect(root, root, excluded, files)
        return cls(root=root, files=files)

    def project_files(self) -> list[TemplateFile]:
        """Files to copy into a generated project (placeholders removed)."""
        return [f for f in self.files if not f.is_placeholder]

    def write_to(self, destination: Path) -> list[Path]:
        """Write the project files under *destination*, keeping permissions."""
        written: list[Path] = []
        for f in self.project_files():
            target = destination.joinpath(*f.relative_path.parts)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(f.content)
            target.chmod(f.mode)
            written.append(target)
        return written


def _collect(root: Path, directory: Path, excluded: set[str], out: list[TemplateFile]) -> None:
    for entry in sorted(directory.iterdir()):
        if entry.is_dir():
            if entry.name in excluded:
                continue
            _collect(root, entry, excluded, out)
        elif entry.is_file():
            rel = PurePosixPath(entry.relative_to(root).as_posix())
            mode = stat.S_IMODE(entry.stat().st_mode)
            out.append(TemplateFile(relative_path=rel, content=entry.read_bytes(), mode=mode))
