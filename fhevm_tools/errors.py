"""Error taxonomy for the example tools.

Every failure the library can report derives from :class:`ScaffoldError`, so
the CLI can catch a single type and turn it into a red ``Error:`` line and a
non-zero exit code.  Library code raises; it never prints or exits.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all errors raised by the example tools."""


# ---------------------------------------------------------------------------
# Configuration errors (unknown names in the static tables)
# ---------------------------------------------------------------------------


class ConfigurationError(ScaffoldError):
    """Raised when a symbolic name does not resolve to a static descriptor."""


class UnknownExampleError(ConfigurationError):
    """Raised for an example name missing from the example table."""

    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        self.known = known
        listing = "\n".join(f"  - {k}" for k in known)
        super().__init__(f"Unknown example: {name}\n\nAvailable examples:\n{listing}")


class UnknownCategoryError(ConfigurationError):
    """Raised for a category key missing from the category table."""

    def __init__(self, key: str, known: dict[str, str]) -> None:
        self.key = key
        self.known = known
        listing = "\n".join(f"  - {k}: {title}" for k, title in known.items())
        super().__init__(f"Unknown category: {key}\n\nAvailable categories:\n{listing}")


# ---------------------------------------------------------------------------
# File-system errors
# ---------------------------------------------------------------------------


class SourceMissingError(ScaffoldError):
    """Raised when a descriptor references a file that does not exist."""

    def __init__(self, kind: str, path: str | Path, example: str | None = None) -> None:
        self.kind = kind
        self.path = Path(path)
        self.example = example
        prefix = f"[{example}] " if example else ""
        super().__init__(f"{prefix}{kind.capitalize()} not found: {path}")


class DestinationExistsError(ScaffoldError):
    """Raised when the output directory already exists."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Output directory already exists: {path}")


class TemplateError(ScaffoldError):
    """Raised when the base project template cannot be read."""


# ---------------------------------------------------------------------------
# Source content errors
# ---------------------------------------------------------------------------


class MalformedSourceError(ScaffoldError):
    """Raised when a source file lacks an expected declaration or comment block."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class TypeNameNotFoundError(MalformedSourceError):
    """Raised when no primary ``contract`` declaration can be found."""

    def __init__(self, path: str | Path = "<source>") -> None:
        super().__init__(path, "Could not determine type name")
