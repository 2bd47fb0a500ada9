"""Structured comment extraction from contract and test sources.

A documentation block is either a ``/** ... */`` comment or a run of
consecutive ``///`` lines.  The *leading* block of a file is the first one in
it.  Inside a block:

- ``@title X`` sets the title.
- ``@notice`` / ``@dev`` values and untagged lines form the description.
- Any other ``@tag value`` line becomes a ``(tag, value)`` pair; a
  ``custom:`` prefix is dropped (``@custom:category basic`` -> ``category``).
- ``Label: value`` lines with a short label become ``(Label, value)`` pairs
  while they precede the description; later on they are ordinary prose.
- Without ``@title`` the first line of the block is the title, minus any
  ``Label: `` prefix (``Test Suite: FHE Counter`` -> ``FHE Counter``).

Blocks directly followed by ``function name(`` are also collected as
per-function NatSpec.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field

from fhevm_tools.errors import MalformedSourceError, SourceMissingError
from fhevm_tools.utils import read_source

_BLOCK_COMMENT = re.compile(r"/\*\*(?!/)(.*?)\*/", re.DOTALL)
_SLASH_RUN = re.compile(r"(?:^[ \t]*///.*(?:\n|$))+", re.MULTILINE)
_TAG_LINE = re.compile(r"^@([A-Za-z][\w:.-]*)\s*(.*)$")
_LABEL_LINE = re.compile(r"^([A-Za-z][A-Za-z0-9 _-]{0,30}):\s+(\S.*)$")
_FOLLOWING_FUNCTION = re.compile(r"\s*function\s+([A-Za-z_$][A-Za-z0-9_$]*)\s*\(")

_DESCRIPTION_TAGS = ("notice", "dev")


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------


class CommentBlock(BaseModel):
    """Parsed content of one documentation block."""

    title: str = ""
    description: str = ""
    tags: list[tuple[str, str]] = Field(default_factory=list)


class FunctionDoc(BaseModel):
    """NatSpec documentation attached to one contract function."""

    name: str
    notice: str = ""
    params: list[tuple[str, str]] = Field(default_factory=list)
    returns: str = ""


class DocumentationUnit(BaseModel):
    """Documentation extracted from one source file."""

    path: Path
    title: str = ""
    description: str = ""
    tags: list[tuple[str, str]] = Field(default_factory=list)
    functions: list[FunctionDoc] = Field(default_factory=list)

    def tag_values(self, name: str) -> list[str]:
        """Return every value of tag *name* (case-insensitive), in order."""
        wanted = name.lower()
        return [value for tag, value in self.tags if tag.lower() == wanted]


# ---------------------------------------------------------------------------
# Block discovery
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _RawBlock:
    start: int
    end: int
    lines: list[str]


def _iter_blocks(text: str) -> Iterator[_RawBlock]:
    """Yield every documentation block in *text*, in source order."""
    blocks: list[_RawBlock] = []
    for match in _BLOCK_COMMENT.finditer(text):
        lines = [_clean_line(line, "*") for line in match.group(1).splitlines()]
        blocks.append(_RawBlock(match.start(), match.end(), lines))
    for match in _SLASH_RUN.finditer(text):
        lines = [_clean_line(line, "///") for line in match.group(0).splitlines()]
        blocks.append(_RawBlock(match.start(), match.end(), lines))
    yield from sorted(blocks, key=lambda b: b.start)


def _clean_line(line: str, marker: str) -> str:
    stripped = line.strip()
    if stripped.startswith(marker):
        stripped = stripped[len(marker):]
    return stripped.strip()


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_comment_block(text: str) -> CommentBlock | None:
    """Parse the leading documentation block of *text*.

    Returns ``None`` when the text contains no documentation block.
    """
    first = next(_iter_blocks(text), None)
    if first is None:
        return None
    return _parse_lines(first.lines)


def _parse_lines(lines: list[str]) -> CommentBlock:
    lines = _trim_blank(lines)
    block = CommentBlock()
    description: list[str] = []

    has_title_tag = any(_tag_name(line) == "title" for line in lines)
    if not has_title_tag and lines and not _TAG_LINE.match(lines[0]):
        label = _LABEL_LINE.match(lines[0])
        block.title = label.group(2).strip() if label else lines[0]
        lines = lines[1:]

    # Label lines are metadata only until the first line of prose.
    in_header = True
    for line in lines:
        tag_match = _TAG_LINE.match(line)
        if tag_match:
            tag = tag_match.group(1).removeprefix("custom:")
            value = tag_match.group(2).strip()
            if tag == "title":
                block.title = block.title or value
            elif tag in _DESCRIPTION_TAGS:
                description.append(value)
                in_header = False
            else:
                block.tags.append((tag, value))
            continue

        label_match = _LABEL_LINE.match(line) if in_header else None
        if label_match:
            block.tags.append((label_match.group(1).strip(), label_match.group(2).strip()))
            continue

        if line:
            in_header = False
        description.append(line)

    block.description = _join_paragraphs(description)
    return block


def _tag_name(line: str) -> str | None:
    match = _TAG_LINE.match(line)
    return match.group(1) if match else None


def _trim_blank(lines: list[str]) -> list[str]:
    start, end = 0, len(lines)
    while start < end and not lines[start]:
        start += 1
    while end > start and not lines[end - 1]:
        end -= 1
    return lines[start:end]


def _join_paragraphs(lines: list[str]) -> str:
    """Join description lines, collapsing runs of blank lines."""
    out: list[str] = []
    for line in _trim_blank(lines):
        if not line and out and not out[-1]:
            continue
        out.append(line)
    return "\n".join(out)


def extract_functions(text: str) -> list[FunctionDoc]:
    """Collect NatSpec for every documented ``function`` in *text*."""
    functions: list[FunctionDoc] = []
    for raw in _iter_blocks(text):
        match = _FOLLOWING_FUNCTION.match(text, raw.end)
        if match is None:
            continue
        doc = FunctionDoc(name=match.group(1))
        notice: list[str] = []
        # Untagged lines continue the notice until another tag starts.
        in_notice = True
        for line in raw.lines:
            tag_match = _TAG_LINE.match(line)
            if not tag_match:
                if line and in_notice:
                    notice.append(line)
                continue
            tag, value = tag_match.group(1), tag_match.group(2).strip()
            in_notice = tag in _DESCRIPTION_TAGS
            if in_notice:
                notice.append(value)
            elif tag == "param":
                name, _, desc = value.partition(" ")
                doc.params.append((name, desc.strip()))
            elif tag == "return":
                doc.returns = value
        doc.notice = " ".join(part for part in notice if part)
        functions.append(doc)
    return functions


def extract_unit(path: Path, *, require_block: bool = True) -> DocumentationUnit:
    """Read *path* and extract its documentation.

    Raises:
        SourceMissingError: if the file does not exist or cannot be read.
        MalformedSourceError: if the file is not valid UTF-8, or if
            *require_block* is set and the file has no documentation block.
    """
    if not path.is_file():
        raise SourceMissingError("source", path)
    text = read_source(path)

    block = parse_comment_block(text)
    if block is None:
        if require_block:
            raise MalformedSourceError(path, "No documentation comment block found")
        block = CommentBlock()

    return DocumentationUnit(
        path=path,
        title=block.title,
        description=block.description,
        tags=block.tags,
        functions=extract_functions(text),
    )
