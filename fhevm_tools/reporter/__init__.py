"""FHEVM example documentation generator.

Extracts the structured comment blocks of each example's contract and test
and renders them as GitBook Markdown pages plus a ``SUMMARY.md`` index.

Quick usage::

    from fhevm_tools.config import Config
    from fhevm_tools.reporter import DocsGenerator

    generator = DocsGenerator(Config(root_dir=Path("/path/to/hub")))
    generator.generate("fhe-counter")
    result = generator.generate_all()
"""

from fhevm_tools.reporter.docs import DocsBatchResult, DocsGenerator, insert_index_link
from fhevm_tools.reporter.extractor import (
    CommentBlock,
    DocumentationUnit,
    FunctionDoc,
    extract_functions,
    extract_unit,
    parse_comment_block,
)

__all__ = [
    "CommentBlock",
    "DocsBatchResult",
    "DocsGenerator",
    "DocumentationUnit",
    "FunctionDoc",
    "extract_functions",
    "extract_unit",
    "insert_index_link",
    "parse_comment_block",
]
