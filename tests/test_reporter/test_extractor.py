"""Tests for structured comment extraction (fhevm_tools.reporter.extractor)."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from fhevm_tools.errors import MalformedSourceError, SourceMissingError
from fhevm_tools.reporter.extractor import (
    extract_functions,
    extract_unit,
    parse_comment_block,
)

pytestmark = pytest.mark.unit


class TestParseCommentBlock:
    def test_natspec_block(self):
        text = textwrap.dedent("""\
            pragma solidity ^0.8.24;
            /**
             * @title Encrypted Counter
             * @notice Counts without revealing the total.
             * @dev Uses euint32 arithmetic.
             * @author Zama
             * @custom:category basic
             */
            contract Counter {}
        """)
        block = parse_comment_block(text)
        assert block is not None
        assert block.title == "Encrypted Counter"
        assert block.description == "Counts without revealing the total.\nUses euint32 arithmetic."
        assert block.tags == [("author", "Zama"), ("category", "basic")]

    def test_triple_slash_block(self):
        text = "/// @title Slash Doc\n/// @notice Described here\ncontract A {}\n"
        block = parse_comment_block(text)
        assert block is not None
        assert block.title == "Slash Doc"
        assert block.description == "Described here"

    def test_first_line_title_with_label(self):
        text = textwrap.dedent("""\
            /**
             * Test Suite: FHE Counter
             * Category: basic
             * Chapter: counters
             *
             * Verifies increments and decrements.
             */
        """)
        block = parse_comment_block(text)
        assert block is not None
        assert block.title == "FHE Counter"
        assert block.tags == [("Category", "basic"), ("Chapter", "counters")]
        assert block.description == "Verifies increments and decrements."

    def test_label_after_prose_stays_in_description(self):
        text = textwrap.dedent("""\
            /**
             * @title Handles
             * Category: concepts
             * Handles reference ciphertexts.
             * Important: never reuse handles
             */
        """)
        block = parse_comment_block(text)
        assert block is not None
        assert block.tags == [("Category", "concepts")]
        assert block.description == (
            "Handles reference ciphertexts.\nImportant: never reuse handles"
        )

    def test_label_after_notice_stays_in_description(self):
        block = parse_comment_block("/// @notice Shows handles\n/// Note: handles are opaque\n")
        assert block is not None
        assert block.tags == []
        assert block.description == "Shows handles\nNote: handles are opaque"

    def test_first_line_title_without_label(self):
        block = parse_comment_block("/**\n * Plain heading\n * Body text.\n */")
        assert block is not None
        assert block.title == "Plain heading"
        assert block.description == "Body text."

    def test_only_leading_block_is_parsed(self):
        text = "/** @title First */\nfoo();\n/** @title Second */\n"
        block = parse_comment_block(text)
        assert block is not None
        assert block.title == "First"

    def test_blank_runs_collapse(self):
        block = parse_comment_block("/**\n * @title T\n * one\n *\n *\n *\n * two\n */")
        assert block is not None
        assert block.description == "one\n\ntwo"

    def test_no_block(self):
        assert parse_comment_block("// just a line comment\ncontract A {}\n") is None

    def test_plain_block_comment_is_not_documentation(self):
        assert parse_comment_block("/* not doc */\ncontract A {}\n") is None


class TestExtractFunctions:
    def test_params_and_returns(self):
        text = textwrap.dedent("""\
            contract C {
                /**
                 * @notice Adds two encrypted values
                 *   and stores the sum.
                 * @param a First operand
                 * @param b Second operand
                 * @return The encrypted sum
                 */
                function add(euint32 a, euint32 b) external returns (euint32) {}

                /// @notice Reads the value
                function get() external view returns (euint32) {}

                /// @notice Not attached to a function
                uint256 private _x;
            }
        """)
        functions = extract_functions(text)
        assert [f.name for f in functions] == ["add", "get"]
        add = functions[0]
        assert add.notice == "Adds two encrypted values and stores the sum."
        assert add.params == [("a", "First operand"), ("b", "Second operand")]
        assert add.returns == "The encrypted sum"
        assert functions[1].notice == "Reads the value"
        assert functions[1].params == []

    def test_no_functions(self):
        assert extract_functions("/** @title X */\ncontract X {}\n") == []


class TestExtractUnit:
    def test_reads_file(self, tmp_path: Path):
        path = tmp_path / "C.sol"
        path.write_text(
            "/// @title C\n/// @custom:level beginner\ncontract C {\n"
            "    /// @notice Does it\n    function run() external {}\n}\n",
            encoding="utf-8",
        )
        unit = extract_unit(path)
        assert unit.path == path
        assert unit.title == "C"
        assert unit.tag_values("LEVEL") == ["beginner"]
        assert [f.name for f in unit.functions] == ["run"]

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(SourceMissingError):
            extract_unit(tmp_path / "missing.sol")

    def test_missing_block(self, tmp_path: Path):
        path = tmp_path / "C.sol"
        path.write_text("contract C {}\n", encoding="utf-8")
        with pytest.raises(MalformedSourceError, match="No documentation comment block"):
            extract_unit(path)

    def test_not_utf8(self, tmp_path: Path):
        path = tmp_path / "C.sol"
        path.write_bytes(b"/// @title C\n// \xff\xfe\ncontract C {}\n")
        with pytest.raises(MalformedSourceError, match="not valid UTF-8"):
            extract_unit(path)

    def test_missing_block_allowed(self, tmp_path: Path):
        path = tmp_path / "C.test.ts"
        path.write_text("describe('C', () => {});\n", encoding="utf-8")
        unit = extract_unit(path, require_block=False)
        assert unit.title == ""
        assert unit.description == ""
        assert unit.tags == []
