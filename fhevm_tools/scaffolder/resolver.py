"""Contract/test resolution for example descriptors.

Maps a descriptor onto absolute file paths under the hub root and reads the
primary contract name out of the Solidity source.  The name decides the
generated contract's file name and every deploy/README substitution.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel

from fhevm_tools.catalog import ExampleDescriptor
from fhevm_tools.errors import SourceMissingError, TypeNameNotFoundError
from fhevm_tools.utils import read_source

# A line whose first token is ``contract``, then the identifier, then either an
# inheritance clause or the opening brace (possibly on the next line).
# ``abstract contract``, ``interface`` and ``library`` never match.
_CONTRACT_DECL = re.compile(
    r"^[ \t]*contract[ \t]+([A-Za-z_$][A-Za-z0-9_$]*)(?:\s+is\s|\s*\{)",
    re.MULTILINE,
)


class ResolvedExample(BaseModel):
    """A descriptor bound to concrete source files on disk."""

    descriptor: ExampleDescriptor
    contract_path: Path
    test_path: Path
    type_name: str

    @property
    def contract_filename(self) -> str:
        return f"{self.type_name}.sol"

    @property
    def test_filename(self) -> str:
        return self.test_path.name


def extract_type_name(source: str, path: str | Path = "<source>") -> str:
    """Return the name of the first ``contract`` declared in *source*.

    Raises:
        TypeNameNotFoundError: if no declaration matches.
    """
    match = _CONTRACT_DECL.search(source)
    if match is None:
        raise TypeNameNotFoundError(path)
    return match.group(1)


def resolve_example(descriptor: ExampleDescriptor, root_dir: Path) -> ResolvedExample:
    """Resolve *descriptor* against *root_dir*.

    Both files must exist; the contract is read to extract its type name.

    Raises:
        SourceMissingError: if the contract or the test file is missing.
        TypeNameNotFoundError: if the contract declares no primary contract.
    """
    contract_path = Path(root_dir) / descriptor.contract
    test_path = Path(root_dir) / descriptor.test

    if not contract_path.is_file():
        raise SourceMissingError("contract", descriptor.contract, descriptor.name)
    if not test_path.is_file():
        raise SourceMissingError("test", descriptor.test, descriptor.name)

    source = read_source(contract_path, "contract")
    type_name = extract_type_name(source, descriptor.contract)

    return ResolvedExample(
        descriptor=descriptor,
        contract_path=contract_path,
        test_path=test_path,
        type_name=type_name,
    )
