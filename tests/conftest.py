"""Shared pytest fixtures for the FHEVM example tools test suite.

Provides reusable fixtures for:
- A throw-away example hub (base Hardhat template, contracts, tests)
- A Config pointing at that hub with output under tmp_path
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest

from fhevm_tools.catalog import EXAMPLES
from fhevm_tools.config import Config


# ---------------------------------------------------------------------------
# Source builders
# ---------------------------------------------------------------------------

COUNTER_SOURCE = textwrap.dedent("""\
    // SPDX-License-Identifier: BSD-3-Clause-Clear
    pragma solidity ^0.8.24;

    import {FHE, euint32, externalEuint32} from "@fhevm/solidity/lib/FHE.sol";
    import {ZamaEthereumConfig} from "@fhevm/solidity/config/ZamaConfig.sol";

    /**
     * @title FHE Counter
     * @notice A simple counter whose value stays encrypted.
     * @dev Every update grants the caller access to the new handle.
     * @custom:category basic
     * @custom:chapter counter
     */
    contract FHECounter is ZamaEthereumConfig {
        euint32 private _count;

        /// @notice Returns the encrypted count
        /// @return The current encrypted count handle
        function getCount() external view returns (euint32) {
            return _count;
        }

        /**
         * @notice Increments the counter by an encrypted amount.
         * @param inputEuint32 The encrypted increment
         * @param inputProof The proof binding the input to the caller
         */
        function increment(externalEuint32 inputEuint32, bytes calldata inputProof) external {
            euint32 value = FHE.fromExternal(inputEuint32, inputProof);
            _count = FHE.add(_count, value);
            FHE.allowThis(_count);
            FHE.allow(_count, msg.sender);
        }
    }
""")


def contract_source(type_name: str, title: str, notice: str) -> str:
    """A minimal documented contract declaring *type_name*."""
    return textwrap.dedent(f"""\
        // SPDX-License-Identifier: BSD-3-Clause-Clear
        pragma solidity ^0.8.24;

        import {{ZamaEthereumConfig}} from "@fhevm/solidity/config/ZamaConfig.sol";

        /// @title {title}
        /// @notice {notice}
        contract {type_name} is ZamaEthereumConfig {{
            /// @notice Returns a constant
            /// @return Always one
            function value() external pure returns (uint256) {{
                return 1;
            }}
        }}
    """)


def suite_source(type_name: str, title: str, category: str) -> str:
    """A test suite carrying a labelled leading comment block."""
    return textwrap.dedent(f"""\
        /**
         * Test Suite: {title}
         * Category: {category}
         *
         * Exercises {type_name} against the mock FHEVM.
         */
        import {{ expect }} from "chai";
        import {{ ethers, fhevm }} from "hardhat";

        describe("{type_name}", function () {{
          it("deploys", async function () {{
            const factory = await ethers.getContractFactory("{type_name}");
            expect(await factory.deploy()).to.not.equal(undefined);
          }});
        }});
    """)


TEMPLATE_MANIFEST = {
    "name": "fhevm-hardhat-template",
    "description": "Hardhat-based template for developing FHEVM smart contracts",
    "version": "0.1.0",
    "license": "BSD-3-Clause-Clear",
    "scripts": {
        "compile": "hardhat compile",
        "test": "hardhat test",
        "test:sepolia": "hardhat test --network sepolia",
    },
    "devDependencies": {"hardhat": "^2.26.0", "hardhat-deploy": "^0.11.45"},
}


def build_template(template_dir: Path) -> None:
    """Create a base Hardhat project with its own placeholder example."""
    files = {
        "package.json": json.dumps(TEMPLATE_MANIFEST, indent=2) + "\n",
        "hardhat.config.ts": 'import "hardhat-deploy";\nexport default {};\n',
        "README.md": "# FHEVM Hardhat Template\n",
        "contracts/FHECounter.sol": "// template placeholder contract\ncontract FHECounter {}\n",
        "test/FHECounter.ts": "// template placeholder test\n",
        "test/utils/signers.ts": "export const signers = [];\n",
        "deploy/deploy.ts": "// template deploy stub for FHECounter\n",
        "tasks/FHECounter.ts": "// hardhat task\n",
        "scripts/setup.sh": "#!/bin/sh\necho setup\n",
        "node_modules/hardhat/index.js": "module.exports = {};\n",
        "artifacts/FHECounter.json": "{}\n",
        "cache/solidity-files-cache.json": "{}\n",
    }
    for rel, content in files.items():
        path = template_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    (template_dir / "scripts" / "setup.sh").chmod(0o755)


def build_hub(root: Path) -> Path:
    """Populate *root* with the template and every catalog example."""
    build_template(root / "fhevm-hardhat-template")
    for descriptor in EXAMPLES.values():
        type_name = Path(descriptor.contract).stem
        contract = root / descriptor.contract
        test = root / descriptor.test
        contract.parent.mkdir(parents=True, exist_ok=True)
        test.parent.mkdir(parents=True, exist_ok=True)
        if descriptor.name == "fhe-counter":
            contract.write_text(COUNTER_SOURCE, encoding="utf-8")
        else:
            contract.write_text(
                contract_source(type_name, descriptor.title, descriptor.description),
                encoding="utf-8",
            )
        test.write_text(
            suite_source(type_name, descriptor.title, descriptor.category),
            encoding="utf-8",
        )
    return root


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def hub(tmp_path: Path) -> Path:
    """Example hub root with template, contracts and tests for every example."""
    return build_hub(tmp_path / "hub")


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory for generated projects (not created up front)."""
    return tmp_path / "output"


@pytest.fixture
def config(hub: Path, output_dir: Path) -> Config:
    """A Config bound to the fixture hub."""
    return Config(root_dir=hub, output_dir=output_dir)
