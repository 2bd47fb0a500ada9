"""Static example and category tables.

The hub's examples are declared here as immutable descriptors.  Paths are
relative to the hub root; nothing is checked on import, so a descriptor whose
files are missing is only reported when a command actually needs it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from fhevm_tools.errors import UnknownCategoryError, UnknownExampleError


# ---------------------------------------------------------------------------
# Descriptor models
# ---------------------------------------------------------------------------


class ExampleDescriptor(BaseModel):
    """Static metadata for a single example contract and its test suite."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Unique symbolic name, e.g. 'fhe-counter'")
    contract: str = Field(..., description="Contract path relative to the hub root")
    test: str = Field(..., description="Test path relative to the hub root")
    description: str = Field(default="", description="One-line human description")
    category: str = Field(..., description="Key of the example's primary category")
    title: str = Field(default="", description="Documentation title fallback")


class CategoryDescriptor(BaseModel):
    """A named, ordered group of examples generated into one project."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    description: str = ""
    examples: tuple[str, ...] = Field(default=(), description="Example names, in deploy order")


# ---------------------------------------------------------------------------
# Example table
# ---------------------------------------------------------------------------

EXAMPLES: dict[str, ExampleDescriptor] = {
    d.name: d
    for d in (
        ExampleDescriptor(
            name="fhe-counter",
            contract="contracts/basic/FHECounter.sol",
            test="test/basic/FHECounter.test.ts",
            description="A simple FHE counter demonstrating basic encrypted operations",
            category="basic",
            title="FHE Counter",
        ),
        ExampleDescriptor(
            name="encrypt-single-value",
            contract="contracts/basic/encrypt/EncryptSingleValue.sol",
            test="test/basic/encrypt/EncryptSingleValue.test.ts",
            description="Demonstrates FHE encryption mechanism and common pitfalls",
            category="encryption",
            title="Encrypt Single Value",
        ),
        ExampleDescriptor(
            name="encrypt-multiple-values",
            contract="contracts/basic/encrypt/EncryptMultipleValues.sol",
            test="test/basic/encrypt/EncryptMultipleValues.test.ts",
            description="Shows how to encrypt and handle multiple values",
            category="encryption",
            title="Encrypt Multiple Values",
        ),
        ExampleDescriptor(
            name="user-decrypt-single",
            contract="contracts/basic/decrypt/UserDecryptSingle.sol",
            test="test/basic/decrypt/UserDecryptSingle.test.ts",
            description="Demonstrates user decryption and permission requirements",
            category="decryption",
            title="User Decryption",
        ),
        ExampleDescriptor(
            name="public-decrypt-single",
            contract="contracts/basic/decrypt/PublicDecryptSingle.sol",
            test="test/basic/decrypt/PublicDecryptSingle.test.ts",
            description="Shows asynchronous public decryption workflow",
            category="decryption",
            title="Public Decryption",
        ),
        ExampleDescriptor(
            name="fhe-arithmetic",
            contract="contracts/basic/operations/FHEArithmetic.sol",
            test="test/basic/operations/FHEArithmetic.test.ts",
            description="Demonstrates arithmetic operations on encrypted values (add, sub, mul)",
            category="operations",
            title="FHE Arithmetic",
        ),
        ExampleDescriptor(
            name="fhe-comparison",
            contract="contracts/basic/operations/FHEComparison.sol",
            test="test/basic/operations/FHEComparison.test.ts",
            description="Shows comparison operations on encrypted values (eq, lt, gt, etc.)",
            category="operations",
            title="FHE Comparison",
        ),
        ExampleDescriptor(
            name="access-control",
            contract="contracts/basic/AccessControlExample.sol",
            test="test/basic/AccessControlExample.test.ts",
            description="Comprehensive guide to FHE access control patterns",
            category="concepts",
            title="Access Control",
        ),
        ExampleDescriptor(
            name="input-proofs",
            contract="contracts/basic/InputProofExample.sol",
            test="test/basic/InputProofExample.test.ts",
            description="Explains what input proofs are and why they are needed",
            category="concepts",
            title="Input Proofs",
        ),
        ExampleDescriptor(
            name="handles",
            contract="contracts/basic/HandlesExample.sol",
            test="test/basic/HandlesExample.test.ts",
            description="Understanding handles and how they work in FHEVM",
            category="concepts",
            title="Handles",
        ),
        ExampleDescriptor(
            name="privacy-pharmaceutical",
            contract="contracts/advanced/PrivacyPharma.sol",
            test="test/advanced/PrivacyPharma.test.js",
            description=(
                "Advanced pharmaceutical procurement with encrypted bidding "
                "and private matching"
            ),
            category="advanced",
            title="Privacy Pharmaceutical Procurement",
        ),
    )
}


# ---------------------------------------------------------------------------
# Category table
# ---------------------------------------------------------------------------

CATEGORIES: dict[str, CategoryDescriptor] = {
    c.key: c
    for c in (
        CategoryDescriptor(
            key="basic",
            name="Basic FHEVM Examples",
            description=(
                "Fundamental FHEVM operations including encryption, decryption, "
                "and basic FHE operations"
            ),
            examples=("fhe-counter", "encrypt-single-value", "encrypt-multiple-values"),
        ),
        CategoryDescriptor(
            key="encryption",
            name="Encryption Examples",
            description="Comprehensive examples of FHE encryption patterns",
            examples=("encrypt-single-value", "encrypt-multiple-values"),
        ),
        CategoryDescriptor(
            key="decryption",
            name="Decryption Examples",
            description="User and public decryption patterns",
            examples=("user-decrypt-single", "public-decrypt-single"),
        ),
        CategoryDescriptor(
            key="operations",
            name="FHE Operations",
            description="Arithmetic and comparison operations on encrypted values",
            examples=("fhe-arithmetic", "fhe-comparison"),
        ),
        CategoryDescriptor(
            key="concepts",
            name="FHEVM Concepts",
            description="Understanding access control, input proofs, and handles",
            examples=("access-control", "input-proofs", "handles"),
        ),
        CategoryDescriptor(
            key="advanced",
            name="Advanced Examples",
            description="Real-world applications using FHEVM",
            examples=("privacy-pharmaceutical",),
        ),
    )
}


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def get_example(name: str) -> ExampleDescriptor:
    """Return the descriptor for *name* or raise ``UnknownExampleError``."""
    try:
        return EXAMPLES[name]
    except KeyError:
        raise UnknownExampleError(name, list(EXAMPLES)) from None


def get_category(key: str) -> CategoryDescriptor:
    """Return the descriptor for *key* or raise ``UnknownCategoryError``."""
    try:
        return CATEGORIES[key]
    except KeyError:
        raise UnknownCategoryError(key, {k: c.name for k, c in CATEGORIES.items()}) from None


def examples_in_category(key: str) -> list[ExampleDescriptor]:
    """Return the category's example descriptors in declared order."""
    return [get_example(name) for name in get_category(key).examples]
