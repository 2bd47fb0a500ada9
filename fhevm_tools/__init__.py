"""FHEVM example tools.

Scaffolds standalone FHEVM example projects from the example hub and
generates GitBook documentation from the examples' comment blocks.
"""

__version__ = "1.0.0"
