"""Allow ``python -m fhevm_tools``."""

import sys

from fhevm_tools.cli import main

sys.exit(main())
