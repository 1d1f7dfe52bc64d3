"""Entry point for running the CLI as module: python -m solana_agent_kit"""

import sys

from solana_agent_kit.cli import main

if __name__ == "__main__":
    sys.exit(main())
