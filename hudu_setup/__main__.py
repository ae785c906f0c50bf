"""
Entry point for running setup as a module: python -m hudu_setup
"""

import sys

from hudu_setup.cli import main


def run():
    """Run the setup CLI and exit with its status."""
    sys.exit(main())


if __name__ == "__main__":
    run()
