"""Direct entry point for the pyradial command.

This file is used as the entry point for the pyradial command line tool.
It imports and executes the main function from __main__.py.
"""

import sys


def main() -> int:
    """Entry point for pyradial command.

    Returns:
        Exit code
    """
    from pyradial.__main__ import main as _main
    return _main()


if __name__ == "__main__":
    sys.exit(main())
