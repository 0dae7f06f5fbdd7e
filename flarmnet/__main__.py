"""Package entry point for ``python -m flarmnet``.

HOW: Delegates to the CLI's main() function.
"""

from flarmnet.cli import main

if __name__ == "__main__":
    main()
