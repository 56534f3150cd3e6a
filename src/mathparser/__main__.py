"""Allow ``python -m mathparser``."""

from mathparser.cli import main

if __name__ == "__main__":
    main()
