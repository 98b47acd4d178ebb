"""Entry point for ``python -m modloom``."""

from modloom.cli import main

if __name__ == "__main__":
    main()
