"""Allow running the CLI with ``python -m carousel_automator.cli``."""

from .app import main

if __name__ == "__main__":
    main()
