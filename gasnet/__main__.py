"""Entry point for ``python -m gasnet``."""

from gasnet.cli import main

if __name__ == "__main__":
    main()
