"""Entry point for the wired config daemon when run as a module."""

from .daemon import main

if __name__ == "__main__":
    main()
