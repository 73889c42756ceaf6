"""Entry point for running mypod as a module: python -m mypod."""

from mypod.cli import main

if __name__ == "__main__":
    main()
