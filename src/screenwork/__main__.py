"""Executable entrypoint for `python -m screenwork`.

Delegates to the CLI.
"""
from .cli import app

if __name__ == "__main__":
    app()
