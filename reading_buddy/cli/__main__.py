"""CLI entry point.

Allows running the CLI as a module: python -m reading_buddy.cli
"""

from reading_buddy.cli import app

if __name__ == "__main__":
    app()
