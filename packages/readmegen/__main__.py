"""Entry point for ``python -m readmegen``."""

from readmegen.cli import app

if __name__ == "__main__":
    app()
