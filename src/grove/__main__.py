"""Entry point for ``python -m grove``."""

from grove.cli.main import app

if __name__ == "__main__":
    app()
