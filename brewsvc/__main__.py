"""Entry point for ``python -m brewsvc``."""

from brewsvc.cli.commands import app

if __name__ == "__main__":
    app()
