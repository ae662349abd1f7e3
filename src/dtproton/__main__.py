"""Allow ``python -m dtproton``."""

from dtproton.cli import app

if __name__ == "__main__":
    app()
