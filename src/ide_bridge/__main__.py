"""Allow `python -m ide_bridge`."""

from ide_bridge.ui.cli import app

if __name__ == "__main__":
    app()
