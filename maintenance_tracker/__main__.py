"""Allow running the tracker with ``python -m maintenance_tracker``."""

from .cli.main import cli

if __name__ == '__main__':
    cli()
