"""Allow running SessionScore directly: python -m sessionscore"""
from sessionscore.cli.main import cli

if __name__ == "__main__":
    cli()
