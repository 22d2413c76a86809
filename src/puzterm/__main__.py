"""Main entry point for the puzterm package."""
from puzterm.cli import cli


def main():
    """Main entry point function."""
    cli()


if __name__ == "__main__":
    main()
