"""
reftree CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging

import click

from .commands import fold, index, show


@click.group()
@click.version_option(package_name="reftree")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """reftree: Browse what references an asset.

    Renders the "referenced by" graph of an asset as a foldable tree,
    using a precomputed reference index.

    \b
    Quick Start:
      reftree rebuild
      reftree show Assets/Textures/Rock.png
      reftree show Rock.png --max-depth 3 --json
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="[%X]",
    )


# Register commands
main.add_command(show.show)
main.add_command(fold.toggle)
main.add_command(fold.reset)
main.add_command(index.rebuild)
main.add_command(index.stats)

if __name__ == "__main__":
    main()
