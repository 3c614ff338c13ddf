"""
demoscope CLI - main entry point.
"""
import click

from .analyze import analyze
from .chunks import chunks
from .extract import extract


@click.group()
def cli():
    """demoscope - chunk and packet analysis for broadcast demo fragments."""
    pass


cli.add_command(analyze)
cli.add_command(chunks)
cli.add_command(extract)

if __name__ == "__main__":
    cli()
