"""
CLI command listing chunk framing.
"""
import click

from demo_loader.fragment import iter_chunks, load_fragment_file
from demo_registry.tables import command_name


@click.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def chunks(filepath: str):
    """
    List the chunks framed in a fragment file, without decoding them.

    Example:
      demoscope chunks 1234_full.bin
    """
    click.echo("Idx  Command              Cmp  Tick        Size")
    click.echo("-" * 50)
    count = 0
    try:
        for chunk in iter_chunks(load_fragment_file(filepath)):
            compressed = "yes" if chunk.is_compressed else "no"
            click.echo(
                f"{chunk.index:<4} {command_name(chunk.command):<20} {compressed:<4} "
                f"{chunk.tick:<11} {chunk.size}"
            )
            count += 1
    except Exception as e:
        raise click.ClickException(str(e))
    click.echo(f"{count} chunks")
