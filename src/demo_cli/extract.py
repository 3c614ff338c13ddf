"""
CLI command for pulling fragments out of a packet capture.
"""
import logging
import os

import click

from demo_analysis.logger_config import setup_logger


@click.command()
@click.argument("pcap", type=click.Path(exists=True, dir_okay=False))
@click.option("--out", "out_dir", type=click.Path(file_okay=False), required=True,
              help="Directory for recovered fragment files")
@click.option("--verbose", "-v", is_flag=True, help="Log skipped sessions")
def extract(pcap: str, out_dir: str, verbose: bool):
    """
    Recover broadcast fragments from HTTP traffic in a capture file.

    Example:
      demoscope extract broadcast.pcap --out fragments/
    """
    if verbose:
        setup_logger(level=logging.DEBUG)
    # deferred so the other commands never import scapy
    from demo_loader.pcap_extract import extract_fragments

    try:
        fragments = extract_fragments(pcap)
    except Exception as e:
        raise click.ClickException(f"Failed to read capture: {e}")

    os.makedirs(out_dir, exist_ok=True)
    for n, (session_key, body) in enumerate(fragments):
        path = os.path.join(out_dir, f"fragment_{n}.bin")
        with open(path, "wb") as f:
            f.write(body)
        click.echo(f"{path}  {len(body):>8} bytes  {session_key}")
    click.echo(f"{len(fragments)} fragments written")
