"""
CLI command for fragment analysis.
"""
import logging
from typing import Optional

import click

from demo_analysis.config import AnalyzerConfig
from demo_analysis.engine import analyze_fragment
from demo_analysis.formatter import to_console_lines, to_json
from demo_analysis.logger_config import setup_logger
from demo_loader.fragment import load_fragment_file


@click.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "format", type=click.Choice(["table", "json"]),
              default="table", show_default=True, help="Output format")
@click.option("--output", "output", type=click.Path(dir_okay=False),
              help="Write output to file instead of stdout")
@click.option("--packets/--no-packets", "show_packets", default=True, show_default=True,
              help="List individual packets in table output")
@click.option("--head", type=click.IntRange(min=0), default=20, show_default=True,
              help="Bytes sampled from the start of each chunk")
@click.option("--tail", type=click.IntRange(min=0), default=10, show_default=True,
              help="Bytes sampled from the end of each chunk")
@click.option("--verbose", "-v", is_flag=True, help="Log per-chunk and per-packet progress")
def analyze(filepath: str, format: str, output: Optional[str], show_packets: bool,
            head: int, tail: int, verbose: bool):
    """
    Analyze the chunks and packets of a fragment file.

    Example:
      demoscope analyze 1234_delta.bin --format json --output report.json
    """
    if verbose:
        setup_logger(level=logging.DEBUG)
    config = AnalyzerConfig(chunk_head_sample=head, chunk_tail_sample=tail)

    try:
        report = analyze_fragment(load_fragment_file(filepath), config)
    except Exception as e:
        raise click.ClickException(str(e))

    if format == "json":
        text = to_json(report)
    else:
        text = "\n".join(to_console_lines(report, show_packets=show_packets))

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        click.echo(f"Wrote {report.total_chunks} chunk reports to {output}")
    else:
        click.echo(text)
