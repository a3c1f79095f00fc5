import logging

import click

from yamlstream import __version__
from yamlstream.cli import main as ys_main


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(version=__version__, prog_name="ys")
@click.option(
    "--filename",
    "-f",
    required=True,
    type=click.Path(dir_okay=False),
    help="Input file containing one or more YAML documents.",
)
@click.option(
    "--index",
    "-i",
    default=0,
    show_default=True,
    type=click.IntRange(min=0),
    help="Index of the document to access from the YAML stream.",
)
@click.option("--raw", is_flag=True, help="Print the document exactly as it appears in the file.")
@click.option(
    "--strict/--lenient",
    default=None,
    help=(
        "Whether malformed YAML part way through the file is an error or simply ends the stream "
        "(default is strict, unless YAMLSTREAM_STRICT says otherwise)."
    ),
)
@click.option("--verbose", "-v", is_flag=True, help="Log debugging information to stderr.")
def ys(verbose, **kwargs):
    """
    ys prints a single document out of a multi-document YAML file, such as one manifest
    out of a Kubernetes bundle.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    ys_main(**kwargs)
