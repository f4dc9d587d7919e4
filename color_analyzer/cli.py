"""
Color Analyzer command line front-end.
"""
import base64
from pathlib import Path

import click

from color_analyzer.client import AnalyzerSession, ColorAnalyzerClient, ImageUpload
from color_analyzer.config import config
from color_analyzer.schemas import FilterType

FILTER_CHOICES = [filter_type.label for filter_type in FilterType]


def _load_upload(session: AnalyzerSession, image: str):
    """Select the image in the session, exiting with the session's error if rejected."""
    if not session.select_file(ImageUpload.from_path(image)):
        raise click.ClickException(session.error)


@click.group()
@click.option("--base-url", default=None, help="Server root URL (default: $COLOR_ANALYZER_API_URL)")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds")
@click.pass_context
def cli(ctx, base_url, timeout):
    """Analyze image colors or apply filters through a Color Analyzer server."""
    ctx.ensure_object(dict)
    ctx.obj["BASE_URL"] = base_url
    ctx.obj["TIMEOUT"] = timeout


def _session(ctx) -> AnalyzerSession:
    return AnalyzerSession(ColorAnalyzerClient(ctx.obj["BASE_URL"], ctx.obj["TIMEOUT"]))


@cli.command()
@click.argument("image", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def analyze(ctx, image):
    """Print the palette of IMAGE, one hex color per line."""
    session = _session(ctx)
    _load_upload(session, image)

    session.analyze_colors()
    if session.error:
        raise click.ClickException(session.error)

    click.echo(f"Found {len(session.colors)} colors in your image:")
    for _, label in session.swatches:
        click.echo(label)


@cli.command(name="filter")
@click.argument("image", type=click.Path(exists=True, dir_okay=False))
@click.option("--type", "filter_name", type=click.Choice(FILTER_CHOICES), default="grayscale",
              show_default=True, help="Filter to apply")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Write the filtered PNG here instead of printing a data URI")
@click.pass_context
def apply_filter(ctx, image, filter_name, output):
    """Apply a filter to IMAGE."""
    session = _session(ctx)
    _load_upload(session, image)

    session.apply_filter(FilterType[filter_name.upper()])
    if session.error:
        raise click.ClickException(session.error)

    if output is None:
        click.echo(session.filtered_image)
        return

    payload = session.filtered_image.split(",", 1)[1]
    Path(output).write_bytes(base64.b64decode(payload))
    click.echo(f"Saved filtered image to {output}")


@cli.command()
@click.option("--host", default=config.HOST, show_default=True)
@click.option("--port", type=int, default=config.PORT, show_default=True)
def serve(host, port):
    """Run the processing server."""
    import uvicorn

    uvicorn.run("main:app", host=host, port=port)


if __name__ == "__main__":
    cli()
