"""
Command line interface for fontraster
=====================================

Developer commands to resolve fonts, measure text and render text to images.
"""

import logging
import sys
from pathlib import Path

import click
import numpy as np
from PIL import Image

from .core.config import FontRasterConfig
from .core.exceptions import FontRasterError
from .core.transform import FontTransform
from .fonts.cache import FontCache
from .rendering.descriptor import FontDesc, to_rgba

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def _font(ctx: click.Context, family: str, size: float, rotate: int) -> FontDesc:
    transform = FontTransform.from_degrees(rotate)
    return FontDesc(family, size, transform=transform, cache=ctx.obj["cache"])


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration YAML file",
)
@click.pass_context
def cli(ctx, verbose, config):
    """Font layout and rasterization tools."""
    try:
        font_config = FontRasterConfig.from_yaml(config) if config else FontRasterConfig()
    except FontRasterError as e:
        raise click.ClickException(str(e)) from e

    logging.basicConfig(level=font_config.log_level, format=LOG_FORMAT)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj["config"] = font_config
    ctx.obj["cache"] = FontCache(config=font_config)


@cli.command()
@click.argument("family")
@click.pass_context
def resolve(ctx, family):
    """Show which font a family resolves to."""
    try:
        resource = ctx.obj["cache"].resolve(family)
    except FontRasterError as e:
        logger.error(f"Font resolution failed: {e}")
        sys.exit(1)

    click.echo(f"Family:  {resource.family_name}")
    click.echo(f"Style:   {resource.style_name}")
    click.echo(f"Source:  {resource.source or '<memory>'}")
    click.echo(f"Size:    {resource.size_bytes} bytes")


@cli.command()
@click.argument("family")
@click.argument("text")
@click.option("--size", "-s", type=float, default=12.0, show_default=True, help="Font size (px/em)")
@click.option(
    "--rotate",
    "-r",
    type=click.Choice(["0", "90", "180", "270"]),
    default="0",
    help="Rotation in degrees",
)
@click.pass_context
def measure(ctx, family, text, size, rotate):
    """Print the layout box and rotated size of TEXT."""
    try:
        font = _font(ctx, family, size, int(rotate))
        layout = font.layout_box(text)
        width, height = font.box_size(text)
    except FontRasterError as e:
        logger.error(f"Measuring text failed: {e}")
        sys.exit(1)

    click.echo(f"Layout box: {layout.min} - {layout.max}")
    click.echo(f"Box size:   {width}x{height}")


@cli.command()
@click.argument("family")
@click.argument("text")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--size", "-s", type=float, default=32.0, show_default=True, help="Font size (px/em)")
@click.option(
    "--rotate",
    "-r",
    type=click.Choice(["0", "90", "180", "270"]),
    default="0",
    help="Rotation in degrees",
)
@click.option("--color", default="black", show_default=True, help="Text color")
@click.option("--background", default="white", show_default=True, help="Background color")
@click.option("--padding", type=click.IntRange(min=0), default=4, show_default=True)
@click.pass_context
def render(ctx, family, text, output, size, rotate, color, background, padding):
    """Render TEXT into an image file."""
    try:
        font = _font(ctx, family, size, int(rotate))
        fill = to_rgba(color)
        paper = to_rgba(background)
        width, height = font.box_size(text)

        canvas_size = (width + 2 * padding, height + 2 * padding)
        ink = np.zeros((canvas_size[1], canvas_size[0]), dtype=np.float32)

        def plot(x: int, y: int, coverage: float) -> None:
            if x < canvas_size[0] and y < canvas_size[1]:
                ink[y, x] = max(ink[y, x], coverage)

        font.draw(text, (padding, padding), plot)
    except FontRasterError as e:
        logger.error(f"Rendering text failed: {e}")
        sys.exit(1)

    mask = Image.fromarray(np.round(ink * fill[3]).astype(np.uint8))
    image = Image.composite(
        Image.new("RGBA", canvas_size, fill),
        Image.new("RGBA", canvas_size, paper),
        mask,
    )
    if paper[3] == 255:
        image = image.convert("RGB")
    image.save(output)
    logger.info(f"Saved {canvas_size[0]}x{canvas_size[1]} image to {output}")
    click.echo(str(output))


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
