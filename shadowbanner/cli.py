"""
Command line interface.

Commands:
 - render: print a banner (optionally also write it to a file)
 - preview: show a banner inside a rich panel
 - fonts: list configured fonts, shadow styles and color presets
 - batch: render every banner listed in a YAML/JSON spec file
 - example: write an example batch spec file
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Dict, Optional, Tuple

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__
from .banner import RenderOptions, generate
from .color import COLOR_PRESETS, strip_ansi
from .config import EXAMPLE_BATCH, load_batch, load_font_config, write_document
from .errors import ConfigError, FontError, UnknownFontError
from .font import FontConfig, FontFace, load_face
from .shadow import DEFAULT_OFF, DEFAULT_ON, GLYPH_SETS, ShadowStyle

logger = logging.getLogger(__name__)

SHADOW_CHOICES = ["", "none", "outline", "solid"]

# ==================== HELPERS ====================

def ensure_dir(path: str):
    """Create directory if it doesn't exist"""
    os.makedirs(path, exist_ok=True)


def join_text(tokens: Tuple[str, ...]) -> str:
    """Join argument tokens and turn literal \\n into newlines"""
    return " ".join(tokens).replace("\\n", "\n")


def _font_config(ctx: click.Context) -> FontConfig:
    return ctx.obj["fonts"]


def _load_face(config: FontConfig, name: Optional[str]) -> FontFace:
    try:
        return load_face(name, config)
    except UnknownFontError as e:
        raise click.BadParameter(str(e), param_hint="'--font'")
    except FontError as e:
        raise click.ClickException(str(e))


def _render(ctx: click.Context, tokens, shadow, font, color, gradient, on, off) -> str:
    text = join_text(tokens)
    if not text:
        raise click.UsageError("text to render is required", ctx=ctx)

    face = _load_face(_font_config(ctx), font)
    opts = RenderOptions(shadow=ShadowStyle.parse(shadow), color=color,
                         gradient=gradient, on=on, off=off)
    return generate(face, text, opts)


def render_options(f):
    """Options shared by render and preview"""
    decorators = [
        click.argument("text", nargs=-1),
        click.option("--shadow", "-s", default="", show_default=False,
                     type=click.Choice(SHADOW_CHOICES, case_sensitive=False),
                     help="shadow style: outline (box-drawing) or solid (shading)"),
        click.option("--font", "-f", default=None,
                     help="font name (see `shadowbanner fonts`)"),
        click.option("--color", "-c", default=None,
                     help="text color: preset (c,m,y), hex (#RRGGBB/RRGGBB) or r,g,b"),
        click.option("--gradient", "-g", is_flag=True, default=False,
                     help="sweep the hue of --color from left to right"),
        click.option("--on", default=None,
                     help=f"string for filled pixels (default {DEFAULT_ON!r})"),
        click.option("--off", default=None,
                     help=f"string for empty pixels (default {DEFAULT_OFF!r})"),
    ]
    for decorator in reversed(decorators):
        f = decorator(f)
    return f


# ==================== CLI COMMANDS ====================

@click.group(help="shadowbanner: large pixel-font banners with drop shadows for the terminal")
@click.version_option(version=__version__)
@click.option("--config", "config_path", envvar="SHADOWBANNER_CONFIG",
              type=click.Path(exists=True, dir_okay=False),
              help="YAML/JSON file declaring extra fonts")
@click.option("--verbose", "-v", is_flag=True, default=False, help="debug logging")
@click.pass_context
def cli(ctx, config_path, verbose):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format="%(levelname)s %(name)s: %(message)s")
    ctx.ensure_object(dict)
    try:
        ctx.obj["fonts"] = load_font_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e))


@cli.command(help="Render text as a banner")
@render_options
@click.option("--out", "-o", default=None, help="also write the banner (without colors) to a file")
@click.pass_context
def render(ctx, text, shadow, font, color, gradient, on, off, out):
    """Render banner to stdout"""
    banner = _render(ctx, text, shadow, font, color, gradient, on, off)
    # keep color escapes when piped; --out is the uncolored copy
    click.echo(banner, color=True)

    if out:
        ensure_dir(os.path.dirname(out) or ".")
        with open(out, "w", encoding="utf-8") as fh:
            fh.write(strip_ansi(banner) + "\n")
        click.echo(f"✓ Wrote banner to {out}", err=True)


@cli.command(help="Preview banner in a panel")
@render_options
@click.pass_context
def preview(ctx, text, shadow, font, color, gradient, on, off):
    """Preview banner in terminal"""
    banner = _render(ctx, text, shadow, font, color, gradient, on, off)
    console = Console()
    console.print(Panel(Text.from_ansi(banner), title="[bold cyan]Banner Preview[/bold cyan]",
                        border_style="cyan"))


@cli.command(help="List fonts, shadow styles and color presets")
@click.pass_context
def fonts(ctx):
    """Show configured fonts and rendering choices"""
    config = _font_config(ctx)
    console = Console()

    table = Table(title="Fonts")
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Height", justify="right")
    table.add_column("Status")
    for name in config.names():
        spec = config.fonts[name]
        label = f"{name} (default)" if name == config.default else name
        try:
            face = FontFace(spec)
        except FontError as e:
            logger.debug("font %s unavailable: %s", name, e)
            table.add_row(label, str(spec.size), "-", "[red]unavailable[/red]")
            continue
        table.add_row(label, str(spec.size), str(face.height), "[green]ok[/green]")
    console.print(table)

    click.echo("\nShadow styles:")
    for style, glyphs in GLYPH_SETS.items():
        click.echo(f"  {style.value:10} {glyphs.on}{glyphs.corner or glyphs.off}")

    click.echo("\nColor presets:")
    for name, rgb in COLOR_PRESETS.items():
        click.echo(f"  {name:10} {rgb.hex()}")


@cli.command(help="Batch generate from JSON/YAML file")
@click.argument("spec", type=click.Path(exists=True, dir_okay=False))
@click.option("--outdir", "-o", default="banners", help="output directory")
@click.pass_context
def batch(ctx, spec, outdir):
    """Render every banner of a spec file to text files"""
    config = _font_config(ctx)
    try:
        items = load_batch(spec)
    except ConfigError as e:
        raise click.ClickException(str(e))

    ensure_dir(outdir)
    faces: Dict[str, FontFace] = {}

    for idx, item in enumerate(items, 1):
        font_name = item.font if item.font is not None else config.default
        if font_name not in faces:
            try:
                faces[font_name] = load_face(font_name, config)
            except FontError as e:
                raise click.ClickException(f"entry {idx}: {e}")
        try:
            shadow = ShadowStyle.parse(item.shadow)
        except ValueError as e:
            raise click.ClickException(f"entry {idx}: {e}")

        opts = RenderOptions(shadow=shadow, color=item.color, gradient=item.gradient,
                             on=item.on, off=item.off)
        banner = generate(faces[font_name], item.text, opts)

        path = os.path.join(outdir, f"{item.name}.txt")
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(strip_ansi(banner) + "\n")
        click.echo(f"[{idx}/{len(items)}] ✓ {path}")

    click.echo(f"\nBatch complete: {len(items)} banners in {outdir}")


@cli.command(help="Generate example batch config file")
@click.option("--format", "-f", "fmt", type=click.Choice(["json", "yaml"]),
              default="json", help="output format")
@click.option("--out", "-o", default="banner_batch", help="output filename (no extension)")
def example(fmt, out):
    """Write an example batch spec"""
    filename = f"{out}.{fmt}"
    write_document(filename, EXAMPLE_BATCH)
    click.echo(f"✓ Created example config: {filename}")
    click.echo(f"  Run with: shadowbanner batch {filename}")

