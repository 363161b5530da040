"""Command-line token gallery for Design Tokens.

A small QA tool for browsing palettes, parsing hex values, checking label
contrast and inspecting typography metrics from a terminal.
"""

import sys
import random
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.panel import Panel

from .config import get_config, load_config, save_config
from .engine import (
    TokenEngine,
    ColorScheme,
    ThemeMode,
    FontFamily,
    FontSlant,
    TextStyleToken,
    HexColorError,
    PaletteIntegrityError,
    parse,
    perceived_luminance,
    contrast_ratio,
    meets_wcag_contrast,
    BLACK,
)


console = Console()


def get_engine() -> TokenEngine:
    """Get a token engine for the current configuration."""
    return TokenEngine.from_config(get_config())


def swatch(color, label) -> Text:
    """Render a hex value over its own color with the chosen label color."""
    bg = color.to_hex()
    return Text(f" {bg} ", style=f"{label.to_hex()} on {bg}")


@click.group()
@click.option("--config", type=click.Path(), help="Path to config file")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def main(ctx, config, verbose):
    """Design Tokens - browse colors and typography of the design system."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['config_path'] = Path(config) if config else None

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Load configuration
    if config:
        load_config(Path(config))
    else:
        get_config()


@main.command()
@click.option("--group", "-g", help="Only show families of this group")
def palettes(group: Optional[str]):
    """List all palette families."""
    engine = get_engine()

    table = Table(title="Palette Families", show_header=True, header_style="bold")
    table.add_column("Name", style="cyan", min_width=15)
    table.add_column("Group", style="blue")
    table.add_column("Tones", style="default")
    table.add_column("Source", style="magenta")
    table.add_column("Dark", style="default")

    for info in engine.list_families():
        if group and info['group'] != group:
            continue
        tones = "single" if info['single_tone'] else ', '.join(str(t) for t in info['tones'])
        table.add_row(
            info['name'],
            info['group'],
            tones,
            info['type'],
            "[yellow]pending[/yellow]" if info['pending_dark'] else "designed",
        )

    console.print(table)


@main.command()
@click.argument("name")
@click.option("--scheme", "-s", type=click.Choice([s.value for s in ColorScheme]),
              default=ColorScheme.LIGHT.value, help="Ambient scheme to resolve for")
def palette(name: str, scheme: str):
    """Show every tone of a palette family with its label color."""
    engine = get_engine()
    try:
        family = engine.registry.get_family(name)
    except KeyError as e:
        console.print(f"[red]Error: {e.args[0]}[/red]")
        sys.exit(1)

    effective = engine.effective_scheme(scheme)
    table = Table(
        title=f"{family.display_name} ({effective.value})",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Tone", style="cyan", justify="right")
    table.add_column("Swatch")
    table.add_column("Label", style="default")
    table.add_column("Luminance", justify="right")

    for tone in family.tones:
        try:
            color = family.resolve(tone, scheme, engine.schemes)
        except PaletteIntegrityError as e:
            console.print(f"[red]Error: {e}[/red]")
            sys.exit(1)
        label = engine.label_color(color)
        table.add_row(
            str(tone),
            swatch(color, label),
            "black" if label == BLACK else "white",
            f"{perceived_luminance(color):.3f}",
        )

    console.print(table)
    if family.pending_dark:
        console.print("[yellow]Dark values pending; light values are reused.[/yellow]")


@main.command(name="hex")
@click.argument("value")
@click.option("--alpha", is_flag=True, help="Always print the alpha digits")
def hex_command(value: str, alpha: bool):
    """Parse a hex color and print its canonical form."""
    try:
        color = parse(value)
    except HexColorError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    canonical = color.to_hex(include_alpha=alpha or color.a < 1.0)
    r, g, b, a = color.to_bytes()
    console.print(f"{canonical}  rgba({r}, {g}, {b}, {color.a:.2f})")


@main.command()
@click.argument("value")
@click.option("--threshold", "-t", type=float, help="Luminance threshold for the label")
def contrast(value: str, threshold: Optional[float]):
    """Pick a black or white label for a background color."""
    engine = get_engine()
    try:
        background = parse(value)
    except HexColorError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    label = engine.label_color(background, threshold)
    label_name = "black" if label == BLACK else "white"
    ratio = contrast_ratio(label, background)
    level = "AAA" if meets_wcag_contrast(label, background, 'AAA') else (
        "AA" if meets_wcag_contrast(label, background, 'AA') else "fail")

    body = Text.assemble(
        swatch(background, label), "\n\n",
        ("Label: ", "dim"), (label_name, "bold"), "\n",
        ("Luminance: ", "dim"), f"{perceived_luminance(background):.3f}", "\n",
        ("WCAG ratio: ", "dim"), f"{ratio:.2f}:1 ({level})",
    )
    console.print(Panel(body, title="Contrast", border_style="blue"))


@main.command()
@click.argument("token", required=False)
@click.option("--family", "-f", type=click.Choice([f.value for f in FontFamily]),
              help="Explicit font family")
@click.option("--scale", type=float, help="Design px per point")
@click.option("--italic", is_flag=True, help="Request the italic slant")
def typography(token: Optional[str], family: Optional[str], scale: Optional[float], italic: bool):
    """Show resolved text metrics for one or all typography tokens."""
    engine = get_engine()
    if token is None:
        tokens = list(TextStyleToken)
    else:
        try:
            tokens = [TextStyleToken(token)]
        except ValueError:
            console.print(f"[red]Error: Unknown text style '{token}'[/red]")
            sys.exit(1)

    table = Table(title="Typography", show_header=True, header_style="bold")
    table.add_column("Token", style="cyan")
    table.add_column("Face")
    table.add_column("Size", justify="right")
    table.add_column("Kerning", justify="right")
    table.add_column("Spacing", justify="right")
    table.add_column("View italic", justify="center")

    slant = FontSlant.ITALIC if italic else None
    for t in tokens:
        style = engine.text_style(t, slant=slant, family=family, design_scale=scale)
        table.add_row(
            t.value,
            style.face,
            f"{style.point_size:g}",
            f"{style.kerning:.3f}",
            f"{style.line_spacing:.2f}",
            "yes" if style.needs_view_italic else "",
        )

    console.print(table)


@main.command()
@click.argument("value", required=False, type=click.Choice([m.value for m in ThemeMode]))
@click.pass_context
def mode(ctx, value: Optional[str]):
    """Show or set the theme mode."""
    config = get_config()
    if value is None:
        console.print(f"Theme mode: [cyan]{config.theme_mode.title}[/cyan]")
        return

    config.theme_mode = ThemeMode(value)
    path = save_config(config, ctx.obj.get('config_path'))
    console.print(f"[green]Theme mode set to {config.theme_mode.title}[/green] ({path})")


@main.command(name="random")
@click.option("--scheme", "-s", type=click.Choice([s.value for s in ColorScheme]),
              default=ColorScheme.LIGHT.value, help="Ambient scheme to resolve for")
@click.option("--count", "-n", default=1, type=click.IntRange(min=1), help="Number of colors")
@click.option("--seed", type=int, help="Seed for reproducible samples")
def random_command(scheme: str, count: int, seed: Optional[int]):
    """Sample random colors from the palette."""
    engine = get_engine()
    rng = random.Random(seed) if seed is not None else None
    for _ in range(count):
        color = engine.random_color(scheme, rng)
        console.print(swatch(color, engine.label_color(color)))


@main.command()
@click.option("--contrast", "check_contrast", is_flag=True, help="Also audit label contrast")
def validate(check_contrast: bool):
    """Validate palette integrity."""
    engine = get_engine()
    issues = engine.validate()

    if issues:
        console.print("[red]Palette integrity issues:[/red]")
        for issue in issues:
            console.print(f"  • {issue}")
    else:
        console.print("[green]All palette families are consistent.[/green]")

    pending = engine.registry.pending_dark_families()
    if pending:
        console.print(f"[yellow]{len(pending)} families still pending dark values[/yellow]")

    if check_contrast:
        warnings = engine.registry.contrast_warnings(engine.contrast_threshold)
        for warning in warnings:
            console.print(f"[yellow]⚠ {warning}[/yellow]")

    if issues:
        sys.exit(1)


if __name__ == "__main__":
    main()
