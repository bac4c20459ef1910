"""Command-line interface for rainfx."""

import os
from pathlib import Path

import click
import structlog

from rainfx.config import Controls, get_settings
from rainfx.config.settings import reset_settings
from rainfx.logging_config import bind_run_context, configure_logging, get_logger

logger = get_logger(__name__)


def effect_options(func):
    """Shared overrides for the effect controls."""
    options = [
        click.option("--width", type=int, help="Viewport width in logical pixels"),
        click.option("--height", type=int, help="Viewport height in logical pixels"),
        click.option("--dpr", type=float, help="Device pixel ratio (1-2)"),
        click.option("--density", type=str, help="Drops per 1280x720 area"),
        click.option("--speed", type=str, help="Fall speed multiplier"),
        click.option("--wind", type=str, help="Wind angle in degrees from vertical"),
        click.option("--thickness", type=str, help="Drop stroke thickness in px"),
        click.option("--color", type=str, help="Drop color, e.g. '#9fb8d6' or 'lightblue'"),
        click.option("--splash/--no-splash", default=None, help="Splash particles on ground contact"),
        click.option("--lightning/--no-lightning", default=None, help="Ambient lightning"),
        click.option("--seed", type=int, help="Random seed"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_controls(**overrides) -> Controls:
    """Controls from settings, with CLI overrides applied one by one.

    Rejected overrides keep the configured value.
    """
    settings = get_settings()
    controls = Controls.from_settings(settings.rain)
    changes = {k: v for k, v in overrides.items() if v is not None}
    results = controls.update(**changes)
    rejected = [name for name, ok in results.items() if not ok]
    if rejected:
        click.echo(f"Ignoring invalid values for: {', '.join(rejected)}", err=True)
    return controls


def apply_display_overrides(width: int | None, height: int | None, dpr: float | None, seed: int | None) -> None:
    settings = get_settings()
    display = settings.display
    updates = {k: v for k, v in {"width": width, "height": height, "dpr": dpr}.items() if v is not None}
    if updates:
        settings.display = display.model_validate({**display.model_dump(), **updates})
    if seed is not None:
        settings.seed = seed
        structlog.contextvars.bind_contextvars(seed=seed)


def build_context(width, height, dpr, seed, **effect):
    from rainfx.simulation import SimulationContext

    apply_display_overrides(width, height, dpr, seed)
    settings = get_settings()
    display = settings.display
    return SimulationContext.create(
        display.width,
        display.height,
        display.dpr,
        controls=build_controls(**effect),
        seed=settings.seed,
    )


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug mode")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]), help="Logging level")
@click.pass_context
def cli(ctx: click.Context, debug: bool, log_level: str | None) -> None:
    """rainfx - animated rain and lightning."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    reset_settings()
    settings = get_settings()
    level = "DEBUG" if debug else (log_level or settings.log_level)
    configure_logging(log_level=level, debug=debug or settings.debug)
    bind_run_context(command=ctx.invoked_subcommand, env=settings.env, seed=settings.seed)

    logger.info("cli_started", env=settings.env, debug=debug)


@cli.command()
@effect_options
@click.option("--fps", type=int, help="Frame rate cap")
@click.option("--hide-panel", is_flag=True, help="Start with the control panel hidden")
@click.pass_context
def run(ctx: click.Context, width, height, dpr, seed, fps, hide_panel, **effect) -> None:
    """Open the rain window."""
    from rainfx.app import RainApp

    apply_display_overrides(width, height, dpr, seed)
    settings = get_settings()
    if fps is not None:
        settings.display.fps = fps

    app = RainApp(settings, controls=build_controls(**effect))
    app.panel.visible = not hide_panel
    try:
        app.run()
    except KeyboardInterrupt:
        logger.info("app_interrupted")
    except Exception as e:
        logger.error("app_failed", error=str(e))
        raise click.ClickException(f"Window failed: {e}")


@cli.command()
@effect_options
@click.option("--frames", "-n", type=int, default=300, show_default=True, help="Frames to render")
@click.option("--fps", type=int, default=30, show_default=True, help="Output frame rate")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=Path("rain.mp4"), show_default=True)
@click.pass_context
def render(ctx: click.Context, width, height, dpr, seed, frames, fps, output, **effect) -> None:
    """Render the effect headless into a video file."""
    from rainfx.render.capture import record_video

    context = build_context(width, height, dpr, seed, **effect)
    try:
        path = record_video(context, output, frames, fps, get_settings().display.background)
    except Exception as e:
        logger.error("render_failed", error=str(e))
        raise click.ClickException(f"Rendering failed: {e}")
    click.echo(f"Video rendered: {path}")


@cli.command()
@effect_options
@click.option("--frames", "-n", type=int, default=60, show_default=True, help="Frames to simulate first")
@click.option("--fps", type=int, default=60, show_default=True, help="Simulation frame rate")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=Path("rain.png"), show_default=True)
@click.pass_context
def snapshot(ctx: click.Context, width, height, dpr, seed, frames, fps, output, **effect) -> None:
    """Simulate a few frames and save the last one as an image."""
    from rainfx.render.capture import save_snapshot

    context = build_context(width, height, dpr, seed, **effect)
    try:
        path = save_snapshot(context, output, frames, fps, get_settings().display.background)
    except Exception as e:
        logger.error("snapshot_failed", error=str(e))
        raise click.ClickException(f"Snapshot failed: {e}")
    click.echo(f"Snapshot saved: {path} ({len(context.drops)} drops)")


@cli.command()
@click.pass_context
def settings(ctx: click.Context) -> None:
    """Print effective settings as JSON."""
    click.echo(get_settings().model_dump_json(indent=2))


def main() -> None:
    """Entry point."""
    if os.environ.get("RAINFX_HEADLESS"):
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

    cli()


if __name__ == "__main__":
    main()
