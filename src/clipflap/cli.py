"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import os
from pathlib import Path
from typing import Optional

import typer
from rich import print

from .config import DEFAULT_CLIP_SIZE
from .core.geometry import Rect
from .errors import (
    ClipFlapError,
    ImageNotLoadedError,
    InvalidImageError,
    SettingsValidationError,
)
from .gui.ui.widgets.clip_rect import ClipInteractionController
from .settings import ClipOptions, load_options
from .utils.image_loader import base64_to_image, file_to_base64, payload_to_bytes

app = typer.Typer(help="Clip images with an aspect-locked rectangle")

_DEFAULT_SIZE = f"{DEFAULT_CLIP_SIZE[0]}x{DEFAULT_CLIP_SIZE[1]}"


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (InvalidImageError, SettingsValidationError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except ClipFlapError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _ensure_qt_app() -> None:
    from PySide6.QtCore import QCoreApplication
    from PySide6.QtGui import QGuiApplication

    if QCoreApplication.instance() is None:
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        # Kept on the module so the instance outlives this call.
        globals()["_QT_APP"] = QGuiApplication([])


def _parse_size(text: str) -> dict[str, float]:
    width, sep, height = text.lower().partition("x")
    try:
        if not sep:
            raise ValueError(text)
        return {"width": float(width), "height": float(height)}
    except ValueError as exc:
        raise typer.BadParameter(f"Expected WIDTHxHEIGHT, got {text!r}") from exc


def _parse_rect(text: str) -> Rect:
    parts = text.split(",")
    try:
        if len(parts) != 4:
            raise ValueError(text)
        x, y, width, height = (float(part) for part in parts)
    except ValueError as exc:
        raise typer.BadParameter(f"Expected X,Y,WIDTH,HEIGHT, got {text!r}") from exc
    if width <= 0 or height <= 0:
        raise typer.BadParameter(f"Clip width and height must be positive, got {text!r}")
    return Rect(x, y, width, height)


def _load(image_path: Path, options: ClipOptions) -> ClipInteractionController:
    _ensure_qt_app()
    try:
        payload = file_to_base64(image_path)
    except OSError as exc:
        raise InvalidImageError(f"Cannot read {image_path}: {exc}") from exc
    image = base64_to_image(payload)
    controller = ClipInteractionController(
        view_size=options.view_size,
        clip_size=options.clip_size,
        overflow=options.overflow,
    )
    controller.on_image_loaded(image, payload)
    return controller


@app.command()
@_handle_errors
def info(
    image_path: Path = typer.Argument(..., exists=True, dir_okay=False),
    size: str = typer.Option(_DEFAULT_SIZE, "--size", "-s", help="Clip size WIDTHxHEIGHT"),
    view: str = typer.Option(_DEFAULT_SIZE, "--view", help="View size WIDTHxHEIGHT"),
    overflow: bool = typer.Option(False, "--overflow", help="Allow clips outside the image"),
) -> None:
    """Show the image size and the initial clip rectangle."""

    options = load_options(
        {"clip_size": _parse_size(size), "view_size": _parse_size(view), "overflow": overflow}
    )
    controller = _load(image_path, options)
    bounds = controller.image_bounds()
    if bounds is None:
        raise ImageNotLoadedError("image not loaded")
    print(f"[bold]{image_path.name}[/bold] {bounds.width:g}x{bounds.height:g}")
    print(f"view box: {controller.view_box()}")
    print(f"scale:    {controller.scale():.4f}")
    print(f"clip:     {controller.clip_rect()}")


@app.command()
@_handle_errors
def clip(
    image_path: Path = typer.Argument(..., exists=True, dir_okay=False),
    output: Path = typer.Option(..., "--output", "-o", help="Destination PNG file"),
    rect: Optional[str] = typer.Option(None, "--rect", "-r", help="Clip X,Y,WIDTH,HEIGHT"),
    size: str = typer.Option(_DEFAULT_SIZE, "--size", "-s", help="Clip size WIDTHxHEIGHT"),
    overflow: bool = typer.Option(False, "--overflow", help="Allow clips outside the image"),
) -> None:
    """Write the clipped region of an image to a PNG file."""

    options = load_options({"clip_size": _parse_size(size), "overflow": overflow})
    controller = _load(image_path, options)
    if rect is not None:
        controller.propose_clip_rect(_parse_rect(rect))
    data_url = controller.clip()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(payload_to_bytes(data_url))
    print(f"[green]Wrote {output} from {controller.clip_rect()}")


@app.command()
def gui(image_path: Optional[Path] = typer.Argument(None)) -> None:
    """Launch the demo window."""

    from .gui.main import main

    argv = ["clipflap"] if image_path is None else ["clipflap", str(image_path)]
    raise typer.Exit(main(argv))


if __name__ == "__main__":
    app()
