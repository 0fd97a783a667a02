"""Image export for finished canvases."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from .grid import Canvas


def canvas_to_image(canvas: Canvas) -> Image.Image:
    # uint8 (H, W, 3) arrays map onto RGB
    return Image.fromarray(canvas.to_array())


def save_canvas(canvas: Canvas, path: Path | str) -> Path:
    """Write ``canvas`` to ``path``; the format follows the suffix (PNG when absent)."""

    if not canvas.is_complete():
        missing = canvas.total - canvas.committed_count
        raise ValueError(f"canvas is incomplete ({missing} pixels never committed)")

    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    image = canvas_to_image(canvas)
    if destination.suffix:
        image.save(destination)
    else:
        image.save(destination, format="PNG")
    return destination


__all__ = ["canvas_to_image", "save_canvas"]
