from __future__ import annotations

import base64
import io
from pathlib import Path

from PIL import Image


def encode_screenshot(image_path: Path, quality: int = 85, max_width: int = 1920) -> str:
    """Load a screenshot and return it as base64-encoded JPEG text.

    Images wider than ``max_width`` are downscaled, keeping the aspect ratio.
    ``max_width <= 0`` keeps the original size.
    """
    if not image_path.exists():
        raise FileNotFoundError(image_path)

    with Image.open(image_path) as image:
        rgb = image.convert("RGB")

    if max_width > 0 and rgb.width > max_width:
        height = max(1, round(rgb.height * max_width / rgb.width))
        rgb = rgb.resize((max_width, height))

    buffer = io.BytesIO()
    rgb.save(buffer, format="JPEG", quality=quality)
    return base64.b64encode(buffer.getvalue()).decode("ascii")
