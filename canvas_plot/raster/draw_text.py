from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from canvas_core.engines.base import RGBA


DEFAULT_FONT_SIZE_PX = 10.0
FONT_PATTERNS = (
    "dejavusansmono",
    "dejavu sans mono",
    "menlo",
    "consolas",
    "courier new",
)
FONT_DIRS = (
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("C:/Windows/Fonts"),
)


def draw_text(dst: np.ndarray, x: int, y: int, text: str, color: RGBA, *, font_size_px: float = DEFAULT_FONT_SIZE_PX) -> None:
    if not text:
        return
    mask = _render_mask(text, _load_font(font_size_px))
    _blend_mask(dst, x, y, mask, color)


def text_size(text: str, *, font_size_px: float = DEFAULT_FONT_SIZE_PX) -> tuple[int, int]:
    if not text:
        return (0, max(1, int(round(font_size_px))))
    left, top, right, bottom = _load_font(font_size_px).getbbox(text)
    return (max(0, int(right - left)), max(1, int(bottom - top)))


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    alpha = (color[3] / 255.0) * cov[:, :, None]
    if not np.any(alpha > 0):
        return
    patch = dst[y0:y1, x0:x1]
    src = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    patch[:, :, :3] = np.clip(src * alpha + patch[:, :, :3].astype(np.float32) * (1.0 - alpha), 0, 255).astype(np.uint8)
    patch[:, :, 3] = 255


@lru_cache(maxsize=256)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=32)
def _load_font(font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    path = _find_font()
    if path is None:
        return ImageFont.load_default()
    try:
        return ImageFont.truetype(str(path), size=size)
    except OSError:
        return ImageFont.load_default()


@lru_cache(maxsize=1)
def _find_font() -> Path | None:
    candidates: list[Path] = []
    for base in FONT_DIRS:
        if base.exists():
            candidates.extend(base.rglob("*.tt[fc]"))
    for pattern in FONT_PATTERNS:
        wanted = pattern.replace(" ", "")
        for path in candidates:
            if wanted in path.name.lower().replace(" ", ""):
                return path
    return None
