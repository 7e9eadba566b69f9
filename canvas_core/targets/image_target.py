from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from .base import DisplayFrame, RenderTarget

LOGGER = logging.getLogger(__name__)


class ImageFileTarget(RenderTarget):
    """Encodes every presented frame to an image file, overwriting the previous one."""

    def __init__(self, path: str | Path, image_format: str | None = None) -> None:
        self.path = Path(path)
        self.image_format = image_format
        self.started = False
        self.last_revision: int | None = None

    def start(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.started = True

    def present_frame(self, frame: DisplayFrame) -> None:
        if not self.started:
            raise RuntimeError("image target not started")
        image = Image.fromarray(frame.rgba.numpy())
        image.save(self.path, format=self.image_format)
        self.last_revision = frame.revision
        LOGGER.debug("wrote frame revision=%d to %s", frame.revision, self.path)

    def stop(self) -> None:
        self.started = False
