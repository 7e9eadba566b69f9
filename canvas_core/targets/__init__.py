from .base import DisplayFrame, RenderTarget, build_frame
from .image_target import ImageFileTarget
from .memory_target import MemoryTarget

__all__ = ["DisplayFrame", "ImageFileTarget", "MemoryTarget", "RenderTarget", "build_frame"]
