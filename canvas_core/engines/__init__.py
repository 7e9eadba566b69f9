from .base import RGBA, Engine, ShapeStyle

__all__ = ["Engine", "RGBA", "ShapeStyle"]
