from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from canvas_core.core import (
    ChartView,
    Composer,
    ComposerSettings,
    DomainModel,
    ViewEvent,
    load_settings,
)
from canvas_core.engines import ShapeStyle
from canvas_core.targets import ImageFileTarget
from canvas_plot import AreaShape, BarShape, GridDecorator, GroupShape, LineShape, RasterEngine

LOGGER = logging.getLogger("canvas_charts")

UP_COLOR = (50, 205, 50, 255)
DOWN_COLOR = (255, 69, 0, 255)


def build_sample_point(rng: np.random.Generator) -> GroupShape:
    low = int(rng.integers(1000, 2000))
    high = int(rng.integers(3000, 5000))
    point = int(rng.integers(low, high))
    bar_color = (0, 191, 255, 255) if point % 2 == 0 else DOWN_COLOR
    return GroupShape(
        groups={
            "Lines": GroupShape(
                groups={
                    "X": LineShape(y=float(point + high), style=ShapeStyle(color=UP_COLOR, size=1.0)),
                    "Y": LineShape(y=float(point - low), style=ShapeStyle(color=DOWN_COLOR, size=1.0)),
                }
            ),
            "Indicators": GroupShape(groups={"Bars": BarShape(y=float(point), style=ShapeStyle(color=bar_color))}),
            "Performance": GroupShape(groups={"Balance": AreaShape(y=float(point))}),
        }
    )


def render_sample(args: argparse.Namespace) -> None:
    settings = load_settings(args.settings) if args.settings is not None else ComposerSettings()
    rng = np.random.default_rng(args.seed)
    view = ChartView(args.width, args.height, target=ImageFileTarget(args.out), threaded=False)
    composer = Composer(name="sample", settings=settings, view=view, decorators=[GridDecorator()])
    composer.create(RasterEngine)

    # Stream points in, keeping a sliding window over the newest ones.
    for _ in range(args.points):
        composer.items.append(build_sample_point(rng))
        count = len(composer.items)
        composer.update(DomainModel().with_index(max(0, count - args.window), count))

    for _ in range(abs(args.pan)):
        composer.on_wheel(ViewEvent(x=0.0, y=0.0, delta_y=-1.0 if args.pan > 0 else 1.0))
    for _ in range(abs(args.zoom)):
        composer.on_wheel(ViewEvent(x=0.0, y=0.0, modifiers=frozenset({"shift"}), delta_y=-1.0 if args.zoom > 0 else 1.0))

    view.stop()
    if view.last_error is not None:
        raise view.last_error
    LOGGER.info("rendered %d points, domain=%s, frame=%s", len(composer.items), composer.domain.index_domain, args.out)


def main() -> None:
    parser = argparse.ArgumentParser(prog="canvas-charts")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    sample = sub.add_parser("render-sample", help="Render a random streaming chart to an image file.")
    sample.add_argument("--out", type=Path, default=Path("chart.png"))
    sample.add_argument("--points", type=int, default=100)
    sample.add_argument("--window", type=int, default=60, help="Number of newest points kept visible.")
    sample.add_argument("--width", type=int, default=800)
    sample.add_argument("--height", type=int, default=600)
    sample.add_argument("--seed", type=int, default=None)
    sample.add_argument("--settings", type=Path, default=None, help="TOML file with a [composer] table.")
    sample.add_argument("--pan", type=int, default=0, help="Wheel steps to pan back (negative pans forward).")
    sample.add_argument("--zoom", type=int, default=0, help="Wheel steps to zoom in (negative zooms out).")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.command == "render-sample":
        if args.points <= 0:
            parser.error("--points must be > 0")
        if args.window <= 0:
            parser.error("--window must be > 0")
        render_sample(args)


if __name__ == "__main__":
    main()
