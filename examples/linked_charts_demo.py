from __future__ import annotations

from pathlib import Path

import numpy as np

from canvas_core.core import ChartView, Composer, ComposerSettings, link_composers, parse_view_event
from canvas_core.engines import ShapeStyle
from canvas_core.targets import ImageFileTarget
from canvas_plot import GridDecorator, RasterEngine, group_series, series_to_shapes

# Raw pointer payloads as a UI layer would post them: (handler, payload).
SCRIPT = [
    ("wheel", {"positionX": 300, "positionY": 200, "deltaY": 1}),
    ("wheel", {"positionX": 300, "positionY": 200, "deltaY": -1, "modifierFlags": ["shiftKey"]}),
    ("move", {"x": 400, "y": 200, "buttons": 1}),
    ("move", {"x": 380, "y": 200, "buttons": 1}),
    ("leave", {"x": 380, "y": 200}),
    ("scale_y", {"x": 0, "y": 150, "buttons": 1}),
    ("scale_y", {"x": 0, "y": 140, "buttons": 1}),
    ("down", {"x": 0, "y": 0, "modifiers": {"ctrlKey": True}}),
]


def _dispatch(composer: Composer, handler: str, payload: dict) -> None:
    event = parse_view_event(payload)
    if event is None:
        return
    if handler == "wheel":
        composer.on_wheel(event)
    elif handler == "move":
        composer.on_mouse_move(event)
    elif handler == "leave":
        composer.on_mouse_leave(event)
    elif handler == "scale_y":
        composer.on_scale(event, orientation=-1)
    elif handler == "down":
        composer.on_mouse_down(event)


def main() -> None:
    out_dir = Path(__file__).resolve().parent / "output"
    rng = np.random.default_rng(7)
    steps = rng.normal(0.0, 1.0, size=240)
    close = 100.0 + np.cumsum(steps)
    volume = np.abs(rng.normal(1000.0, 250.0, size=close.size))

    prices = Composer(
        name="prices",
        items=group_series(
            {"close": close, "trend": np.convolve(close, np.ones(10) / 10.0, mode="same")},
            styles={"trend": ShapeStyle(color=(255, 140, 0, 255), size=2.0)},
        ),
        settings=ComposerSettings(padding=0.05),
        view=ChartView(900, 420, target=ImageFileTarget(out_dir / "prices.png"), threaded=False),
        decorators=[GridDecorator()],
    )
    volumes = Composer(
        name="volume",
        items=series_to_shapes(volume, kind="bar"),
        settings=ComposerSettings(value_count=2),
        view=ChartView(900, 180, target=ImageFileTarget(out_dir / "volume.png"), threaded=False),
        decorators=[GridDecorator()],
    )
    link_composers([prices, volumes])

    prices.create(RasterEngine)
    volumes.create(RasterEngine)
    prices.update(prices.domain.with_index(120, 240), prices.name)

    for handler, payload in SCRIPT:
        _dispatch(prices, handler, payload)

    print(f"prices window={prices.domain.index_domain} values={prices.domain.value_domain}")
    print(f"volume window={volumes.domain.index_domain}")
    print(f"wrote {out_dir / 'prices.png'} and {out_dir / 'volume.png'}")
    prices.view.stop()
    volumes.view.stop()


if __name__ == "__main__":
    main()
