from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np
import torch


@dataclass(frozen=True)
class DisplayFrame:
    revision: int
    width: int
    height: int
    rgba: torch.Tensor


class RenderTarget(ABC):
    @abstractmethod
    def start(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def present_frame(self, frame: DisplayFrame) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        raise NotImplementedError


def build_frame(rgba: np.ndarray, revision: int) -> DisplayFrame:
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError(f"invalid canvas shape: {tuple(rgba.shape)}")
    if rgba.dtype != np.uint8:
        raise ValueError(f"invalid canvas dtype: {rgba.dtype}")
    height, width, _ = rgba.shape
    return DisplayFrame(
        revision=revision,
        width=int(width),
        height=int(height),
        rgba=torch.from_numpy(np.ascontiguousarray(rgba)),
    )
