# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


# Author: Mohammad Saif Ul Haq
# Last Modified: 2026-10-17

"""General-purpose geometry helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

import cv2 as cv
import numpy as np


@dataclass(frozen=True)
class Rect:
    """Axis-aligned glyph candidate expressed as ``(x, y, width, height)``."""

    x: int
    y: int
    width: int
    height: int

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @classmethod
    def from_contour(cls, contour: np.ndarray) -> "Rect":
        x, y, w, h = cv.boundingRect(contour)
        return cls(int(x), int(y), int(w), int(h))


def union_rect(rects: Iterable[Rect]) -> Rect:
    """Return the smallest rectangle covering every rectangle in ``rects``."""

    items = list(rects)
    if not items:
        raise ValueError("union_rect() requires at least one rectangle")
    x1 = min(rect.x for rect in items)
    y1 = min(rect.y for rect in items)
    x2 = max(rect.right for rect in items)
    y2 = max(rect.bottom for rect in items)
    return Rect(x1, y1, x2 - x1, y2 - y1)


def vertical_gap(rect_a: Rect, rect_b: Rect) -> int:
    """Pixels of empty space between two rectangles along y (0 when they overlap)."""

    return max(0, max(rect_a.y, rect_b.y) - min(rect_a.bottom, rect_b.bottom))


def crop(image: np.ndarray, rect: Rect) -> np.ndarray:
    """Return the rectangular crop denoted by ``rect``."""

    return image[rect.y:rect.bottom, rect.x:rect.right]


def to_gray(image: np.ndarray) -> np.ndarray:
    """Convert a BGR raster to grayscale, passing single-channel input through."""

    if image.ndim == 2:
        return image
    if image.ndim == 3 and image.shape[2] == 3:
        return cv.cvtColor(image, cv.COLOR_BGR2GRAY)
    if image.ndim == 3 and image.shape[2] == 4:
        return cv.cvtColor(image, cv.COLOR_BGRA2GRAY)
    raise ValueError(f"Unsupported raster shape for grayscale conversion: {image.shape}")
