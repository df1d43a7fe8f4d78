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

"""Shared preprocessing utilities for digit glyph images."""

from __future__ import annotations

import math
from typing import Iterable

import cv2 as cv
import numpy as np

HOG_WINDOW = (20, 20)
HOG_FEATURE_LENGTH = 81


def resize_fill_square(glyph: np.ndarray, target: int = 20) -> np.ndarray:
    """Scale ``glyph`` into a ``target x target`` canvas, keeping its aspect ratio.

    The longer side is scaled to ``target``; the shorter side is padded evenly
    with background (0).
    """
    if glyph.size == 0:
        raise ValueError("Cannot normalise an empty glyph")

    height, width = glyph.shape[:2]
    if height > width:
        new_h = target
        new_w = max(1, int(round(width * (target / height))))
    else:
        new_w = target
        new_h = max(1, int(round(height * (target / width))))
    resized = cv.resize(glyph, (new_w, new_h), interpolation=cv.INTER_LINEAR)

    border = math.ceil((max(new_w, new_h) - min(new_w, new_h)) / 2)
    if new_w < new_h:
        squared = cv.copyMakeBorder(resized, 0, 0, border, border, cv.BORDER_CONSTANT, value=(0,))
    else:
        squared = cv.copyMakeBorder(resized, border, border, 0, 0, cv.BORDER_CONSTANT, value=(0,))
    if squared.shape[0] != target or squared.shape[1] != target:
        # ceil() may leave the canvas one pixel over on odd differences
        squared = cv.resize(squared, (target, target), interpolation=cv.INTER_LINEAR)
    return squared


def _hog_descriptor() -> cv.HOGDescriptor:
    # window 20, block 10, stride 5, cell 10, 9 bins -> 3x3 blocks x 9 = 81 values
    return cv.HOGDescriptor(HOG_WINDOW, (10, 10), (5, 5), (10, 10), 9)


def preprocess_hog(glyphs: Iterable[np.ndarray]) -> np.ndarray:
    """Return one HOG feature row per normalised glyph as a ``float32`` matrix."""

    hog = _hog_descriptor()
    samples = []
    for glyph in glyphs:
        if glyph.dtype != np.uint8:
            glyph = glyph.astype(np.uint8)
        samples.append(np.asarray(hog.compute(glyph), dtype=np.float32).reshape(-1))
    if not samples:
        return np.empty((0, HOG_FEATURE_LENGTH), dtype=np.float32)
    return np.vstack(samples).astype(np.float32)
