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

"""Partner icon normalisation ahead of hashing."""

from __future__ import annotations

import cv2 as cv
import numpy as np

CORNER_FILL = 128


def preprocess_partner_icon(img_gray: np.ndarray) -> np.ndarray:
    """Square up a grayscale partner icon and blank out its frame corners.

    Wide crops are padded at the top with replicated edge rows. The four
    corner triangles, each spanning from a corner to the midpoints of its two
    adjacent sides, are filled with neutral gray. The input is never modified.
    """
    if img_gray.ndim != 2:
        raise ValueError("Expected single-channel grayscale input")

    height, width = img_gray.shape[:2]
    if width > height:
        squared = cv.copyMakeBorder(img_gray, width - height, 0, 0, 0, cv.BORDER_REPLICATE)
    else:
        squared = img_gray.copy()

    h, w = squared.shape[:2]
    half_w = w // 2
    half_h = h // 2
    corners = [
        np.array([[0, 0], [half_w, 0], [0, half_h]], dtype=np.int32),
        np.array([[w, 0], [half_w, 0], [w, half_h]], dtype=np.int32),
        np.array([[0, h], [half_w, h], [0, half_h]], dtype=np.int32),
        np.array([[w, h], [half_w, h], [w, half_h]], dtype=np.int32),
    ]
    cv.fillPoly(squared, corners, (CORNER_FILL,))
    return squared
