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
"""Geometric repair of glyph bounding rectangles.

Contours found on anti-aliased, device-rendered digits do not always map one
to one onto glyphs. A digit such as ``5`` can come apart into a top bar and a
bowl, and two adjacent ``1`` glyphs can touch and form a single blob. The two
helpers below fix either case on the rectangle level; callers are expected to
re-sort the output by ``x`` before reading it.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Set, Tuple

import numpy as np

from ..config import RectRepairConfig
from ..utils import Rect, crop, union_rect, vertical_gap

logger = logging.getLogger(__name__)


def connect_broken(
    rects: Sequence[Rect],
    img_width: float,
    img_height: float,
    tolerances: Optional[Tuple[float, float]] = None,
    config: Optional[RectRepairConfig] = None,
) -> List[Rect]:
    """Merge fragments of one glyph that were detected as separate contours.

    A fragment is a rectangle noticeably shorter than a full glyph. It is
    grouped with every other rectangle sharing nearly the same left and right
    borders and lying close to it vertically; each group is replaced by its
    union. Rectangles outside any group are returned untouched.
    """

    cfg = config or RectRepairConfig()
    if tolerances is None:
        tolerances = (img_width * cfg.broken_tolerance_x_ratio, img_height * cfg.broken_tolerance_y_ratio)
    tol_x, tol_y = tolerances
    min_height = img_height * cfg.broken_min_height_ratio
    max_height = img_height * cfg.broken_max_height_ratio

    consumed: Set[int] = set()
    merged: List[Rect] = []
    for idx, rect in enumerate(rects):
        if idx in consumed:
            continue
        if not (min_height <= rect.height <= max_height):
            continue

        group = [idx]
        for other_idx, other in enumerate(rects):
            if other_idx == idx or other_idx in consumed:
                continue
            if abs(rect.x - other.x) >= tol_x or abs(rect.right - other.right) >= tol_x:
                continue
            if vertical_gap(rect, other) > tol_y:
                continue
            group.append(other_idx)

        if len(group) < 2:
            continue
        consumed.update(group)
        merged.append(union_rect(rects[i] for i in group))

    if merged:
        logger.debug("connect_broken merged %d fragment(s) into %d rect(s)", len(consumed), len(merged))

    result = [rect for idx, rect in enumerate(rects) if idx not in consumed]
    result.extend(merged)
    return result


def _split_column(projection: np.ndarray, offset: int) -> Optional[int]:
    """Return the absolute x of the thinnest column in ``projection``."""

    if projection.size == 0 or not np.any(projection):
        return None
    least = int(projection.min())
    xs = np.flatnonzero(projection == least).astype(np.float64) + offset
    if xs.size > 1:
        mean = float(xs.mean())
        stdev = float(xs.std(ddof=1))
        if stdev > 0:
            xs = xs[np.abs(xs - mean) <= stdev * 1.5]
    return int(round(float(np.median(xs))))


def split_connected(
    img_masked: np.ndarray,
    rects: Sequence[Rect],
    config: Optional[RectRepairConfig] = None,
) -> List[Rect]:
    """Split rectangles that are too wide to hold a single glyph.

    Bright pixels are counted per column inside the rectangle (ignoring a
    border on both sides) and the rectangle is cut at the column carrying the
    fewest of them, which is either a true gap or the thinnest stroke joint.
    Each rectangle is cut at most once, so three touching glyphs come back as
    two rectangles.
    """

    cfg = config or RectRepairConfig()
    result: List[Rect] = []
    for rect in rects:
        if rect.height <= 0 or rect.width / rect.height <= cfg.split_wh_ratio:
            result.append(rect)
            continue

        border = int(round(rect.width * cfg.split_border_ratio))
        inner = Rect(rect.x + border, rect.y, rect.width - 2 * border, rect.height)
        if inner.width <= 0:
            result.append(rect)
            continue

        region = crop(img_masked, inner)
        projection = np.count_nonzero(region > cfg.split_white_threshold, axis=0)
        x_mid = _split_column(projection, inner.x)
        if x_mid is None or not (rect.x < x_mid < rect.right):
            result.append(rect)
            continue

        result.append(Rect(rect.x, rect.y, x_mid - rect.x, rect.height))
        result.append(Rect(x_mid, rect.y, rect.right - x_mid, rect.height))
        logger.debug("split_connected split %s at x=%d", rect.as_tuple(), x_mid)
    return result
