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

"""k-NN digit recogniser for masked numeric regions."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

import cv2 as cv
import numpy as np

from ..config import DigitConfig
from ..segmentation import connect_broken, split_connected
from ..utils import Rect, crop
from .preprocess import preprocess_hog, resize_fill_square

logger = logging.getLogger(__name__)


def ocr_digit_samples_knn(samples: np.ndarray, knn_model: cv.ml.KNearest, k: int = 4) -> int:
    """Classify HOG rows and parse the concatenated labels as one integer.

    Negative labels mark a trained "not a digit" class and are dropped. An
    empty result reads as ``0``.
    """
    if samples is None or len(samples) == 0:
        return 0
    _, results, _, _ = knn_model.findNearest(np.asarray(samples, dtype=np.float32), k)
    labels = [int(label) for label in results.ravel()]
    text = "".join(str(label) for label in labels if label > -1)
    return int(text) if text else 0


class DigitRecognizer:
    """Turns a masked numeric region into an integer.

    Two readers are offered. :meth:`read_segmented` runs the full contour
    filtering and rectangle repair chain and suits the small judgement
    counters. :meth:`read_by_contour` only discards contours that are too
    short to be a digit, which is enough for the large, well separated score
    and max recall glyphs.
    """

    def __init__(self, knn_model: cv.ml.KNearest, config: Optional[DigitConfig] = None) -> None:
        if knn_model is None:
            raise ValueError("A trained KNearest model is required")
        self.knn_model = knn_model
        self.config = config or DigitConfig()

    def classify(self, glyphs: Iterable[np.ndarray]) -> int:
        size = int(self.config.glyph_size)
        samples = preprocess_hog(resize_fill_square(glyph, size) for glyph in glyphs)
        return ocr_digit_samples_knn(samples, self.knn_model, int(self.config.knn_k))

    def read_segmented(self, roi_gray: np.ndarray, factor: Optional[float] = None) -> int:
        if roi_gray is None or roi_gray.size == 0:
            return 0
        try:
            return self._read_segmented(roi_gray, self.config.scale_factor if factor is None else float(factor))
        except (cv.error, ValueError) as exc:
            logger.warning("Segmented digit read failed: %s", exc)
            return 0

    def read_by_contour(self, roi_gray: np.ndarray) -> int:
        if roi_gray is None or roi_gray.size == 0:
            return 0
        try:
            return self._read_by_contour(roi_gray)
        except (cv.error, ValueError) as exc:
            logger.warning("Contour digit read failed: %s", exc)
            return 0

    def segment_rects(self, roi_gray: np.ndarray, factor: float = 1.0) -> List[Rect]:
        """Return repaired glyph rectangles of ``roi_gray`` in reading order."""

        rects, _ = self._segment(roi_gray, factor)
        return rects

    def _segment(self, roi_gray: np.ndarray, factor: float) -> Tuple[List[Rect], List[np.ndarray]]:
        cfg = self.config
        height, width = roi_gray.shape[:2]
        contours, _ = cv.findContours(roi_gray, cv.RETR_EXTERNAL, cv.CHAIN_APPROX_NONE)

        kept: List[np.ndarray] = []
        rejected: List[np.ndarray] = []
        for contour in contours:
            if cv.contourArea(contour) >= cfg.min_contour_area * factor:
                kept.append(contour)
            else:
                rejected.append(contour)

        rects = [Rect.from_contour(contour) for contour in kept]
        rects = connect_broken(rects, width, height, config=cfg.repair)
        rects = [
            rect
            for rect in rects
            if rect.width >= cfg.min_rect_width * factor and rect.height >= cfg.min_rect_height * factor
        ]
        rects = split_connected(roi_gray, rects, config=cfg.repair)
        rects.sort(key=lambda rect: rect.x)
        return rects, rejected

    def _read_segmented(self, roi_gray: np.ndarray, factor: float) -> int:
        rects, rejected = self._segment(roi_gray, factor)
        if not rects:
            logger.debug("No glyphs survived segmentation; reading as 0")
            return 0

        roi_ocr = roi_gray.copy()
        if rejected:
            cv.fillPoly(roi_ocr, rejected, (0,))
        return self.classify(crop(roi_ocr, rect) for rect in rects)

    def _read_by_contour(self, roi_gray: np.ndarray) -> int:
        roi = roi_gray.copy()
        min_height = roi.shape[0] * self.config.min_height_ratio
        contours, _ = cv.findContours(roi, cv.RETR_EXTERNAL, cv.CHAIN_APPROX_NONE)

        rects: List[Rect] = []
        for contour in contours:
            rect = Rect.from_contour(contour)
            if rect.height < min_height:
                cv.fillPoly(roi, [contour], (0,))
            else:
                rects.append(rect)
        if not rects:
            logger.debug("No contour reached %.1f px; reading as 0", min_height)
            return 0
        rects.sort(key=lambda rect: rect.x)
        return self.classify(crop(roi, rect) for rect in rects)
