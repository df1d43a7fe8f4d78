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

"""High-level result-screen orchestration."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple

import cv2 as cv
import numpy as np

from .config import DigitConfig
from .domain import Modifier, PlayResult, clear_status_to_clear_type
from .identity import ImagePhashDatabase, preprocess_partner_icon
from .recognition import DigitRecognizer
from .rois import RoiExtractor, RoiMasker
from .utils import to_gray

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeviceOcrResult:
    rating_class: int
    pure: int
    far: int
    lost: int
    score: int
    max_recall: Optional[int]
    song_id: Optional[str]
    song_id_confidence: Optional[float]
    clear_status: Optional[int]
    partner_id: Optional[str]
    partner_id_confidence: Optional[float]

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)

    def to_play_result(
        self,
        partner_modifiers: Optional[Mapping[str, int]] = None,
        date: Optional[int] = None,
        comment: Optional[str] = None,
    ) -> Optional[PlayResult]:
        """Convert into a storable play result; ``None`` when the song is unknown.

        The modifier comes from ``partner_modifiers[partner_id]``; the clear
        type is only resolved when both the modifier and the badge are known.
        """
        if self.song_id is None:
            return None

        modifier: Optional[Modifier] = None
        if partner_modifiers is not None and self.partner_id is not None:
            value = partner_modifiers.get(self.partner_id)
            modifier = Modifier(value) if value is not None else None
        clear_type = None
        if modifier is not None and self.clear_status is not None:
            clear_type = clear_status_to_clear_type(self.clear_status, modifier)

        return PlayResult(
            song_id=self.song_id,
            rating_class=self.rating_class,
            score=self.score,
            pure=self.pure,
            far=self.far,
            lost=self.lost,
            date=date,
            max_recall=self.max_recall,
            modifier=modifier,
            clear_type=clear_type,
            comment=comment,
        )


def vote_active_variant(masks: Sequence[np.ndarray]) -> int:
    """Index of the mask with the most non-zero pixels; the first maximum wins."""

    if not masks:
        raise ValueError("At least one variant mask is required")
    counts = [int(np.count_nonzero(mask)) for mask in masks]
    return int(np.argmax(counts))


class DeviceOcr:
    """Reads every field of one result screen.

    The k-NN model and the phash database are shared, read-only
    dependencies; one instance per screenshot is cheap to build and keeps no
    state between calls.
    """

    def __init__(
        self,
        extractor: RoiExtractor,
        masker: RoiMasker,
        knn_model: cv.ml.KNearest,
        phash_db: ImagePhashDatabase,
        config: Optional[DigitConfig] = None,
    ) -> None:
        if phash_db is None:
            raise ValueError("A phash database is required")
        self.extractor = extractor
        self.masker = masker
        self.phash_db = phash_db
        self.recognizer = DigitRecognizer(knn_model, config)

    def _pfl(self, roi_gray: np.ndarray, factor: Optional[float] = None) -> int:
        return self.recognizer.read_segmented(roi_gray, factor)

    def pure(self) -> int:
        return self._pfl(self.masker.pure(self.extractor.pure))

    def far(self) -> int:
        return self._pfl(self.masker.far(self.extractor.far))

    def lost(self) -> int:
        return self._pfl(self.masker.lost(self.extractor.lost))

    def score(self) -> int:
        return self.recognizer.read_by_contour(self.masker.score(self.extractor.score))

    def max_recall(self) -> int:
        return self.recognizer.read_by_contour(self.masker.max_recall(self.extractor.max_recall))

    def _rating_class_maskers(self) -> Tuple[Callable[[np.ndarray], np.ndarray], ...]:
        return (
            self.masker.rating_class_pst,
            self.masker.rating_class_prs,
            self.masker.rating_class_ftr,
            self.masker.rating_class_byd,
        )

    def _clear_status_maskers(self) -> Tuple[Callable[[np.ndarray], np.ndarray], ...]:
        return (
            self.masker.clear_status_track_lost,
            self.masker.clear_status_track_complete,
            self.masker.clear_status_full_recall,
            self.masker.clear_status_pure_memory,
        )

    def rating_class(self) -> int:
        roi = self.extractor.rating_class
        return vote_active_variant([mask(roi) for mask in self._rating_class_maskers()])

    def clear_status(self) -> int:
        roi = self.extractor.clear_status
        return vote_active_variant([mask(roi) for mask in self._clear_status_maskers()])

    def lookup_song_id(self) -> Tuple[str, int]:
        return self.phash_db.lookup_jacket(to_gray(self.extractor.jacket))

    def song_id(self) -> str:
        return self.lookup_song_id()[0]

    def lookup_partner_id(self) -> Tuple[str, int]:
        icon = preprocess_partner_icon(to_gray(self.extractor.partner_icon))
        return self.phash_db.lookup_partner_icon(icon)

    def partner_id(self) -> str:
        return self.lookup_partner_id()[0]

    def ocr(self) -> DeviceOcrResult:
        song_id, song_id_distance = self.lookup_song_id()
        partner_id, partner_id_distance = self.lookup_partner_id()
        logger.debug(
            "Identity lookup: song=%s (d=%d) partner=%s (d=%d)",
            song_id,
            song_id_distance,
            partner_id,
            partner_id_distance,
        )

        return DeviceOcrResult(
            rating_class=self.rating_class(),
            pure=self.pure(),
            far=self.far(),
            lost=self.lost(),
            score=self.score(),
            max_recall=self.max_recall(),
            song_id=song_id,
            song_id_confidence=self.phash_db.confidence(song_id_distance),
            clear_status=self.clear_status(),
            partner_id=partner_id,
            partner_id_confidence=self.phash_db.confidence(partner_id_distance),
        )
