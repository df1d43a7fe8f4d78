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

"""Interfaces to the region locator and the field masker.

Locating fields on a screenshot and colour-thresholding them are handled
outside this package. The OCR only consumes the two contracts below.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Union

import cv2 as cv
import numpy as np

from .io_utils import load_image


class RoiExtractor(ABC):
    """Supplies the cropped sub-image of every result-screen field."""

    @property
    @abstractmethod
    def pure(self) -> np.ndarray: ...

    @property
    @abstractmethod
    def far(self) -> np.ndarray: ...

    @property
    @abstractmethod
    def lost(self) -> np.ndarray: ...

    @property
    @abstractmethod
    def score(self) -> np.ndarray: ...

    @property
    @abstractmethod
    def rating_class(self) -> np.ndarray: ...

    @property
    @abstractmethod
    def max_recall(self) -> np.ndarray: ...

    @property
    @abstractmethod
    def clear_status(self) -> np.ndarray: ...

    @property
    @abstractmethod
    def jacket(self) -> np.ndarray: ...

    @property
    @abstractmethod
    def partner_icon(self) -> np.ndarray: ...


class RoiMasker(ABC):
    """Turns a field crop into a mask answering one question about it."""

    @abstractmethod
    def pure(self, roi: np.ndarray) -> np.ndarray: ...

    @abstractmethod
    def far(self, roi: np.ndarray) -> np.ndarray: ...

    @abstractmethod
    def lost(self, roi: np.ndarray) -> np.ndarray: ...

    @abstractmethod
    def score(self, roi: np.ndarray) -> np.ndarray: ...

    @abstractmethod
    def max_recall(self, roi: np.ndarray) -> np.ndarray: ...

    @abstractmethod
    def rating_class_pst(self, roi: np.ndarray) -> np.ndarray: ...

    @abstractmethod
    def rating_class_prs(self, roi: np.ndarray) -> np.ndarray: ...

    @abstractmethod
    def rating_class_ftr(self, roi: np.ndarray) -> np.ndarray: ...

    @abstractmethod
    def rating_class_byd(self, roi: np.ndarray) -> np.ndarray: ...

    @abstractmethod
    def clear_status_track_lost(self, roi: np.ndarray) -> np.ndarray: ...

    @abstractmethod
    def clear_status_track_complete(self, roi: np.ndarray) -> np.ndarray: ...

    @abstractmethod
    def clear_status_full_recall(self, roi: np.ndarray) -> np.ndarray: ...

    @abstractmethod
    def clear_status_pure_memory(self, roi: np.ndarray) -> np.ndarray: ...


class _ImageDirectory:
    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)
        if not self.root.is_dir():
            raise FileNotFoundError(f"ROI directory does not exist: {self.root}")
        self._cache: Dict[str, np.ndarray] = {}

    def _load(self, name: str, flags: int) -> np.ndarray:
        if name not in self._cache:
            self._cache[name] = load_image(self.root / f"{name}.png", flags)
        return self._cache[name]


class DirectoryRoiExtractor(_ImageDirectory, RoiExtractor):
    """Field crops stored as ``<root>/<field>.png``.

    Numeric and badge fields are read as grayscale, ``jacket`` and
    ``partner_icon`` in colour.
    """

    def _gray(self, name: str) -> np.ndarray:
        return self._load(name, cv.IMREAD_GRAYSCALE)

    def _color(self, name: str) -> np.ndarray:
        return self._load(name, cv.IMREAD_COLOR)

    @property
    def pure(self) -> np.ndarray:
        return self._gray("pure")

    @property
    def far(self) -> np.ndarray:
        return self._gray("far")

    @property
    def lost(self) -> np.ndarray:
        return self._gray("lost")

    @property
    def score(self) -> np.ndarray:
        return self._gray("score")

    @property
    def rating_class(self) -> np.ndarray:
        return self._gray("rating_class")

    @property
    def max_recall(self) -> np.ndarray:
        return self._gray("max_recall")

    @property
    def clear_status(self) -> np.ndarray:
        return self._gray("clear_status")

    @property
    def jacket(self) -> np.ndarray:
        return self._color("jacket")

    @property
    def partner_icon(self) -> np.ndarray:
        return self._color("partner_icon")


class DirectoryRoiMasker(_ImageDirectory, RoiMasker):
    """Pre-computed masks stored as ``<root>/<mask>.png``.

    The ``roi`` argument is ignored and the stored mask is returned, which
    lets an external masking step be replayed offline.
    """

    def _mask(self, name: str) -> np.ndarray:
        return self._load(name, cv.IMREAD_GRAYSCALE)

    def pure(self, roi: np.ndarray) -> np.ndarray:
        return self._mask("pure")

    def far(self, roi: np.ndarray) -> np.ndarray:
        return self._mask("far")

    def lost(self, roi: np.ndarray) -> np.ndarray:
        return self._mask("lost")

    def score(self, roi: np.ndarray) -> np.ndarray:
        return self._mask("score")

    def max_recall(self, roi: np.ndarray) -> np.ndarray:
        return self._mask("max_recall")

    def rating_class_pst(self, roi: np.ndarray) -> np.ndarray:
        return self._mask("rating_class_pst")

    def rating_class_prs(self, roi: np.ndarray) -> np.ndarray:
        return self._mask("rating_class_prs")

    def rating_class_ftr(self, roi: np.ndarray) -> np.ndarray:
        return self._mask("rating_class_ftr")

    def rating_class_byd(self, roi: np.ndarray) -> np.ndarray:
        return self._mask("rating_class_byd")

    def clear_status_track_lost(self, roi: np.ndarray) -> np.ndarray:
        return self._mask("clear_status_track_lost")

    def clear_status_track_complete(self, roi: np.ndarray) -> np.ndarray:
        return self._mask("clear_status_track_complete")

    def clear_status_full_recall(self, roi: np.ndarray) -> np.ndarray:
        return self._mask("clear_status_full_recall")

    def clear_status_pure_memory(self, roi: np.ndarray) -> np.ndarray:
        return self._mask("clear_status_pure_memory")
