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

"""Input/output helpers."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import List

import cv2 as cv
import numpy as np

from .identity.phash_db import ImagePhashDatabase


def collect_roi_dirs(path: Path) -> List[Path]:
    """Return screenshot ROI directories under ``path`` (``path`` itself if it holds crops)."""

    if not path.exists():
        raise FileNotFoundError(f"Input path does not exist: {path}")
    if not path.is_dir():
        raise NotADirectoryError(f"Expected a directory of ROI crops: {path}")
    if (path / "jacket.png").exists():
        return [path]
    dirs = [p for p in path.iterdir() if p.is_dir() and (p / "jacket.png").exists()]
    dirs.sort(key=lambda p: (_extract_index(p.name), p.name))
    return dirs


def _extract_index(name: str) -> int:
    match = re.search(r"(\d+)", name)
    return int(match.group(1)) if match else 0


def load_image(path: Path, flags: int = cv.IMREAD_COLOR) -> np.ndarray:
    """Load an image via OpenCV and raise a descriptive error on failure."""

    image = cv.imread(str(path), flags)
    if image is None:
        raise FileNotFoundError(f"Failed to load image: {path}")
    return image


def ensure_dir(path: Path) -> Path:
    """Create ``path`` (and parents) if needed and return it for chaining."""

    path.mkdir(parents=True, exist_ok=True)
    return path


def save_text(path: Path, content: str) -> None:
    """Persist UTF-8 text to ``path`` with directory creation."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def load_knn_model(path: Path) -> cv.ml.KNearest:
    """Load a trained OpenCV ``KNearest`` model saved with ``model.save()``."""

    if not path.exists():
        raise FileNotFoundError(f"k-NN model not found: {path}")
    model = cv.ml.KNearest_load(str(path))
    if not model.isTrained():
        raise ValueError(f"k-NN model at {path} is not trained")
    return model


def load_phash_database(path: Path) -> ImagePhashDatabase:
    """Read a hash index exported as JSON.

    Expected keys: ``hash_size``, ``high_freq_factor`` and the two tables
    ``jackets`` / ``partner_icons`` mapping identifiers to hex hashes. Table
    order is kept, which decides ties during lookup.
    """

    if not path.exists():
        raise FileNotFoundError(f"Phash database not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    try:
        return ImagePhashDatabase.from_hashes(
            hash_size=int(payload["hash_size"]),
            high_freq_factor=int(payload.get("high_freq_factor", 4)),
            jackets=payload["jackets"],
            partner_icons=payload.get("partner_icons", {}),
        )
    except KeyError as exc:
        raise ValueError(f"Phash database {path} is missing key {exc}") from exc
