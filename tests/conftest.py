"""Shared fixtures: synthetic glyphs and a tiny k-NN model trained on them."""

from __future__ import annotations

from typing import Callable, Dict, Sequence, Tuple

import cv2 as cv
import numpy as np
import pytest

from resultocr.recognition import preprocess_hog, resize_fill_square

GLYPH_W = 10
GLYPH_H = 20


def _two() -> np.ndarray:
    return np.full((GLYPH_H, GLYPH_W), 255, dtype=np.uint8)


def _three() -> np.ndarray:
    glyph = np.full((GLYPH_H, GLYPH_W), 255, dtype=np.uint8)
    glyph[2:-2, 2:-2] = 0
    return glyph


def _seven() -> np.ndarray:
    glyph = np.zeros((GLYPH_H, GLYPH_W), dtype=np.uint8)
    glyph[0:3, :] = 255
    glyph[:, GLYPH_W - 3 :] = 255
    return glyph


@pytest.fixture(scope="session")
def glyphs() -> Dict[int, np.ndarray]:
    """Stand-in glyph shapes keyed by the digit they are labelled as."""

    return {2: _two(), 3: _three(), 7: _seven()}


@pytest.fixture(scope="session")
def knn_model(glyphs: Dict[int, np.ndarray]) -> cv.ml.KNearest:
    samples = []
    labels = []
    for label, glyph in glyphs.items():
        feature = preprocess_hog([resize_fill_square(glyph, 20)])[0]
        # four copies per label so that k=4 never reaches into another class
        for _ in range(4):
            samples.append(feature)
            labels.append(label)
    model = cv.ml.KNearest_create()
    model.train(
        np.asarray(samples, dtype=np.float32),
        cv.ml.ROW_SAMPLE,
        np.asarray(labels, dtype=np.float32).reshape(-1, 1),
    )
    return model


@pytest.fixture
def make_region(glyphs: Dict[int, np.ndarray]) -> Callable[..., np.ndarray]:
    """Return a factory painting labelled glyphs onto a black raster."""

    def _make(
        placements: Sequence[Tuple[int, int, int]],
        size: Tuple[int, int] = (30, 80),
    ) -> np.ndarray:
        region = np.zeros(size, dtype=np.uint8)
        for label, x, y in placements:
            glyph = glyphs[label]
            region[y : y + glyph.shape[0], x : x + glyph.shape[1]] = glyph
        return region

    return _make
