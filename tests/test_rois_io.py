import json

import cv2 as cv
import numpy as np
import pytest

from resultocr.io_utils import collect_roi_dirs, load_image, load_knn_model, load_phash_database
from resultocr.rois import DirectoryRoiExtractor, DirectoryRoiMasker


@pytest.fixture
def roi_dir(tmp_path):
    shot = tmp_path / "shot2"
    (shot / "masks").mkdir(parents=True)
    cv.imwrite(str(shot / "jacket.png"), np.full((16, 16, 3), (10, 20, 30), dtype=np.uint8))
    cv.imwrite(str(shot / "pure.png"), np.full((8, 24, 3), 200, dtype=np.uint8))
    cv.imwrite(str(shot / "masks" / "pure.png"), np.full((8, 24), 255, dtype=np.uint8))
    return shot


def test_extractor_reads_gray_fields_and_color_jacket(roi_dir):
    extractor = DirectoryRoiExtractor(roi_dir)

    assert extractor.pure.shape == (8, 24)
    assert extractor.jacket.shape == (16, 16, 3)
    assert extractor.jacket is extractor.jacket


def test_masker_returns_stored_mask(roi_dir):
    masker = DirectoryRoiMasker(roi_dir / "masks")

    mask = masker.pure(np.zeros((1, 1), dtype=np.uint8))

    assert mask.shape == (8, 24)
    assert np.all(mask == 255)


def test_missing_field_raises(roi_dir):
    with pytest.raises(FileNotFoundError):
        DirectoryRoiExtractor(roi_dir).score


def test_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        DirectoryRoiExtractor(tmp_path / "nowhere")


def test_collect_roi_dirs(roi_dir, tmp_path):
    other = tmp_path / "shot10"
    other.mkdir()
    cv.imwrite(str(other / "jacket.png"), np.zeros((4, 4, 3), dtype=np.uint8))
    (tmp_path / "notes").mkdir()

    assert collect_roi_dirs(tmp_path) == [roi_dir, other]
    assert collect_roi_dirs(roi_dir) == [roi_dir]
    with pytest.raises(NotADirectoryError):
        collect_roi_dirs(roi_dir / "jacket.png")


def test_load_image_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_image(tmp_path / "missing.png")


def test_load_phash_database(tmp_path):
    path = tmp_path / "phash.json"
    path.write_text(
        json.dumps(
            {
                "hash_size": 8,
                "jackets": {"first": "ffffffffffffffff", "second": "0000000000000000"},
                "partner_icons": {"hikari": "00000000ffffffff"},
            }
        ),
        encoding="utf-8",
    )

    db = load_phash_database(path)

    assert db.hash_size == 8 and db.high_freq_factor == 4
    assert db.jackets.ids == ("first", "second")
    assert len(db.partner_icons) == 1


def test_load_phash_database_missing_key(tmp_path):
    path = tmp_path / "phash.json"
    path.write_text(json.dumps({"jackets": {}}), encoding="utf-8")

    with pytest.raises(ValueError):
        load_phash_database(path)


def test_load_knn_model_roundtrip(tmp_path, knn_model):
    path = tmp_path / "digits.knn.yml"
    knn_model.save(str(path))

    model = load_knn_model(path)

    assert model.isTrained()
    with pytest.raises(FileNotFoundError):
        load_knn_model(tmp_path / "absent.yml")
