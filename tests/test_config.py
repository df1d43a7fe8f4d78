from pathlib import Path

import pytest

from resultocr.config import DigitConfig, RectRepairConfig, load_config_overrides_from_file, load_ocr_config


def test_overrides_file_parses_typed_values(tmp_path):
    path = tmp_path / "ocr.conf"
    path.write_text(
        "# comment line\n"
        "knn_k: 3\n"
        "fix_split_wh_ratio: 1.2  # wider glyphs\n"
        "knn_model: models/7.yml\n"
        "output_dir: results\n"
        "verbose: true\n"
        "not a pair\n",
        encoding="utf-8",
    )

    overrides = load_config_overrides_from_file(path)

    assert overrides == {
        "knn_k": 3,
        "fix_split_wh_ratio": 1.2,
        "knn_model": "models/7.yml",
        "output_dir": "results",
        "verbose": True,
    }


def test_missing_overrides_file(tmp_path):
    missing = tmp_path / "absent.conf"

    assert load_config_overrides_from_file(missing, allow_missing=True) == {}
    with pytest.raises(FileNotFoundError):
        load_config_overrides_from_file(missing)


def test_defaults():
    cfg = load_ocr_config(None, base_path=Path("/srv/ocr"))

    assert cfg.digits == DigitConfig()
    assert cfg.digits.repair == RectRepairConfig()
    assert cfg.knn_model_path == Path("/srv/ocr/data/digits.knn.yml")
    assert cfg.result_path("shot1") == Path("/srv/ocr/output/shot1.json")


def test_short_and_long_keys_are_both_honoured(tmp_path):
    cfg = load_ocr_config(
        {
            "fix_broken_tol_y": 0.2,
            "split_border_ratio": 0.15,
            "digit_k": 5,
            "score_min_height_ratio": 0.5,
            "phash_db": str(tmp_path / "hashes.json"),
            "output_dir": "out",
            "unrelated": 1,
        },
        base_path=tmp_path,
    )

    assert cfg.digits.repair.broken_tolerance_y_ratio == 0.2
    assert cfg.digits.repair.split_border_ratio == 0.15
    assert cfg.digits.knn_k == 5
    assert cfg.digits.min_height_ratio == 0.5
    assert cfg.phash_db_path == tmp_path / "hashes.json"
    assert cfg.output_root == tmp_path / "out"


def test_caller_mapping_is_left_untouched():
    overrides = {"knn_k": 2}

    load_ocr_config(overrides)

    assert overrides == {"knn_k": 2}
