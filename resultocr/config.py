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

"""Configuration helpers for the result-screen OCR."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Union


def _strip_inline_comment(value: str) -> str:
    if "#" not in value:
        return value.strip()
    return value.split("#", 1)[0].strip()


def _parse_override_value(value: str, key: str = "") -> object:
    text = _strip_inline_comment(value)
    if not text:
        return ""
    if key.lower().endswith(("_path", "_model", "_db")):
        return text
    lowered = text.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    try:
        if any(sep in text for sep in (".", "e", "E")):
            return float(text)
        return int(text)
    except ValueError:
        return text


def load_config_overrides_from_file(path: Union[str, Path], *, allow_missing: bool = False) -> Dict[str, object]:
    """Parse a minimal ``key: value`` override file (no JSON required)."""

    file_path = Path(path)
    if not file_path.exists():
        if allow_missing:
            return {}
        raise FileNotFoundError(f"Config file not found: {file_path}")

    overrides: Dict[str, object] = {}
    with file_path.open("r", encoding="utf-8") as handle:
        for raw_line in handle:
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            if ":" not in line:
                continue
            key, value = line.split(":", 1)
            key = key.strip()
            overrides[key] = _parse_override_value(value, key)
    return overrides


@dataclass
class RectRepairConfig:
    # connect_broken: fragments are rects whose height sits in this band of the raster height
    broken_min_height_ratio: float = 0.1
    broken_max_height_ratio: float = 0.6
    broken_tolerance_x_ratio: float = 0.05
    broken_tolerance_y_ratio: float = 0.1
    # split_connected
    split_wh_ratio: float = 1.05
    split_border_ratio: float = 0.1
    split_white_threshold: int = 200


@dataclass
class DigitConfig:
    knn_k: int = 4
    glyph_size: int = 20
    scale_factor: float = 1.0
    min_contour_area: float = 5.0
    min_rect_width: float = 5.0
    min_rect_height: float = 6.0
    min_height_ratio: float = 0.6  # score / max recall decorative contour cut-off
    repair: RectRepairConfig = field(default_factory=RectRepairConfig)


@dataclass
class ResultOcrConfig:
    knn_model_path: Path = Path("data/digits.knn.yml")
    phash_db_path: Path = Path("data/phash.json")
    output_root: Path = Path("output")
    digits: DigitConfig = field(default_factory=DigitConfig)

    def result_path(self, name: str) -> Path:
        return self.output_root / f"{name}.json"


def _pop_first(keys: Iterable[str], source: Dict[str, object], default: object) -> Any:
    for key in keys:
        if key in source:
            return source.pop(key)
    return default


def _ensure_path(value: object, base_path: Path) -> Path:
    path = Path(str(value))
    if not path.is_absolute():
        path = base_path / path
    return path


def load_ocr_config(config_dict: Optional[Mapping[str, object]], base_path: Optional[Path] = None) -> ResultOcrConfig:
    """Build a :class:`ResultOcrConfig` from defaults plus ``config_dict`` overrides.

    Unknown keys are ignored so a single override file can be shared with
    other tooling.
    """

    data = dict(config_dict or {})
    base = Path(base_path or Path.cwd())

    repair = RectRepairConfig(
        broken_min_height_ratio=float(_pop_first(["fix_broken_min_height", "broken_min_height_ratio"], data, 0.1)),
        broken_max_height_ratio=float(_pop_first(["fix_broken_max_height", "broken_max_height_ratio"], data, 0.6)),
        broken_tolerance_x_ratio=float(_pop_first(["fix_broken_tol_x", "broken_tolerance_x_ratio"], data, 0.05)),
        broken_tolerance_y_ratio=float(_pop_first(["fix_broken_tol_y", "broken_tolerance_y_ratio"], data, 0.1)),
        split_wh_ratio=float(_pop_first(["fix_split_wh_ratio", "split_wh_ratio"], data, 1.05)),
        split_border_ratio=float(_pop_first(["fix_split_border", "split_border_ratio"], data, 0.1)),
        split_white_threshold=int(_pop_first(["fix_split_white", "split_white_threshold"], data, 200)),
    )

    digits = DigitConfig(
        knn_k=int(_pop_first(["knn_k", "digit_k"], data, 4)),
        glyph_size=int(_pop_first(["glyph_size", "digit_size"], data, 20)),
        scale_factor=float(_pop_first(["scale_factor", "digit_scale_factor"], data, 1.0)),
        min_contour_area=float(_pop_first(["min_contour_area"], data, 5.0)),
        min_rect_width=float(_pop_first(["min_rect_width"], data, 5.0)),
        min_rect_height=float(_pop_first(["min_rect_height"], data, 6.0)),
        min_height_ratio=float(_pop_first(["min_height_ratio", "score_min_height_ratio"], data, 0.6)),
        repair=repair,
    )

    return ResultOcrConfig(
        knn_model_path=_ensure_path(_pop_first(["knn_model", "knn_model_path"], data, "data/digits.knn.yml"), base),
        phash_db_path=_ensure_path(_pop_first(["phash_db", "phash_db_path"], data, "data/phash.json"), base),
        output_root=_ensure_path(_pop_first(["output_root", "output_dir"], data, "output"), base),
        digits=digits,
    )
