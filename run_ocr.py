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

"""Run the result-screen OCR over directories of pre-cropped field images."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from resultocr import DeviceOcr, DirectoryRoiExtractor, DirectoryRoiMasker, load_config_overrides_from_file, load_ocr_config
from resultocr.io_utils import collect_roi_dirs, ensure_dir, load_knn_model, load_phash_database, save_text

logger = logging.getLogger("run_ocr")


def run_ocr(
    input_path: Union[str, Path],
    config: Optional[Mapping[str, object]] = None,
) -> Dict[str, Dict[str, object]]:
    """
    Read every screenshot ROI directory under ``input_path``.

    Each directory holds ``<field>.png`` crops plus a ``masks/`` folder with
    the masker output (see :mod:`resultocr.rois`). The k-NN model and the
    phash database are loaded once and shared by all screenshots.

    Args:
        input_path: A ROI directory, or a directory of ROI directories
        config: Optional configuration dictionary to override defaults

    Returns:
        Dictionary mapping directory names to the recognised result fields

    Example:
        >>> results = run_ocr("samples/rois")
        >>> results["shot1"]["score"]
        9876543
    """
    overrides = dict(config or {})
    ocr_cfg = load_ocr_config(overrides, base_path=Path.cwd())
    ensure_dir(ocr_cfg.output_root)

    knn_model = load_knn_model(ocr_cfg.knn_model_path)
    phash_db = load_phash_database(ocr_cfg.phash_db_path)

    results: Dict[str, Dict[str, object]] = {}
    for roi_dir in collect_roi_dirs(Path(input_path)):
        device_ocr = DeviceOcr(
            DirectoryRoiExtractor(roi_dir),
            DirectoryRoiMasker(roi_dir / "masks"),
            knn_model,
            phash_db,
            ocr_cfg.digits,
        )
        fields = device_ocr.ocr().as_dict()
        save_text(ocr_cfg.result_path(roi_dir.name), json.dumps(fields, indent=2) + "\n")
        results[roi_dir.name] = fields
        logger.info("%s: song=%s score=%s", roi_dir.name, fields["song_id"], fields["score"])

    return results


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Run result-screen OCR on cropped field images")
    parser.add_argument("input", type=str, help="ROI directory or a directory of ROI directories")
    parser.add_argument("--config", type=str, default=None, help="Optional config overrides file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    overrides = None
    if args.config:
        try:
            overrides = load_config_overrides_from_file(args.config)
        except FileNotFoundError:
            print(f"Config overrides not found: {args.config}")
        except Exception as exc:
            print(f"Failed to parse overrides {args.config}: {exc}")

    summary = run_ocr(args.input, overrides)
    for name, fields in summary.items():
        print(
            f"{name}: song={fields['song_id']} ({fields['song_id_confidence']:.3f}) "
            f"rating_class={fields['rating_class']} score={fields['score']} "
            f"pure={fields['pure']} far={fields['far']} lost={fields['lost']} "
            f"max_recall={fields['max_recall']} clear_status={fields['clear_status']} "
            f"partner={fields['partner_id']} ({fields['partner_id_confidence']:.3f})"
        )
