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

"""Result-screen OCR: judgement counts, score, badges and identity lookup."""

from .config import (
    DigitConfig,
    RectRepairConfig,
    ResultOcrConfig,
    load_config_overrides_from_file,
    load_ocr_config,
)
from .domain import ClearStatus, ClearType, Modifier, PlayResult, RatingClass, clear_status_to_clear_type
from .identity import ImagePhashDatabase, PhashIndex, hash_confidence, preprocess_partner_icon
from .pipeline import DeviceOcr, DeviceOcrResult, vote_active_variant
from .recognition import DigitRecognizer
from .rois import DirectoryRoiExtractor, DirectoryRoiMasker, RoiExtractor, RoiMasker

__all__ = [
    "DigitConfig",
    "RectRepairConfig",
    "ResultOcrConfig",
    "load_config_overrides_from_file",
    "load_ocr_config",
    "ClearStatus",
    "ClearType",
    "Modifier",
    "PlayResult",
    "RatingClass",
    "clear_status_to_clear_type",
    "ImagePhashDatabase",
    "PhashIndex",
    "hash_confidence",
    "preprocess_partner_icon",
    "DeviceOcr",
    "DeviceOcrResult",
    "vote_active_variant",
    "DigitRecognizer",
    "DirectoryRoiExtractor",
    "DirectoryRoiMasker",
    "RoiExtractor",
    "RoiMasker",
]
