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

"""Domain knowledge for play results: rating classes, clear states, modifiers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class RatingClass(IntEnum):
    PAST = 0
    PRESENT = 1
    FUTURE = 2
    BEYOND = 3


class ClearStatus(IntEnum):
    """Clear badge shown on the result screen."""

    TRACK_LOST = 0
    TRACK_COMPLETE = 1
    FULL_RECALL = 2
    PURE_MEMORY = 3


class ClearType(IntEnum):
    """Clear type stored with a play result."""

    TRACK_LOST = 0
    NORMAL_CLEAR = 1
    FULL_RECALL = 2
    PURE_MEMORY = 3
    EASY_CLEAR = 4
    HARD_CLEAR = 5


class Modifier(IntEnum):
    NORMAL = 0
    EASY = 1
    HARD = 2


_TRACK_COMPLETE_BY_MODIFIER = {
    Modifier.NORMAL: ClearType.NORMAL_CLEAR,
    Modifier.EASY: ClearType.EASY_CLEAR,
    Modifier.HARD: ClearType.HARD_CLEAR,
}


def clear_status_to_clear_type(clear_status: int, modifier: int) -> ClearType:
    """Resolve the stored clear type from the badge and the partner's modifier.

    Only ``TRACK COMPLETE`` depends on the modifier; the remaining badges
    translate one to one.
    """

    status = ClearStatus(clear_status)
    if status is ClearStatus.TRACK_COMPLETE:
        return _TRACK_COMPLETE_BY_MODIFIER[Modifier(modifier)]
    return ClearType(int(status))


@dataclass(frozen=True)
class PlayResult:
    song_id: str
    rating_class: int
    score: int
    pure: Optional[int] = None
    far: Optional[int] = None
    lost: Optional[int] = None
    date: Optional[int] = None  # epoch milliseconds
    max_recall: Optional[int] = None
    modifier: Optional[Modifier] = None
    clear_type: Optional[ClearType] = None
    comment: Optional[str] = None
