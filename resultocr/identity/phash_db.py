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

"""Perceptual-hash nearest-neighbour lookup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple, Union

import imagehash
import numpy as np
from PIL import Image

HashLike = Union[imagehash.ImageHash, np.ndarray, str]


def hash_bits(value: HashLike) -> np.ndarray:
    """Flatten an ``ImageHash``, hex string or boolean array into a bit vector."""

    if isinstance(value, str):
        value = imagehash.hex_to_hash(value)
    if isinstance(value, imagehash.ImageHash):
        value = value.hash
    return np.asarray(value, dtype=bool).reshape(-1)


def hash_confidence(distance: int, hash_size: int) -> float:
    """Map a Hamming distance onto ``[.., 1.0]``; ``1.0`` means identical hashes."""

    return 1 - distance / float(hash_size * hash_size)


@dataclass(frozen=True)
class PhashIndex:
    """Ordered, read-only identifier -> hash table."""

    ids: Tuple[str, ...]
    hashes: np.ndarray

    def __post_init__(self) -> None:
        if self.hashes.ndim != 2 or self.hashes.shape[0] != len(self.ids):
            raise ValueError(f"Hash matrix shape {self.hashes.shape} does not match {len(self.ids)} ids")
        hashes = np.array(self.hashes, dtype=bool)
        hashes.setflags(write=False)
        object.__setattr__(self, "hashes", hashes)

    @classmethod
    def from_mapping(cls, entries: Mapping[str, HashLike], bit_count: int) -> "PhashIndex":
        ids = tuple(entries.keys())
        rows = [hash_bits(value) for value in entries.values()]
        for identifier, row in zip(ids, rows):
            if row.size != bit_count:
                raise ValueError(f"Hash for {identifier!r} has {row.size} bits, expected {bit_count}")
        hashes = np.vstack(rows) if rows else np.empty((0, bit_count), dtype=bool)
        return cls(ids=ids, hashes=hashes)

    def __len__(self) -> int:
        return len(self.ids)

    def lookup(self, query: np.ndarray) -> Tuple[str, int]:
        """Return the closest identifier and its raw Hamming distance.

        Ties go to the entry that appears first in the index.
        """
        if not self.ids:
            raise ValueError("Cannot look up a hash in an empty index")
        bits = np.asarray(query, dtype=bool).reshape(-1)
        if bits.size != self.hashes.shape[1]:
            raise ValueError(f"Query hash has {bits.size} bits, index expects {self.hashes.shape[1]}")
        distances = np.count_nonzero(self.hashes != bits, axis=1)
        best = int(np.argmin(distances))
        return self.ids[best], int(distances[best])


class ImagePhashDatabase:
    """Jacket and partner-icon hash indexes sharing one hash geometry."""

    def __init__(
        self,
        hash_size: int,
        high_freq_factor: int,
        jackets: PhashIndex,
        partner_icons: PhashIndex,
    ) -> None:
        self.hash_size = int(hash_size)
        self.high_freq_factor = int(high_freq_factor)
        bit_count = self.hash_size * self.hash_size
        for name, index in (("jackets", jackets), ("partner_icons", partner_icons)):
            if len(index) and index.hashes.shape[1] != bit_count:
                raise ValueError(f"{name} index holds {index.hashes.shape[1]}-bit hashes, expected {bit_count}")
        self.jackets = jackets
        self.partner_icons = partner_icons

    @classmethod
    def from_hashes(
        cls,
        hash_size: int,
        high_freq_factor: int,
        jackets: Mapping[str, HashLike],
        partner_icons: Mapping[str, HashLike],
    ) -> "ImagePhashDatabase":
        bit_count = int(hash_size) * int(hash_size)
        return cls(
            hash_size,
            high_freq_factor,
            PhashIndex.from_mapping(jackets, bit_count),
            PhashIndex.from_mapping(partner_icons, bit_count),
        )

    def calculate_phash(self, img_gray: np.ndarray) -> np.ndarray:
        if img_gray.ndim != 2:
            raise ValueError("Expected single-channel grayscale input")
        image = Image.fromarray(np.ascontiguousarray(img_gray, dtype=np.uint8))
        return hash_bits(imagehash.phash(image, hash_size=self.hash_size, highfreq_factor=self.high_freq_factor))

    def lookup_jacket(self, img_gray: np.ndarray) -> Tuple[str, int]:
        return self.jackets.lookup(self.calculate_phash(img_gray))

    def lookup_partner_icon(self, img_gray: np.ndarray) -> Tuple[str, int]:
        return self.partner_icons.lookup(self.calculate_phash(img_gray))

    def confidence(self, distance: int) -> float:
        return hash_confidence(distance, self.hash_size)
