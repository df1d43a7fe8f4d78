import imagehash
import numpy as np
import pytest
from PIL import Image

from resultocr.identity import ImagePhashDatabase, PhashIndex, hash_confidence


def _noise(seed: int) -> np.ndarray:
    return np.random.default_rng(seed).integers(0, 256, size=(64, 64), dtype=np.uint8)


def test_lookup_of_indexed_image_is_exact():
    first, second = _noise(1), _noise(2)
    db = ImagePhashDatabase.from_hashes(
        hash_size=8,
        high_freq_factor=4,
        jackets={
            "first": str(imagehash.phash(Image.fromarray(first), hash_size=8, highfreq_factor=4)),
            "second": str(imagehash.phash(Image.fromarray(second), hash_size=8, highfreq_factor=4)),
        },
        partner_icons={},
    )

    song_id, distance = db.lookup_jacket(second)

    assert (song_id, distance) == ("second", 0)
    assert db.confidence(distance) == 1.0


def test_distance_counts_differing_bits():
    base = np.zeros(64, dtype=bool)
    index = PhashIndex.from_mapping({"only": base}, 64)
    query = base.copy()
    query[[0, 9, 33, 63]] = True

    identifier, distance = index.lookup(query)

    assert identifier == "only"
    assert distance == 4
    assert hash_confidence(distance, 8) == pytest.approx(0.9375)


def test_ties_go_to_first_entry():
    first = np.zeros(64, dtype=bool)
    first[[0, 1]] = True
    second = np.zeros(64, dtype=bool)
    second[[2, 3]] = True
    index = PhashIndex.from_mapping({"first": first, "second": second}, 64)

    assert index.lookup(np.zeros(64, dtype=bool)) == ("first", 2)


def test_hex_hashes_are_accepted():
    index = PhashIndex.from_mapping({"white": "ffffffffffffffff", "black": "0000000000000000"}, 64)

    assert index.lookup(np.ones(64, dtype=bool)) == ("white", 0)
    assert len(index) == 2


def test_empty_index_raises():
    db = ImagePhashDatabase.from_hashes(8, 4, jackets={"only": "0000000000000000"}, partner_icons={})

    with pytest.raises(ValueError):
        db.lookup_partner_icon(_noise(3))


def test_mismatched_widths_are_rejected():
    with pytest.raises(ValueError):
        PhashIndex.from_mapping({"short": np.zeros(16, dtype=bool)}, 64)

    index = PhashIndex.from_mapping({"only": np.zeros(64, dtype=bool)}, 64)
    with pytest.raises(ValueError):
        index.lookup(np.zeros(16, dtype=bool))


def test_index_is_read_only():
    index = PhashIndex.from_mapping({"only": np.zeros(64, dtype=bool)}, 64)

    with pytest.raises(ValueError):
        index.hashes[0, 0] = True


def test_confidence_decreases_with_distance():
    values = [hash_confidence(d, 16) for d in range(0, 257, 32)]

    assert values[0] == 1.0
    assert values[-1] == 0.0
    assert all(a > b for a, b in zip(values, values[1:]))


def test_calculate_phash_requires_grayscale():
    db = ImagePhashDatabase.from_hashes(8, 4, jackets={}, partner_icons={})

    with pytest.raises(ValueError):
        db.calculate_phash(np.zeros((8, 8, 3), dtype=np.uint8))


def test_confidence_is_not_clamped():
    assert hash_confidence(80, 8) == pytest.approx(-0.25)
