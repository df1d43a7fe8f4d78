import pytest

from resultocr.domain import ClearStatus, ClearType, Modifier, PlayResult, RatingClass, clear_status_to_clear_type


@pytest.mark.parametrize(
    "modifier, expected",
    [
        (Modifier.NORMAL, ClearType.NORMAL_CLEAR),
        (Modifier.EASY, ClearType.EASY_CLEAR),
        (Modifier.HARD, ClearType.HARD_CLEAR),
    ],
)
def test_track_complete_depends_on_modifier(modifier, expected):
    assert clear_status_to_clear_type(ClearStatus.TRACK_COMPLETE, modifier) is expected


@pytest.mark.parametrize(
    "status, expected",
    [
        (ClearStatus.TRACK_LOST, ClearType.TRACK_LOST),
        (ClearStatus.FULL_RECALL, ClearType.FULL_RECALL),
        (ClearStatus.PURE_MEMORY, ClearType.PURE_MEMORY),
    ],
)
@pytest.mark.parametrize("modifier", list(Modifier))
def test_other_badges_ignore_modifier(status, expected, modifier):
    assert clear_status_to_clear_type(status, modifier) is expected


def test_plain_ints_are_accepted():
    assert clear_status_to_clear_type(1, 1) is ClearType.EASY_CLEAR


def test_unknown_values_raise():
    with pytest.raises(ValueError):
        clear_status_to_clear_type(7, Modifier.NORMAL)
    with pytest.raises(ValueError):
        clear_status_to_clear_type(ClearStatus.TRACK_COMPLETE, 9)


def test_rating_class_indices_follow_display_order():
    assert [member.value for member in RatingClass] == [0, 1, 2, 3]
    assert RatingClass(3) is RatingClass.BEYOND


def test_play_result_defaults():
    play = PlayResult(song_id="tempestissimo", rating_class=RatingClass.BEYOND, score=9_900_000)

    assert play.pure is None and play.clear_type is None and play.modifier is None
