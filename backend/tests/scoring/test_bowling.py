import os, sys
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from bowlscore.scoring import bowling
from bowlscore.scoring.bowling import Frame, InvalidFrameData


def _frames(*throws):
    return [Frame(frame_number=n, throws=t) for n, t in enumerate(throws, start=1)]


def _cumulative(frames):
    return [f.cumulative_score for f in bowling.calculate_game_score(frames)]


PERFECT = [[10]] * 9 + [[10, 10, 10]]
ALL_SPARES = [[5, 5]] * 9 + [[5, 5, 5]]
MIXED = [[10], [7, 3], [9, 0], [10], [0, 8], [8, 2], [0, 6], [10], [10], [10, 8, 1]]


def test_all_gutters():
    assert _cumulative(_frames(*[[0, 0]] * 10)) == [0] * 10


def test_perfect_game():
    assert _cumulative(_frames(*PERFECT)) == [30 * n for n in range(1, 11)]


def test_all_spares():
    scores = _cumulative(_frames(*ALL_SPARES))
    assert scores[8] == 135
    assert scores[-1] == 150
    assert scores == [15 * n for n in range(1, 11)]


def test_spare_then_open():
    assert _cumulative(_frames([5, 5], [3, 2])) == [13, 18]


def test_strike_strike_open():
    assert _cumulative(_frames([10], [10], [4, 2])) == [24, 40, 46]


def test_mixed_game():
    assert _cumulative(_frames(*MIXED)) == [20, 39, 48, 66, 74, 84, 90, 120, 148, 167]


def test_open_game_totals_sum_of_throws():
    throws = [[3, 4], [0, 9], [8, 1], [2, 2], [6, 3], [1, 1], [0, 0], [9, 0], [4, 5], [7, 2]]
    scores = _cumulative(_frames(*throws))
    assert scores[-1] == sum(sum(t) for t in throws)


@pytest.mark.parametrize("throws", [PERFECT, ALL_SPARES, MIXED], ids=["perfect", "spares", "mixed"])
def test_scores_never_decrease(throws):
    scores = _cumulative(_frames(*throws))
    assert all(b >= a for a, b in zip(scores, scores[1:]))


def test_input_order_is_not_assumed():
    frames = _frames(*MIXED)
    assert bowling.calculate_game_score(list(reversed(frames))) == bowling.calculate_game_score(frames)


def test_rescoring_is_idempotent():
    once = bowling.calculate_game_score(_frames(*MIXED))
    twice = bowling.calculate_game_score(once)
    assert once == twice


def test_existing_cumulative_score_is_ignored():
    frames = [Frame(frame_number=1, throws=(3, 4), cumulative_score=99)]
    assert _cumulative(frames) == [7]


def test_returns_new_frames():
    frames = _frames([10], [3, 4])
    scored = bowling.calculate_game_score(frames)
    assert scored[0] is not frames[0]
    assert [f.cumulative_score for f in frames] == [0, 0]


def test_strike_with_no_next_frame_scores_ten():
    assert _cumulative(_frames([10])) == [10]


def test_double_with_no_third_frame_credits_known_strike():
    # next frame missing: 0 bonus; frame after next missing: 10 bonus
    assert _cumulative(_frames([10], [10])) == [20, 30]


def test_double_followed_by_empty_frame():
    assert _cumulative(_frames([10], [10], [])) == [20, 30, 30]


def test_strike_with_single_following_throw_is_provisional():
    assert _cumulative(_frames([10], [7])) == [17, 24]


def test_spare_with_no_next_frame():
    assert _cumulative(_frames([6, 4])) == [10]


def test_spare_with_empty_next_frame():
    assert _cumulative(_frames([6, 4], [])) == [10, 10]


def test_strike_in_ninth_uses_first_two_tenth_balls():
    frames = _frames(*[[0, 0]] * 8, [10], [10, 3, 5])
    assert _cumulative(frames)[-2:] == [23, 41]


def test_partial_tenth_frame_is_scored():
    frames = _frames(*[[0, 0]] * 9, [10])
    assert _cumulative(frames)[-1] == 10


def test_gaps_in_frame_numbers_use_lookup_by_number():
    frames = [Frame(frame_number=1, throws=[10]), Frame(frame_number=3, throws=[4, 4])]
    assert _cumulative(frames) == [10, 18]


@pytest.mark.parametrize(
    "frames, msg",
    [
        ([Frame(frame_number=0, throws=[1])], "out of range"),
        ([Frame(frame_number=11, throws=[1])], "out of range"),
        ([Frame(frame_number=1, throws=[1]), Frame(frame_number=1, throws=[2])], "duplicate"),
        ([Frame(frame_number=3, throws=[10, 5])], "Strike frame should have only one throw"),
        ([Frame(frame_number=2, throws=[6, 6])], "cannot exceed 10"),
        ([Frame(frame_number=1, throws=[1, 2, 3])], "at most 2 throws"),
        ([Frame(frame_number=1, throws=[11])], "between 0 and 10"),
        ([Frame(frame_number=1, throws=[True])], "between 0 and 10"),
        ([Frame(frame_number=10, throws=[10, 5, 6])], "Only 5 pins are standing"),
        ([Frame(frame_number=10, throws=[3, 4, 1])], "no rolls left"),
    ],
    ids=[
        "frame-zero",
        "frame-eleven",
        "duplicate",
        "strike-with-second-ball",
        "too-many-pins",
        "too-many-throws",
        "pin-out-of-range",
        "boolean-pin",
        "tenth-fill-ball",
        "tenth-extra-ball",
    ],
)
def test_rejects_unscorable_frames(frames, msg):
    with pytest.raises(InvalidFrameData, match=msg):
        bowling.calculate_game_score(frames)


def test_rejection_names_the_frame():
    with pytest.raises(InvalidFrameData, match="frame 3"):
        bowling.calculate_game_score(_frames([1], [2], [10, 5]))


@pytest.mark.parametrize(
    "throws, frame_number, expected",
    [
        ([10], 1, True),
        ([3], 1, False),
        ([3, 4], 1, True),
        ([], 1, False),
        ([10], 10, False),
        ([3], 10, False),
        ([10, 10], 10, False),
        ([10, 10, 10], 10, True),
        ([5, 5], 10, False),
        ([5, 5, 3], 10, True),
        ([3, 4], 10, True),
    ],
)
def test_is_frame_complete(throws, frame_number, expected):
    assert bowling.is_frame_complete(throws, frame_number) is expected


def test_is_game_complete():
    assert bowling.is_game_complete(_frames(*PERFECT))
    assert not bowling.is_game_complete(_frames(*PERFECT[:9]))
    assert not bowling.is_game_complete(_frames(*PERFECT[:9], [10, 10]))
    assert not bowling.is_game_complete(bowling.empty_game())


def test_empty_game():
    frames = bowling.empty_game()
    assert [f.frame_number for f in frames] == list(range(1, 11))
    assert all(f.throws == () and f.cumulative_score == 0 for f in frames)


def test_frame_stats_mixed_game():
    stats = bowling.get_frame_stats(_frames(*MIXED))
    assert stats == bowling.FrameStats(strikes=5, spares=2, opens=3)


def test_frame_stats_perfect_game_counts_two_tenth_frame_strikes():
    assert bowling.get_frame_stats(_frames(*PERFECT)) == (11, 0, 0)


def test_frame_stats_all_spares():
    assert bowling.get_frame_stats(_frames(*ALL_SPARES)) == (0, 11, 0)


def test_frame_stats_tenth_strike_then_spare():
    stats = bowling.get_frame_stats(_frames(*[[0, 0]] * 9, [10, 4, 6]))
    assert stats == (1, 1, 9)


def test_frame_stats_open_tenth_frame_not_counted():
    stats = bowling.get_frame_stats(_frames(*[[3, 4]] * 10))
    assert stats.opens == 9


def test_frame_stats_skips_frames_without_throws():
    assert bowling.get_frame_stats(bowling.empty_game()) == (0, 0, 0)


@pytest.mark.parametrize(
    "frame_number, index, throws, expected",
    [
        (1, 0, [10], "X"),
        (1, 1, [7, 3], "/"),
        (1, 0, [0, 5], "-"),
        (1, 1, [4, 5], "5"),
        (1, 1, [4], "-"),
        (1, 1, [0, 10], "/"),
        (10, 2, [10, 10, 10], "X"),
        (10, 1, [10, 3, 7], "3"),
        (10, 2, [10, 3, 7], "/"),
        (10, 1, [5, 5, 5], "/"),
        (10, 2, [5, 5, 5], "5"),
        (10, 2, [0, 10, 10], "X"),
        (10, 1, [0, 10, 10], "/"),
        (10, 1, [10, 0, 10], "-"),
        (10, 2, [10, 0, 10], "/"),
    ],
)
def test_throw_display(frame_number, index, throws, expected):
    assert bowling.throw_display(frame_number, index, throws) == expected


def test_summary_complete_game():
    result = bowling.summary(_frames(*MIXED))
    assert result["total"] == 167
    assert result["scores"] == [20, 19, 9, 18, 8, 10, 6, 30, 28, 19]
    assert result["isComplete"] is True
    assert result["stats"] == {"strikes": 5, "spares": 2, "opens": 3}


def test_summary_in_progress_game():
    result = bowling.summary(_frames([10], [3]))
    assert result["total"] == 16
    assert result["scores"] == [13, 3]
    assert result["isComplete"] is False
