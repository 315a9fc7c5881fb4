import pytest

from blockfall.scoring import GameStats, Scoring


@pytest.mark.parametrize("lines, expected", [(1, 100), (2, 300), (3, 500), (4, 800)])
def test_base_awards(lines, expected):
    scoring = Scoring()
    award = scoring.register_line_clear(lines)
    assert award is not None
    assert award.awarded == expected
    assert scoring.snapshot() == GameStats(score=expected, lines_cleared=lines, level=1, combo=1, max_combo=1)


def test_combo_bonus_and_reset():
    scoring = Scoring()
    scoring.register_line_clear(1)
    second = scoring.register_line_clear(1)
    third = scoring.register_line_clear(2)
    assert second is not None and second.awarded == 150
    assert third is not None and third.awarded == 400

    assert scoring.register_line_clear(0) is None
    stats = scoring.snapshot()
    assert stats.combo == 0
    assert stats.max_combo == 3
    assert stats.score == 650


def test_special_and_boost_multipliers():
    scoring = Scoring()
    scoring.register_line_clear(1)
    award = scoring.register_line_clear(2, special_multiplier=True, score_multiplier=2)
    # (300 * 2 + 50) * 2
    assert award is not None and award.awarded == 1300
    assert award.total_score == 1400


def test_level_follows_total_lines():
    scoring = Scoring()
    for _ in range(3):
        scoring.register_line_clear(4)
    assert scoring.level == 2
    assert scoring.snapshot().lines_cleared == 12


def test_bonus_points_ignore_non_positive_values():
    scoring = Scoring()
    scoring.add_soft_drop_points(50)
    scoring.add_hard_drop_points(100)
    scoring.add_bonus(0)
    scoring.add_bonus(-20)
    assert scoring.score == 150
    scoring.reset()
    assert scoring.snapshot() == GameStats()
