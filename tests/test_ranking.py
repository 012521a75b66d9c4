"""Unit tests for totals, ranks and monthly breakdowns."""

import pytest

from footy.models import PlayerRecord
from footy.ranking import (
    calculate_all_time_total,
    calculate_monthly_games,
    calculate_ranks,
    calculate_total,
    dense_rank,
    get_best_season,
    get_best_worst_months,
    get_future_projection,
    get_percentile,
    get_rank_change,
    get_rank_tier,
    process_player_data,
)


def march_dates(count, start=1):
    """Distinct March dates."""
    return tuple(f'{day:02d}/03' for day in range(start, start + count))


def make_player(name, current=(), prior=()):
    return PlayerRecord(name=name, dates_by_year={2025: tuple(current), 2024: tuple(prior)})


class TestTotals:
    """Tests for raw game counts."""

    def test_total_counts_every_entry(self):
        """Malformed dates still count toward the total."""
        assert calculate_total(['01/03', 'garbage', '10/13']) == 3

    def test_total_of_missing_dates(self):
        assert calculate_total(None) == 0
        assert calculate_total([]) == 0

    def test_all_time_total(self):
        assert calculate_all_time_total(['01/01', '02/01'], ['01/03']) == 3


class TestMonthlyGames:
    """Tests for monthly buckets."""

    def test_all_months_present(self):
        monthly = calculate_monthly_games([])
        assert len(monthly) == 12
        assert all(count == 0 for count in monthly.values())

    def test_counts_by_month(self):
        monthly = calculate_monthly_games(['01/03', '15/03', '02/04', '31/12'])
        assert monthly['march'] == 2
        assert monthly['april'] == 1
        assert monthly['december'] == 1

    def test_malformed_month_skipped_but_counted_in_total(self):
        """Unreadable months are not bucketed; total still includes them."""
        dates = ['01/03', '15/03', '02/04', 'bad', '10/13']
        monthly = calculate_monthly_games(dates)
        assert sum(monthly.values()) == 3
        assert calculate_total(dates) == 5

    def test_unpadded_month_not_bucketed(self):
        """Only "01".."12" name a month; other spellings still count in the total."""
        dates = ['05/4', '05/004', '05/04']
        monthly = calculate_monthly_games(dates)
        assert monthly['april'] == 1
        assert sum(monthly.values()) == 1
        assert calculate_total(dates) == 3

    def test_sum_matches_total_for_well_formed_dates(self):
        dates = march_dates(10) + ('01/06', '02/06')
        assert sum(calculate_monthly_games(dates).values()) == calculate_total(dates)


class TestDenseRank:
    """Tests for competition ranking."""

    def test_ties_share_rank(self):
        assert dense_rank([10, 10, 5]) == [1, 1, 3]

    def test_all_distinct(self):
        assert dense_rank([9, 7, 4, 1]) == [1, 2, 3, 4]

    def test_multiple_tie_groups(self):
        assert dense_rank([8, 8, 8, 3, 3, 1]) == [1, 1, 1, 4, 4, 6]

    def test_empty(self):
        assert dense_rank([]) == []


class TestCalculateRanks:
    """Tests for per-season ranks."""

    def test_scenario_two_tied_leaders(self):
        players = [
            make_player('A', march_dates(10)),
            make_player('B', march_dates(10)),
            make_player('C', march_dates(5)),
        ]
        ranks = calculate_ranks(players, 2025, 2024)
        assert ranks['A'][2025] == 1
        assert ranks['B'][2025] == 1
        assert ranks['C'][2025] == 3

    def test_prior_year_only_ranks_participants(self):
        players = [
            make_player('A', march_dates(10)),
            make_player('B', march_dates(4), prior=march_dates(3)),
            make_player('C', march_dates(2), prior=march_dates(7)),
        ]
        ranks = calculate_ranks(players, 2025, 2024)
        assert ranks['A'][2024] == 0
        assert ranks['C'][2024] == 1
        assert ranks['B'][2024] == 2

    def test_zero_games_gets_sentinel(self):
        players = [make_player('A', march_dates(3)), make_player('B', prior=march_dates(2))]
        ranks = calculate_ranks(players, 2025, 2024)
        assert ranks['B'][2025] == 0
        assert ranks['A'][2024] == 0

    def test_empty_roster(self):
        assert calculate_ranks([], 2025, 2024) == {}

    def test_non_list_rejected(self):
        with pytest.raises(TypeError, match='players must be a list'):
            calculate_ranks('not a roster')


class TestProcessPlayerData:
    """Tests for full player enrichment."""

    def test_ordered_by_current_total(self):
        players = [
            make_player('Low', march_dates(2)),
            make_player('High', march_dates(8)),
            make_player('Mid', march_dates(5)),
        ]
        processed = process_player_data(players, 2025, 2024)
        assert [p.name for p in processed] == ['High', 'Mid', 'Low']
        assert [p.rank[2025] for p in processed] == [1, 2, 3]

    def test_enriched_fields(self):
        player = make_player('A', ['01/03', '08/03', 'bad'], prior=['06/01', '13/01'])
        processed = process_player_data([player], 2025, 2024)[0]
        assert processed.total == {2024: 2, 2025: 3}
        assert processed.total_all_time == 5
        assert processed.monthly_breakdown[2025]['march'] == 2
        assert processed.monthly_breakdown[2024]['january'] == 2
        assert processed.rank == {2024: 1, 2025: 1}

    def test_rank_sentinel_iff_no_prior_games(self):
        players = [
            make_player('A', march_dates(4), prior=march_dates(2)),
            make_player('B', march_dates(3)),
        ]
        for player in process_player_data(players, 2025, 2024):
            assert (player.rank[2024] == 0) == (player.total[2024] == 0)

    def test_streak_attached(self):
        # 01/03, 08/03 and 15/03 2025 are Saturdays
        player = make_player('A', ['01/03', '08/03', '15/03'])
        processed = process_player_data([player], 2025, 2024)[0]
        assert processed.longest_streak == 3
        assert processed.streak_start == '01/03'
        assert processed.streak_end == '15/03'

    def test_recompute_is_identical(self):
        players = [make_player('A', march_dates(6), prior=march_dates(2)), make_player('B', march_dates(3, 4))]
        assert process_player_data(players, 2025, 2024) == process_player_data(players, 2025, 2024)


class TestRankHelpers:
    """Tests for tiers, rank change and percentile."""

    @pytest.mark.parametrize('rank,tier', [
        (1, '1'), (2, '2-5'), (5, '2-5'), (6, '6-10'), (20, '11-20'), (30, '21-30'), (31, '31+'), (99, '31+'),
    ])
    def test_rank_tiers(self, rank, tier):
        assert get_rank_tier(rank) == tier

    def test_rank_tier_sentinel(self):
        assert get_rank_tier(0) is None

    def test_newcomer(self):
        change = get_rank_change(0, 5)
        assert change.direction == 'new'
        assert change.value == 0

    def test_moved_up(self):
        change = get_rank_change(5, 2, prior_total=10)
        assert change.direction == 'up'
        assert change.value == 3

    def test_moved_down(self):
        change = get_rank_change(2, 5, prior_total=10)
        assert change.direction == 'down'
        assert change.value == 3

    def test_same_rank(self):
        assert get_rank_change(3, 3, prior_total=4).direction == 'same'

    def test_percentile(self):
        assert get_percentile(1, 10) == 90
        assert get_percentile(10, 10) == 0
        assert get_percentile(1, 8) == 88  # 87.5 rounds up

    def test_percentile_empty_roster(self):
        assert get_percentile(1, 0) == 0

    def test_future_projection(self):
        assert get_future_projection(12) == 120


class TestBestWorst:
    """Tests for best/worst months and seasons."""

    def test_best_and_worst_months(self):
        monthly = calculate_monthly_games(march_dates(5) + ('01/04', '02/04', '03/04', '01/05', '02/05', '03/05'))
        result = get_best_worst_months(monthly)
        assert result.best == [('march', 5), ('april', 3), ('may', 3)]
        # Nine months tie at zero; the last three in calendar order are kept
        assert result.worst == [('october', 0), ('november', 0), ('december', 0)]

    def test_worst_months_without_zeros(self):
        monthly = {month: 2 for month in calculate_monthly_games([])}
        monthly['june'] = 1
        result = get_best_worst_months(monthly)
        assert result.worst == [('june', 1)]

    def test_no_games_has_no_best(self):
        assert get_best_worst_months(calculate_monthly_games([])).best == []

    def test_best_season(self):
        monthly = calculate_monthly_games(march_dates(5) + ('01/04', '01/07'))
        result = get_best_season(monthly)
        assert result.best == ('spring', 6)
        assert result.worst == ('autumn', 0)
