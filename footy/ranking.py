"""Totals, dense ranks and monthly breakdowns for the player roster."""

import logging
from typing import Dict, List, Optional, Sequence

from .constants import (
    ANCHOR_WEEKDAY,
    CURRENT_YEAR,
    MONTH_KEYS,
    PRIOR_YEAR,
    RANK_TIERS,
    SEASON_MONTHS,
)
from .models import (
    BestWorstMonths,
    BestWorstSeason,
    PlayerRecord,
    ProcessedPlayer,
    RankChange,
    parse_month_key,
)
from .streaks import calculate_longest_streak, get_all_game_dates
from .utils import require_sequence, round_half_up

logger = logging.getLogger('footy.ranking')


def calculate_total(dates: Optional[Sequence[str]]) -> int:
    """Raw number of logged games, malformed entries included."""
    return len(dates) if dates else 0


def calculate_all_time_total(prior_dates: Optional[Sequence[str]], current_dates: Optional[Sequence[str]]) -> int:
    return calculate_total(prior_dates) + calculate_total(current_dates)


def calculate_monthly_games(dates: Optional[Sequence[str]]) -> Dict[str, int]:
    """
    Count games per month.

    All 12 month keys are always present. Dates whose month segment does
    not name a month are left out here but still count in calculate_total.
    """
    monthly = {month: 0 for month in MONTH_KEYS}
    for text in dates or ():
        month = parse_month_key(text)
        if month:
            monthly[month] += 1
    return monthly


def dense_rank(sorted_totals: Sequence[int]) -> List[int]:
    """
    Competition ranks for totals already sorted in descending order.

    Equal totals share a rank; the next lower total is ranked by its
    1-based position, so [10, 10, 5] ranks as [1, 1, 3].
    """
    ranks = []
    current_rank = 1
    previous: Optional[int] = None
    for index, total in enumerate(sorted_totals):
        if previous is not None and total < previous:
            current_rank = index + 1
        previous = total
        ranks.append(current_rank)
    return ranks


def rank_players_for_year(players: Sequence[PlayerRecord], year: int) -> Dict[str, int]:
    """
    Rank the players who played in a season.

    Players with no games that season are absent from the result; callers
    treat a missing entry as the 0 sentinel.
    """
    participants = [(p.name, calculate_total(p.dates(year))) for p in players]
    participants = [entry for entry in participants if entry[1] > 0]
    participants.sort(key=lambda entry: entry[1], reverse=True)
    ranks = dense_rank([total for _name, total in participants])
    return {name: rank for (name, _total), rank in zip(participants, ranks)}


def calculate_ranks(
    players: Sequence[PlayerRecord],
    current_year: int = CURRENT_YEAR,
    prior_year: int = PRIOR_YEAR,
) -> Dict[str, Dict[int, int]]:
    """
    Ranks for both tracked seasons.

    Returns:
        Dict of player name -> {year: rank}, where rank 0 means the player
        did not play that year
    """
    require_sequence(players, 'players')

    current = rank_players_for_year(players, current_year)
    prior = rank_players_for_year(players, prior_year)
    return {
        p.name: {prior_year: prior.get(p.name, 0), current_year: current.get(p.name, 0)}
        for p in players
    }


def process_player_data(
    players: Sequence[PlayerRecord],
    current_year: int = CURRENT_YEAR,
    prior_year: int = PRIOR_YEAR,
    anchor_weekday: int = ANCHOR_WEEKDAY,
) -> List[ProcessedPlayer]:
    """
    Enrich raw records with totals, ranks, monthly breakdowns and streaks.

    Args:
        players: Raw player records
        current_year: Season being summarized
        prior_year: Comparison season
        anchor_weekday: Weekly game day used for streaks (Monday=0)

    Returns:
        ProcessedPlayer list ordered by current-season total, highest first
        (ties keep input order)
    """
    require_sequence(players, 'players')

    all_game_dates = get_all_game_dates(players, current_year)
    ranks = calculate_ranks(players, current_year, prior_year)

    ordered = sorted(players, key=lambda p: calculate_total(p.dates(current_year)), reverse=True)

    processed = []
    for player in ordered:
        current_dates = player.dates(current_year)
        prior_dates = player.dates(prior_year)
        streak = calculate_longest_streak(list(current_dates), all_game_dates, current_year, anchor_weekday)
        current_monthly = calculate_monthly_games(current_dates)

        unreadable = calculate_total(current_dates) - sum(current_monthly.values())
        if unreadable:
            logger.warning(f'{player.name}: {unreadable} date(s) in {current_year} have no readable month')

        processed.append(ProcessedPlayer(
            name=player.name,
            dates_by_year=dict(player.dates_by_year),
            total={
                prior_year: calculate_total(prior_dates),
                current_year: calculate_total(current_dates),
            },
            total_all_time=calculate_all_time_total(prior_dates, current_dates),
            rank=ranks[player.name],
            monthly_breakdown={
                prior_year: calculate_monthly_games(prior_dates),
                current_year: current_monthly,
            },
            longest_streak=streak.count,
            streak_dates=streak.dates,
            streak_start=streak.start_date,
            streak_end=streak.end_date,
        ))

    logger.debug(
        f'Processed {len(processed)} players for {current_year} '
        f'({len(all_game_dates)} distinct game dates)'
    )
    return processed


def get_rank_tier(rank: int) -> Optional[str]:
    """
    Tier key for a rank ('1', '2-5', ..., '31+').

    Returns None for the 0 sentinel.
    """
    if rank <= 0:
        return None
    for low, high, key in RANK_TIERS:
        if rank >= low and (high is None or rank <= high):
            return key
    return RANK_TIERS[-1][2]


def get_rank_change(prior_rank: int, current_rank: int, prior_total: int = 0) -> RankChange:
    """
    Movement between seasons.

    A prior rank of 0 (or no prior games) is a newcomer, not a move up
    from rank 0.
    """
    if prior_rank == 0 or prior_total == 0:
        return RankChange(value=0, direction='new')

    diff = prior_rank - current_rank
    if diff > 0:
        direction = 'up'
    elif diff < 0:
        direction = 'down'
    else:
        direction = 'same'
    return RankChange(value=abs(diff), direction=direction)


def get_best_worst_months(monthly: Dict[str, int]) -> BestWorstMonths:
    """
    Top and bottom months by games played.

    Worst months are the entries at zero or at the minimum count, keeping
    the last three in sorted order. With many months tied at the minimum
    this picks the latest of them in calendar order.
    """
    ordered = sorted(monthly.items(), key=lambda entry: entry[1], reverse=True)
    if not ordered:
        return BestWorstMonths()

    lowest = ordered[-1][1]
    best = [entry for entry in ordered if entry[1] > 0][:3]
    worst = [entry for entry in ordered if entry[1] == 0 or entry[1] == lowest][-3:]
    return BestWorstMonths(best=best, worst=worst)


def get_best_season(monthly: Dict[str, int]) -> BestWorstSeason:
    seasons = {
        season: sum(monthly.get(month, 0) for month in months)
        for season, months in SEASON_MONTHS.items()
    }
    ordered = sorted(seasons.items(), key=lambda entry: entry[1], reverse=True)
    return BestWorstSeason(best=ordered[0], worst=ordered[-1])


def get_percentile(rank: int, total_players: int) -> int:
    """Share of the roster ranked below the player, as a whole percent."""
    if total_players <= 0:
        return 0
    return round_half_up((total_players - rank) / total_players * 100)


def get_future_projection(current_total: int) -> int:
    """Games in ten years at this season's pace."""
    return current_total * 10
