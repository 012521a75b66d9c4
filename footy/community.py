"""League-wide season aggregates from the community schedule."""

import logging
from typing import Dict, Mapping, Sequence

from .constants import CURRENT_YEAR, PRIOR_YEAR
from .models import CommunityGameRecord, CommunityStats, YearStats
from .utils import require_sequence, round_half_up

logger = logging.getLogger('footy.community')


def calculate_year_stats(games: Sequence[CommunityGameRecord]) -> YearStats:
    """
    Aggregate one season of scheduled games.

    Args:
        games: Every scheduled game of the season, played or cancelled

    Returns:
        YearStats; an empty season gives all zeros
    """
    require_sequence(games, 'games')

    played = [g for g in games if g.played]
    cancelled = len(games) - len(played)

    games_per_month: Dict[str, int] = {}
    fields: Dict[str, int] = {}
    for game in played:
        games_per_month[game.month] = games_per_month.get(game.month, 0) + 1
        if game.field:
            fields[game.field] = fields.get(game.field, 0) + 1

    total_players = sum(g.players or 0 for g in played)
    avg_players = round_half_up(total_players / len(played), 1) if played else 0
    success_rate = round_half_up(len(played) / len(games) * 100) if games else 0

    return YearStats(
        games_played=len(played),
        games_cancelled=cancelled,
        total_attempted=len(games),
        avg_players=avg_players,
        success_rate=success_rate,
        games_per_month=games_per_month,
        fields=fields,
    )


def calculate_community_stats(
    games_by_year: Mapping[int, Sequence[CommunityGameRecord]],
    current_year: int = CURRENT_YEAR,
    prior_year: int = PRIOR_YEAR,
) -> CommunityStats:
    """
    Per-season aggregates plus season-over-season deltas.

    Args:
        games_by_year: Scheduled games keyed by season year
        current_year: Season being summarized
        prior_year: Comparison season

    Returns:
        CommunityStats covering every season present plus the two compared
        seasons (missing seasons aggregate as empty)
    """
    if not isinstance(games_by_year, Mapping):
        raise TypeError(f'games_by_year must be a mapping, got {type(games_by_year).__name__}')

    years = {year: calculate_year_stats(list(games)) for year, games in games_by_year.items()}
    for year in (prior_year, current_year):
        years.setdefault(year, YearStats())

    current = years[current_year]
    prior = years[prior_year]

    stats = CommunityStats(
        current_year=current_year,
        prior_year=prior_year,
        years=dict(sorted(years.items())),
        games_change=current.games_played - prior.games_played,
        avg_players_change=round_half_up(current.avg_players - prior.avg_players, 1),
        success_rate_change=current.success_rate - prior.success_rate,
        total_games_all_time=sum(y.games_played for y in years.values()),
    )
    logger.debug(
        f'Community {current_year}: {current.games_played} played, '
        f'{current.games_cancelled} cancelled ({current.success_rate}% success)'
    )
    return stats
