"""Player-versus-community statistics.

Measures that need both a player's dates and the community schedule:
attendance rate, perfect months, consistency and clutch appearances.
"""

from typing import Dict, List, Sequence

from .constants import CURRENT_YEAR, MONTH_LABELS
from .models import (
    ClutchData,
    CommunityGameRecord,
    ConsistencyData,
    PerfectMonth,
    parse_game_date,
    parse_month_key,
)
from .utils import require_sequence, round_half_up


def get_played_game_dates(games: Sequence[CommunityGameRecord]) -> List[str]:
    """Dates of played games in calendar order."""
    def calendar_key(text):
        game_date = parse_game_date(text)
        return game_date.sort_key if game_date else (13, 0)

    return sorted((g.date for g in games if g.played), key=calendar_key)


def calculate_attendance_rate(player_dates: Sequence[str], games: Sequence[CommunityGameRecord]) -> int:
    """Player's games as a percent of played community games."""
    played = [g for g in games if g.played]
    if not played:
        return 0
    return round_half_up(len(player_dates) / len(played) * 100)


def calculate_perfect_months(
    player_dates: Sequence[str],
    games: Sequence[CommunityGameRecord],
) -> List[PerfectMonth]:
    """Months, in calendar order, in which the player attended every played game."""
    require_sequence(games, 'games')

    attended = set(player_dates)
    by_month: Dict[str, List[CommunityGameRecord]] = {}
    for game in games:
        if game.played:
            by_month.setdefault(game.month, []).append(game)

    perfect = []
    for month in MONTH_LABELS:
        month_games = by_month.get(month, [])
        if not month_games:
            continue
        played_in_month = sum(1 for g in month_games if g.date in attended)
        if played_in_month == len(month_games):
            perfect.append(PerfectMonth(month=month, games_played=played_in_month, total_games=len(month_games)))
    return perfect


def calculate_consistency(
    player_dates: Sequence[str],
    games: Sequence[CommunityGameRecord],
    year: int = CURRENT_YEAR,
) -> ConsistencyData:
    """
    Score (0-100) how regularly a player turns up.

    Combines the variance of the player's monthly attendance rate (60%)
    with the average number of community games skipped between two
    appearances (40%). Fewer than 3 games is rated irregular outright.
    """
    require_sequence(player_dates, 'player_dates')
    require_sequence(games, 'games')

    if len(player_dates) < 3:
        return ConsistencyData()

    attended = set(player_dates)
    played_dates = get_played_game_dates(games)

    gaps = []
    last_index = None
    for index, game_date in enumerate(played_dates):
        if game_date in attended:
            if last_index is not None:
                gaps.append(index - last_index - 1)
            last_index = index
    avg_gap = sum(gaps) / len(gaps) if gaps else 0.0

    calendar = sorted(
        (d for d in (parse_game_date(text) for text in player_dates) if d and d.to_date(year)),
        key=lambda d: d.sort_key,
    )
    max_gap = 0
    for previous, current in zip(calendar, calendar[1:]):
        max_gap = max(max_gap, (current.to_date(year) - previous.to_date(year)).days)

    community_per_month: Dict[str, int] = {}
    for game in games:
        if game.played:
            community_per_month[game.month] = community_per_month.get(game.month, 0) + 1
    player_per_month: Dict[str, int] = {}
    for text in player_dates:
        month = parse_month_key(text)
        if month:
            label = month.capitalize()
            player_per_month[label] = player_per_month.get(label, 0) + 1

    rates = [
        player_per_month.get(month, 0) / count
        for month, count in community_per_month.items()
        if count > 0
    ]
    if rates:
        mean = sum(rates) / len(rates)
        variance = sum((rate - mean) ** 2 for rate in rates) / len(rates)
    else:
        variance = 1.0

    variance_score = max(0.0, 100 - variance * 200)
    gap_score = max(0.0, 100 - avg_gap * 20)
    score = round_half_up(variance_score * 0.6 + gap_score * 0.4)

    if score >= 80:
        rating = 'very_consistent'
    elif score >= 60:
        rating = 'consistent'
    elif score >= 40:
        rating = 'moderate'
    else:
        rating = 'irregular'

    return ConsistencyData(
        score=min(100, max(0, score)),
        rating=rating,
        avg_games_gap=round_half_up(avg_gap, 1),
        max_gap=max_gap,
    )


def calculate_clutch_appearances(
    player_dates: Sequence[str],
    games: Sequence[CommunityGameRecord],
    minimum_players: int = 10,
) -> ClutchData:
    """
    Appearances at below-average-attendance games.

    A game is "saved" when the player attended and the head count was
    exactly the minimum needed to play.
    """
    require_sequence(games, 'games')

    counted = [g for g in games if g.played and g.players is not None]
    if not counted:
        return ClutchData()

    average = sum(g.players for g in counted) / len(counted)
    low_games = [g for g in counted if g.players < average]
    attended = set(player_dates)

    clutch = [g for g in low_games if g.date in attended]
    saved = sum(1 for g in clutch if g.players == minimum_players)

    return ClutchData(
        clutch_games=len(clutch),
        total_low_games=len(low_games),
        clutch_rate=round_half_up(len(clutch) / len(low_games) * 100) if low_games else 0,
        games_saved=saved,
    )
