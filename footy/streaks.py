"""Attendance streaks anchored on the weekly game day.

A player's streak is carried by the weekly anchor game (Saturday by default):
it grows by one for every consecutive anchor game attended, picks up any
midweek games the player attended between two attended anchors, and breaks
only when an anchor game is missed.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional, Sequence

from .constants import ANCHOR_WEEKDAY, CURRENT_YEAR
from .models import CommunityGameRecord, StreakData, parse_game_date
from .utils import require_sequence

logger = logging.getLogger('footy.streaks')


def _to_calendar_date(text: str, year: int) -> Optional[date]:
    game_date = parse_game_date(text)
    return game_date.to_date(year) if game_date else None


def _calendar_key(text: str) -> tuple:
    game_date = parse_game_date(text)
    # Unparseable dates sort after every real date, in their given order
    return game_date.sort_key if game_date else (13, 0)


def get_all_game_dates(players: Iterable, year: int) -> List[str]:
    """
    Union of every player's date strings for a season, in first-seen order.

    Args:
        players: PlayerRecord or ProcessedPlayer objects
        year: Season year

    Returns:
        List of unique date strings
    """
    seen = {}
    for player in players:
        for text in player.dates(year):
            seen.setdefault(text, None)
    return list(seen)


def find_anchor_dates(
    all_game_dates: Iterable[str],
    year: int = CURRENT_YEAR,
    anchor_weekday: int = ANCHOR_WEEKDAY,
) -> List[date]:
    """Distinct game dates falling on the anchor weekday, ascending."""
    anchors = set()
    for text in all_game_dates:
        day = _to_calendar_date(text, year)
        if day is not None and day.weekday() == anchor_weekday:
            anchors.add(day)
    return sorted(anchors)


def calculate_longest_streak(
    player_dates: Sequence[str],
    all_game_dates: Sequence[str],
    year: int = CURRENT_YEAR,
    anchor_weekday: int = ANCHOR_WEEKDAY,
) -> StreakData:
    """
    Find a player's longest anchor-day streak in a season.

    Walks the anchor games of the season in order. An attended anchor adds
    1 plus the player's own games since the previous attended anchor (or,
    for the first anchor of a fresh streak, every game before it). A missed
    anchor resets the run. If the season has no anchor-day games at all,
    the player's whole list counts as a single streak.

    Args:
        player_dates: The player's "DD/MM" dates for the season
        all_game_dates: Every player's dates for the season (any order)
        year: Season year used to resolve weekdays
        anchor_weekday: Weekly game day, Monday=0 (default: Saturday)

    Returns:
        StreakData for the best run (zero streak for a player with no games)
    """
    require_sequence(player_dates, 'player_dates')
    require_sequence(all_game_dates, 'all_game_dates')

    if not player_dates:
        return StreakData()

    anchors = find_anchor_dates(all_game_dates, year, anchor_weekday)
    if not anchors:
        return StreakData(
            count=len(player_dates),
            start_date=player_dates[0],
            end_date=player_dates[-1],
            dates=list(player_dates),
        )

    # Malformed dates can neither match an anchor nor count as a bonus game
    parsed = [(text, _to_calendar_date(text, year)) for text in player_dates]
    attended = {}
    for text, day in parsed:
        if day is not None:
            attended.setdefault(day, text)

    best = StreakData()
    current_count = 0
    current_dates: List[str] = []
    last_anchor: Optional[date] = None

    for anchor in anchors:
        if anchor not in attended:
            current_count = 0
            current_dates = []
            last_anchor = None
            continue

        if last_anchor is not None:
            bonus = [text for text, day in parsed if day is not None and last_anchor < day < anchor]
        else:
            bonus = [text for text, day in parsed if day is not None and day < anchor]

        current_count += 1 + len(bonus)
        current_dates.extend(bonus)
        current_dates.append(attended[anchor])
        last_anchor = anchor

        if current_count > best.count:
            best = StreakData(
                count=current_count,
                start_date=current_dates[0],
                end_date=current_dates[-1],
                dates=list(current_dates),
            )

    return best


def calculate_community_streak(
    prior_games: Sequence[CommunityGameRecord],
    current_games: Sequence[CommunityGameRecord],
) -> StreakData:
    """
    Longest run of consecutive played community games.

    Records are walked in the order given, prior season first, so a run can
    carry over the new year. A cancelled game breaks the run.
    """
    require_sequence(prior_games, 'prior_games')
    require_sequence(current_games, 'current_games')

    best = StreakData()
    run: List[str] = []
    for game in [*prior_games, *current_games]:
        if not game.played:
            run = []
            continue
        run.append(game.date)
        if len(run) > best.count:
            best = StreakData(count=len(run), start_date=run[0], end_date=run[-1], dates=list(run))

    logger.debug(f'Community streak: {best.count} games ({best.start_date} - {best.end_date})')
    return best


def calculate_peak_performance(
    player_dates: Sequence[str],
    community_games: Sequence[CommunityGameRecord],
) -> StreakData:
    """
    Longest run of consecutive played community games the player attended.

    Unlike the anchor-day streak, every played game counts and any missed
    one breaks the run.
    """
    require_sequence(player_dates, 'player_dates')
    require_sequence(community_games, 'community_games')

    played_dates = sorted((g.date for g in community_games if g.played), key=_calendar_key)
    if not played_dates or not player_dates:
        return StreakData()

    attended = set(player_dates)
    best = StreakData()
    run: List[str] = []
    for game_date in played_dates:
        if game_date not in attended:
            run = []
            continue
        run.append(game_date)
        if len(run) > best.count:
            best = StreakData(count=len(run), start_date=run[0], end_date=run[-1], dates=list(run))

    return best
