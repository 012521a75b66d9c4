"""Football buddies: who plays with whom, normalized for attendance.

Raw overlap favours regulars, who share games with everybody. Affinity is
the lift of the observed overlap over the overlap expected if both players
turned up independently:

    expected = (games_a * games_b) / total_game_days
    affinity = overlap / expected

Affinity above 1 means the pair plays together more often than chance.
"""

import functools
import logging
from typing import List, Sequence, Set

from .constants import (
    AFFINITY_TIE_THRESHOLD,
    BUDDIES_TOP_N,
    CURRENT_YEAR,
    MIN_BUDDY_GAMES,
    MIN_GAMES_FOR_STATS,
    MIN_OVERLAP,
    MIN_THEIR_GAMES,
)
from .models import DynamicDuo, FootballBuddy, RareDuo, SocialButterfly
from .utils import require_sequence, round_half_up

logger = logging.getLogger('footy.buddies')


def get_total_game_days(players: Sequence, year: int = CURRENT_YEAR) -> int:
    """Number of distinct dates on which anyone played."""
    all_dates: Set[str] = set()
    for player in players:
        all_dates.update(player.dates(year))
    return len(all_dates)


def calculate_overlap(dates_a: Set[str], dates_b: Set[str]) -> int:
    return len(dates_a & dates_b)


def calculate_affinity(overlap: int, games_a: int, games_b: int, total_game_days: int) -> float:
    """Observed overlap over the overlap expected by chance (0 when undefined)."""
    if total_game_days <= 0:
        return 0.0
    expected = (games_a * games_b) / total_game_days
    return overlap / expected if expected > 0 else 0.0


def compare_buddies(a: FootballBuddy, b: FootballBuddy) -> int:
    """
    Ordering for buddy lists, best first.

    1. affinity, descending, but only when the two differ by more than 0.1
    2. influence on them, descending
    3. games together, descending
    """
    if abs(a.affinity - b.affinity) > AFFINITY_TIE_THRESHOLD:
        return -1 if a.affinity > b.affinity else 1
    if a.influence_on_them != b.influence_on_them:
        return b.influence_on_them - a.influence_on_them
    return b.games_with_you - a.games_with_you


def _build_buddy(subject, other, subject_dates: Set[str], other_dates: Set[str],
                 overlap: int, total_game_days: int) -> FootballBuddy:
    return FootballBuddy(
        subject=subject.name,
        name=other.name,
        games_with_you=overlap,
        their_total_games=len(other_dates),
        percentage_of_your_games=round_half_up(overlap / len(subject_dates) * 100),
        influence_on_them=round_half_up(overlap / len(other_dates) * 100),
        affinity=calculate_affinity(overlap, len(subject_dates), len(other_dates), total_game_days),
    )


def get_football_buddies(
    subject,
    players: Sequence,
    year: int = CURRENT_YEAR,
    min_games_for_stats: int = MIN_GAMES_FOR_STATS,
    min_overlap: int = MIN_OVERLAP,
    top_n: int = BUDDIES_TOP_N,
) -> List[FootballBuddy]:
    """
    Players the subject plays with more than chance would predict.

    Args:
        subject: The player asking (PlayerRecord or ProcessedPlayer)
        players: Full roster, the subject included
        year: Season to compare
        min_games_for_stats: Subject needs at least this many games (default: 3)
        min_overlap: Minimum games together for a candidate (default: 2)
        top_n: Number of buddies to return (default: 5)

    Returns:
        Buddies ordered by compare_buddies, at most top_n
    """
    require_sequence(players, 'players')

    subject_dates = set(subject.dates(year))
    if len(subject_dates) < min_games_for_stats:
        return []

    total_game_days = get_total_game_days(players, year)
    if total_game_days == 0:
        return []

    buddies = []
    for other in players:
        if other.name == subject.name:
            continue
        other_dates = set(other.dates(year))
        if len(other_dates) < MIN_BUDDY_GAMES:
            continue
        overlap = calculate_overlap(subject_dates, other_dates)
        if overlap < min_overlap:
            continue
        buddies.append(_build_buddy(subject, other, subject_dates, other_dates, overlap, total_game_days))

    buddies.sort(key=functools.cmp_to_key(compare_buddies))
    logger.debug(f'{subject.name}: {len(buddies)} buddy candidates over {total_game_days} game days')
    return buddies[:top_n]


def get_players_you_influence(
    subject,
    players: Sequence,
    year: int = CURRENT_YEAR,
    min_their_games: int = MIN_THEIR_GAMES,
    top_n: int = BUDDIES_TOP_N,
) -> List[FootballBuddy]:
    """
    Players for whom the subject was part of the largest share of their games.

    Same metrics as get_football_buddies; candidates are gated on their own
    game count only and ordered purely by influence.
    """
    require_sequence(players, 'players')

    subject_dates = set(subject.dates(year))
    total_game_days = get_total_game_days(players, year)
    if not subject_dates or total_game_days == 0:
        return []

    influenced = []
    for other in players:
        if other.name == subject.name:
            continue
        other_dates = set(other.dates(year))
        if len(other_dates) < min_their_games:
            continue
        overlap = calculate_overlap(subject_dates, other_dates)
        if overlap < MIN_OVERLAP:
            continue
        influenced.append(_build_buddy(subject, other, subject_dates, other_dates, overlap, total_game_days))

    influenced.sort(key=lambda buddy: buddy.influence_on_them, reverse=True)
    return influenced[:top_n]


def calculate_dynamic_duos(
    players: Sequence,
    year: int = CURRENT_YEAR,
    min_games: int = 5,
    min_mutual_rate: int = 50,
) -> List[DynamicDuo]:
    """
    Pairs who almost always play together.

    Mutual rate is the rounded average of both players' shares of games
    played with the other.
    """
    require_sequence(players, 'players')

    duos = []
    for i, first in enumerate(players):
        dates_a = set(first.dates(year))
        if len(dates_a) < min_games:
            continue
        for second in players[i + 1:]:
            dates_b = set(second.dates(year))
            if len(dates_b) < min_games:
                continue
            overlap = calculate_overlap(dates_a, dates_b)
            if overlap < 3:
                continue
            rate_a = round_half_up(overlap / len(dates_a) * 100)
            rate_b = round_half_up(overlap / len(dates_b) * 100)
            duos.append(DynamicDuo(
                player1=first.name,
                player2=second.name,
                games_together=overlap,
                mutual_rate=round_half_up((rate_a + rate_b) / 2),
                player1_rate=rate_a,
                player2_rate=rate_b,
            ))

    duos.sort(key=lambda duo: duo.mutual_rate, reverse=True)
    return [duo for duo in duos if duo.mutual_rate >= min_mutual_rate]


def calculate_rare_duos(
    players: Sequence,
    year: int = CURRENT_YEAR,
    min_games: int = 8,
    max_overlap_rate: int = 30,
) -> List[RareDuo]:
    """
    Pairs of regulars who rarely share a game.

    rarity = (games_a + games_b) / (overlap + 1), top 10 by rarity.
    """
    require_sequence(players, 'players')

    duos = []
    for i, first in enumerate(players):
        dates_a = set(first.dates(year))
        if len(dates_a) < min_games:
            continue
        for second in players[i + 1:]:
            dates_b = set(second.dates(year))
            if len(dates_b) < min_games:
                continue
            overlap = calculate_overlap(dates_a, dates_b)
            overlap_rate = round_half_up(overlap / min(len(dates_a), len(dates_b)) * 100)
            if overlap_rate > max_overlap_rate:
                continue
            total_games = len(dates_a) + len(dates_b)
            duos.append(RareDuo(
                player1=first.name,
                player2=second.name,
                player1_games=len(dates_a),
                player2_games=len(dates_b),
                total_games=total_games,
                games_together=overlap,
                rarity_score=round_half_up(total_games / (overlap + 1)),
                overlap_rate=overlap_rate,
            ))

    duos.sort(key=lambda duo: duo.rarity_score, reverse=True)
    return duos[:10]


def calculate_social_butterfly(
    subject_name: str,
    subject_dates: Sequence[str],
    players: Sequence,
    year: int = CURRENT_YEAR,
) -> SocialButterfly:
    """How many of the other players the subject shared at least one game with."""
    require_sequence(players, 'players')

    own_dates = set(subject_dates)
    played_with = [
        other.name for other in players
        if other.name != subject_name and own_dates.intersection(other.dates(year))
    ]
    total_players = len([p for p in players if p.name != subject_name])
    percentage = round_half_up(len(played_with) / total_players * 100) if total_players else 0
    return SocialButterfly(
        unique_players_count=len(played_with),
        total_players_count=total_players,
        percentage=percentage,
        played_with=played_with,
    )
