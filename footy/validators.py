"""Consistency checks for processed players, community stats and quizzes."""

from typing import Sequence

from .constants import MONTH_KEYS
from .models import ChoiceQuestion, CommunityStats, ProcessedPlayer, QuizSlide, RangeQuestion, parse_month_key


def validate_processed_player(player: ProcessedPlayer) -> list[str]:
    """
    Check one processed player for internal consistency.

    Checks:
    - Rank is 0 exactly when the player has no games that year
    - Monthly breakdown has all 12 months and sums to the total, less
      the dates whose month could not be read
    - All-time total is the sum of the yearly totals
    - Streak dates agree with the streak length and endpoints

    Args:
        player: ProcessedPlayer to validate

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    for year, total in player.total.items():
        rank = player.rank.get(year, 0)
        if (rank == 0) != (total == 0):
            errors.append(f'{player.name} has rank {rank} with {total} games in {year}')
        if rank < 0:
            errors.append(f'{player.name} has negative rank {rank} in {year}')

        monthly = player.monthly_breakdown.get(year, {})
        missing = [m for m in MONTH_KEYS if m not in monthly]
        if missing:
            errors.append(f'{player.name} monthly breakdown for {year} is missing: {", ".join(missing)}')

        readable = sum(1 for text in player.dates(year) if parse_month_key(text))
        bucketed = sum(monthly.values())
        if bucketed != readable:
            errors.append(
                f'{player.name} monthly breakdown for {year} sums to {bucketed}, expected {readable}'
            )

    if player.total_all_time != sum(player.total.values()):
        errors.append(
            f'{player.name} all-time total {player.total_all_time} != {sum(player.total.values())}'
        )

    if player.longest_streak != len(player.streak_dates):
        errors.append(
            f'{player.name} streak of {player.longest_streak} lists {len(player.streak_dates)} dates'
        )
    if player.streak_dates and (
        player.streak_start != player.streak_dates[0] or player.streak_end != player.streak_dates[-1]
    ):
        errors.append(f'{player.name} streak endpoints do not match streak dates')

    return errors


def validate_rank_order(players: Sequence[ProcessedPlayer], year: int) -> list[str]:
    """
    Check ranks against totals across the roster.

    Equal totals must share a rank, and a strictly higher total must never
    rank worse. Players with the 0 sentinel are left out.
    """
    errors = []
    ranked = [p for p in players if p.rank.get(year, 0) > 0]
    for a in ranked:
        for b in ranked:
            total_a, total_b = a.total.get(year, 0), b.total.get(year, 0)
            if total_a == total_b and a.rank[year] != b.rank[year]:
                errors.append(f'{a.name} and {b.name} tie on {total_a} games but rank differently in {year}')
            elif total_a > total_b and a.rank[year] > b.rank[year]:
                errors.append(f'{a.name} ({total_a} games) ranks below {b.name} ({total_b} games) in {year}')
    return errors


def validate_community_stats(stats: CommunityStats) -> list[str]:
    """
    Check season aggregates are within sensible bounds.

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    for year, season in stats.years.items():
        if season.games_played + season.games_cancelled != season.total_attempted:
            warnings.append(
                f'{year}: played ({season.games_played}) + cancelled ({season.games_cancelled}) '
                f'!= attempted ({season.total_attempted})'
            )
        if not 0 <= season.success_rate <= 100:
            warnings.append(f'{year}: success rate {season.success_rate}% out of range')
        if sum(season.games_per_month.values()) != season.games_played:
            warnings.append(f'{year}: monthly games do not add up to {season.games_played}')
        if season.avg_players < 0:
            warnings.append(f'{year}: negative average attendance {season.avg_players}')

    return warnings


def validate_quiz_slides(slides: Sequence[QuizSlide]) -> list[str]:
    """
    Check that every generated question is answerable.

    Checks:
    - Question ids are unique
    - Range answers lie inside the slider and margins are not negative
    - Choice answers are among the options
    """
    errors = []
    seen = set()

    for slide in slides:
        for question in slide.questions:
            if question.id in seen:
                errors.append(f'Duplicate question id: {question.id}')
            seen.add(question.id)

            if isinstance(question, RangeQuestion):
                if not question.min <= question.correct_answer <= question.max:
                    errors.append(
                        f'{question.id}: answer {question.correct_answer} outside '
                        f'{question.min}-{question.max}'
                    )
                if question.margin < 0:
                    errors.append(f'{question.id}: negative margin {question.margin}')
            elif isinstance(question, ChoiceQuestion):
                if question.correct_answer not in question.options:
                    errors.append(f'{question.id}: answer {question.correct_answer} not among options')
                if len(set(question.options)) != len(question.options):
                    errors.append(f'{question.id}: duplicate options')

    return errors


def validate_all_players(players: Sequence[ProcessedPlayer], years: Sequence[int]) -> list[str]:
    """Run every per-player and roster-wide check."""
    errors: list[str] = []
    for player in players:
        errors.extend(validate_processed_player(player))
    for year in years:
        errors.extend(validate_rank_order(players, year))
    return errors
