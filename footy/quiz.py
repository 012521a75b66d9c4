"""Personalized season quiz: question generation and tolerance-based scoring."""

import logging
from typing import List, Mapping, Optional, Sequence, Union

from .buddies import calculate_social_butterfly, get_football_buddies
from .constants import CURRENT_YEAR, MIN_GAMES_FOR_STATS, MIN_OVERLAP, MONTH_KEYS, PRIOR_YEAR
from .models import (
    ChoiceQuestion,
    CommunityGameRecord,
    ProcessedPlayer,
    QuizAnchor,
    QuizAnswer,
    QuizQuestion,
    QuizResult,
    QuizSlide,
    RangeQuestion,
)
from .player_stats import calculate_perfect_months
from .ranking import get_best_worst_months
from .streaks import calculate_community_streak
from .utils import require_sequence

logger = logging.getLogger('footy.quiz')

# Answers within this distance of the correct value still earn the point
QUIZ_MARGINS = {
    'org_total_games': 3,
    'org_longest_streak': 2,
    'personal_total_games': 3,
    'personal_rank': 2,
    'personal_perfect_months': 0,
    'personal_streak': 1,
    'personal_teammates': 2,
}

CHOICE_OPTION_COUNT = 4


def _bounded(question_id: str, category: str, question_key: str, correct: int,
             low: int, high: int, anchor: Optional[QuizAnchor] = None) -> RangeQuestion:
    # Widen the slider so the correct answer is always reachable
    return RangeQuestion(
        id=question_id,
        category=category,
        question_key=question_key,
        correct_answer=correct,
        min=min(low, correct),
        max=max(high, correct),
        margin=QUIZ_MARGINS[question_id],
        anchor=anchor,
    )


def _best_month_question(player: ProcessedPlayer, year: int) -> Optional[ChoiceQuestion]:
    monthly = player.monthly_breakdown.get(year, {})
    best = get_best_worst_months(monthly).best
    if not best:
        return None

    correct, best_count = best[0]
    start = MONTH_KEYS.index(correct)
    rotation = MONTH_KEYS[start + 1:] + MONTH_KEYS[:start]

    # Prefer months the player clearly played less in, then any other month
    distractors = [m for m in rotation if monthly.get(m, 0) < best_count][:CHOICE_OPTION_COUNT - 1]
    for month in rotation:
        if len(distractors) == CHOICE_OPTION_COUNT - 1:
            break
        if month not in distractors:
            distractors.append(month)

    options = sorted([correct, *distractors], key=MONTH_KEYS.index)
    return ChoiceQuestion(
        id='personal_best_month',
        category='personal',
        question_key='quiz.questions.bestMonth',
        options=tuple(options),
        correct_answer=correct,
    )


def _top_buddy_question(player: ProcessedPlayer, players: Sequence[ProcessedPlayer], year: int,
                        min_games_for_stats: int, min_overlap: int) -> Optional[ChoiceQuestion]:
    buddies = get_football_buddies(player, players, year, min_games_for_stats, min_overlap, top_n=1)
    if not buddies:
        return None

    correct = buddies[0].name
    others = [
        p.name for p in players
        if p.name not in (player.name, correct) and p.dates(year)
    ][:CHOICE_OPTION_COUNT - 1]
    return ChoiceQuestion(
        id='personal_top_buddy',
        category='personal',
        question_key='quiz.questions.topBuddy',
        options=tuple(sorted([correct, *others])),
        correct_answer=correct,
    )


def generate_quiz_questions(
    player: ProcessedPlayer,
    players: Sequence[ProcessedPlayer],
    prior_games: Sequence[CommunityGameRecord],
    current_games: Sequence[CommunityGameRecord],
    current_year: int = CURRENT_YEAR,
    prior_year: int = PRIOR_YEAR,
    min_games_for_stats: int = MIN_GAMES_FOR_STATS,
    min_overlap: int = MIN_OVERLAP,
) -> List[QuizSlide]:
    """
    Build the quiz for one player.

    Slides, in order:
        - organization: games played this season (prior season as anchor),
          longest run of played community games
        - personal games: your games (prior season as anchor), your rank
        - achievements: perfect months, your streak, unique teammates
        - choices: your best month, your top football buddy

    The rank question is left out for players who did not play this season,
    and choice questions are left out when there is nothing to ask about.

    Args:
        player: The quiz taker (processed)
        players: Full processed roster
        prior_games: Prior season community schedule
        current_games: Current season community schedule
        current_year: Season being quizzed
        prior_year: Comparison season
        min_games_for_stats: Top-buddy question needs the player to have this many games
        min_overlap: Minimum games together for the top buddy

    Returns:
        Ordered list of QuizSlide
    """
    require_sequence(players, 'players')
    require_sequence(prior_games, 'prior_games')
    require_sequence(current_games, 'current_games')

    current_dates = list(player.dates(current_year))
    games_this_year = sum(1 for g in current_games if g.played)
    games_last_year = sum(1 for g in prior_games if g.played)
    community_streak = calculate_community_streak(prior_games, current_games)
    perfect_months = calculate_perfect_months(current_dates, current_games)
    butterfly = calculate_social_butterfly(player.name, current_dates, players, current_year)
    prior_anchor_key = 'quiz.anchor.priorYear'

    organization = QuizSlide(title_key='quiz.slides.organization', questions=[
        _bounded('org_total_games', 'organization', 'quiz.questions.totalGames',
                 games_this_year, 30, 55, QuizAnchor(games_last_year, prior_anchor_key)),
        _bounded('org_longest_streak', 'organization', 'quiz.questions.communityStreak',
                 community_streak.count, 5, 30),
    ])

    personal = QuizSlide(title_key='quiz.slides.personalGames', questions=[
        _bounded('personal_total_games', 'personal', 'quiz.questions.yourTotalGames',
                 player.total.get(current_year, 0), 0, 50,
                 QuizAnchor(player.total.get(prior_year, 0), prior_anchor_key)),
    ])
    if player.played_in(current_year):
        rank = player.rank[current_year]
        personal.questions.append(
            _bounded('personal_rank', 'personal', 'quiz.questions.yourRank', rank, 1, len(players))
        )

    achievements = QuizSlide(title_key='quiz.slides.achievements', questions=[
        _bounded('personal_perfect_months', 'personal', 'quiz.questions.perfectMonths',
                 len(perfect_months), 0, 12),
        _bounded('personal_streak', 'personal', 'quiz.questions.yourStreak',
                 player.longest_streak, 0, 25),
        _bounded('personal_teammates', 'personal', 'quiz.questions.uniqueTeammates',
                 butterfly.unique_players_count, 0, butterfly.total_players_count + 5),
    ])

    slides = [organization, personal, achievements]

    choices = [
        q for q in (_best_month_question(player, current_year),
                    _top_buddy_question(player, players, current_year, min_games_for_stats, min_overlap))
        if q is not None
    ]
    if choices:
        slides.append(QuizSlide(title_key='quiz.slides.choices', questions=choices))

    logger.debug(f'Quiz for {player.name}: {sum(len(s.questions) for s in slides)} questions')
    return slides


def get_all_questions(slides: Sequence[QuizSlide]) -> List[QuizQuestion]:
    """All questions in generation order."""
    return [question for slide in slides for question in slide.questions]


def default_range_answer(question: RangeQuestion) -> int:
    """Slider midpoint, submitted as-is when the player never moves it."""
    return (question.min + question.max) // 2


def default_answers(slides: Sequence[QuizSlide]) -> dict[str, int]:
    """Initial answers for every range question."""
    return {
        q.id: default_range_answer(q)
        for q in get_all_questions(slides)
        if isinstance(q, RangeQuestion)
    }


def score_range_answer(question: RangeQuestion, user_answer: int) -> QuizAnswer:
    """Correct within the question's margin; exact is a subset of correct."""
    is_exact = user_answer == question.correct_answer
    is_correct = abs(user_answer - question.correct_answer) <= question.margin
    return QuizAnswer(
        question_id=question.id,
        user_answer=user_answer,
        correct_answer=question.correct_answer,
        is_correct=is_correct,
        is_exact=is_exact,
        margin=question.margin,
    )


def score_choice_answer(question: ChoiceQuestion, user_answer: Optional[str]) -> QuizAnswer:
    return QuizAnswer(
        question_id=question.id,
        user_answer=user_answer,
        correct_answer=question.correct_answer,
        is_correct=user_answer == question.correct_answer,
    )


def calculate_quiz_results(
    slides: Sequence[QuizSlide],
    user_answers: Mapping[str, Union[int, str]],
) -> QuizResult:
    """
    Score submitted answers.

    Range questions without an answer are scored with their default
    midpoint; choice questions without an answer are wrong.

    Args:
        slides: Slides from generate_quiz_questions
        user_answers: question id -> submitted value

    Returns:
        QuizResult with one answer per question in generation order
    """
    require_sequence(slides, 'slides')

    answers = []
    for question in get_all_questions(slides):
        if isinstance(question, RangeQuestion):
            value = user_answers.get(question.id)
            if value is None:
                value = default_range_answer(question)
            answers.append(score_range_answer(question, value))
        else:
            answers.append(score_choice_answer(question, user_answers.get(question.id)))

    return QuizResult(
        answers=answers,
        total_correct=sum(1 for a in answers if a.is_correct),
        total_questions=len(answers),
    )
