"""Unit tests for quiz generation and scoring."""

import pytest

from footy.models import ChoiceQuestion, QuizSlide, RangeQuestion
from footy.quiz import (
    QUIZ_MARGINS,
    calculate_quiz_results,
    default_answers,
    default_range_answer,
    generate_quiz_questions,
    get_all_questions,
    score_choice_answer,
    score_range_answer,
)
from footy.validators import validate_quiz_slides


@pytest.fixture
def alice_quiz(by_name, processed_players, games_by_year):
    return generate_quiz_questions(
        by_name['Alice'], processed_players, games_by_year[2024], games_by_year[2025], 2025, 2024,
    )


def questions_by_id(slides):
    return {q.id: q for q in get_all_questions(slides)}


class TestQuizGeneration:
    """Tests for generate_quiz_questions."""

    def test_slide_order(self, alice_quiz):
        assert [s.title_key for s in alice_quiz] == [
            'quiz.slides.organization',
            'quiz.slides.personalGames',
            'quiz.slides.achievements',
            'quiz.slides.choices',
        ]
        assert len(get_all_questions(alice_quiz)) == 9

    def test_organization_questions(self, alice_quiz):
        questions = questions_by_id(alice_quiz)
        total = questions['org_total_games']
        assert total.correct_answer == 8
        assert (total.min, total.max) == (8, 55)
        assert total.anchor.value == 6
        assert total.anchor.label_key == 'quiz.anchor.priorYear'
        # six prior-season games run straight into eight played this season
        assert questions['org_longest_streak'].correct_answer == 14

    def test_personal_questions(self, alice_quiz):
        questions = questions_by_id(alice_quiz)
        assert questions['personal_total_games'].correct_answer == 7
        assert questions['personal_total_games'].anchor.value == 4
        assert questions['personal_rank'].correct_answer == 1
        assert questions['personal_rank'].max == 4
        assert questions['personal_perfect_months'].correct_answer == 1
        assert questions['personal_streak'].correct_answer == 7

    def test_teammates_question(self, alice_quiz):
        teammates = questions_by_id(alice_quiz)['personal_teammates']
        assert teammates.correct_answer == 2
        assert teammates.max == 8

    def test_best_month_choice(self, alice_quiz):
        best_month = questions_by_id(alice_quiz)['personal_best_month']
        assert isinstance(best_month, ChoiceQuestion)
        assert best_month.correct_answer == 'march'
        assert best_month.options == ('march', 'april', 'may', 'june')

    def test_top_buddy_choice(self, alice_quiz):
        buddy = questions_by_id(alice_quiz)['personal_top_buddy']
        assert buddy.correct_answer == 'Bob'
        assert buddy.options == ('Bob', 'Carol')

    def test_margins_applied(self, alice_quiz):
        for question in get_all_questions(alice_quiz):
            if isinstance(question, RangeQuestion):
                assert question.margin == QUIZ_MARGINS[question.id]

    def test_generated_quiz_is_answerable(self, alice_quiz):
        assert validate_quiz_slides(alice_quiz) == []

    def test_player_without_current_games(self, by_name, processed_players, games_by_year):
        slides = generate_quiz_questions(
            by_name['Dan'], processed_players, games_by_year[2024], games_by_year[2025], 2025, 2024,
        )
        ids = set(questions_by_id(slides))
        assert 'personal_rank' not in ids
        assert 'personal_best_month' not in ids
        assert 'personal_top_buddy' not in ids
        assert len(slides) == 3
        assert validate_quiz_slides(slides) == []

    def test_non_list_schedule_rejected(self, by_name, processed_players, games_by_year):
        with pytest.raises(TypeError, match='current_games must be a list'):
            generate_quiz_questions(by_name['Alice'], processed_players, games_by_year[2024], None)


class TestQuizScoring:
    """Tests for tolerance-based scoring."""

    def question(self, correct=20, margin=3, low=0, high=50):
        return RangeQuestion(
            id='q', category='personal', question_key='k',
            correct_answer=correct, min=low, max=high, margin=margin,
        )

    def test_exact_answer(self):
        answer = score_range_answer(self.question(), 20)
        assert answer.is_exact
        assert answer.is_correct

    def test_within_margin(self):
        answer = score_range_answer(self.question(), 23)
        assert answer.is_correct
        assert not answer.is_exact
        assert answer.margin == 3

    def test_outside_margin(self):
        assert not score_range_answer(self.question(), 24).is_correct

    def test_zero_margin_needs_exact(self):
        assert not score_range_answer(self.question(margin=0), 21).is_correct

    def test_default_is_floored_midpoint(self):
        assert default_range_answer(self.question(low=0, high=25)) == 12

    def test_choice_answer(self):
        question = ChoiceQuestion(
            id='c', category='personal', question_key='k', options=('a', 'b'), correct_answer='b',
        )
        assert score_choice_answer(question, 'b').is_correct
        assert not score_choice_answer(question, 'a').is_correct
        assert not score_choice_answer(question, None).is_correct
        assert score_choice_answer(question, 'a').is_exact is None

    def test_all_correct(self, alice_quiz):
        answers = {q.id: q.correct_answer for q in get_all_questions(alice_quiz)}
        result = calculate_quiz_results(alice_quiz, answers)
        assert result.total_correct == 9
        assert result.total_questions == 9

    def test_unanswered_uses_defaults(self, alice_quiz):
        """Untouched sliders submit their midpoint; untouched choices are wrong."""
        result = calculate_quiz_results(alice_quiz, {})
        by_id = {a.question_id: a for a in result.answers}
        assert by_id['org_total_games'].user_answer == 31
        assert not by_id['org_total_games'].is_correct
        assert by_id['personal_best_month'].user_answer is None
        assert not by_id['personal_best_month'].is_correct
        assert result.total_questions == 9

    def test_default_answers_match_scoring(self, alice_quiz):
        defaults = default_answers(alice_quiz)
        assert calculate_quiz_results(alice_quiz, defaults) == calculate_quiz_results(alice_quiz, {})
        assert 'personal_top_buddy' not in defaults

    def test_answers_follow_generation_order(self, alice_quiz):
        result = calculate_quiz_results(alice_quiz, {})
        assert [a.question_id for a in result.answers] == [q.id for q in get_all_questions(alice_quiz)]

    def test_empty_quiz(self):
        result = calculate_quiz_results([QuizSlide(title_key='empty')], {})
        assert result.total_questions == 0
        assert result.total_correct == 0
