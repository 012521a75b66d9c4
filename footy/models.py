"""Data models for the footy analytics engine."""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple, Union

from .constants import MONTH_MAP, MONTH_SEGMENTS


@dataclass(frozen=True)
class GameDate:
    """A "DD/MM" game date, scoped to a single season year."""
    day: int
    month: int

    @property
    def month_key(self) -> str:
        return MONTH_MAP[self.month]

    @property
    def sort_key(self) -> Tuple[int, int]:
        return (self.month, self.day)

    def to_date(self, year: int) -> Optional[date]:
        """Calendar date in the given year, or None if the day does not exist."""
        try:
            return date(year, self.month, self.day)
        except ValueError:
            return None

    def format(self) -> str:
        return f'{self.day:02d}/{self.month:02d}'


def parse_game_date(text: str) -> Optional[GameDate]:
    """
    Parse a "DD/MM" string.

    Returns None when the month segment does not name a month or the day
    segment is not a number in 1-31.
    """
    if not isinstance(text, str):
        return None
    parts = text.strip().split('/')
    if len(parts) < 2:
        return None
    day_part, month_part = parts[0].strip(), parts[1].strip()
    if not day_part.isdigit() or not month_part.isdigit():
        return None
    day, month = int(day_part), int(month_part)
    if month not in MONTH_MAP or not 1 <= day <= 31:
        return None
    return GameDate(day=day, month=month)


def parse_month_key(text: str) -> Optional[str]:
    """
    Month key for the month segment of a "DD/MM" string, ignoring the day.

    Only the exact two-digit segments "01".."12" name a month; "5/4" or
    "05/004" give None even though parse_game_date reads them.
    """
    if not isinstance(text, str):
        return None
    parts = text.split('/')
    if len(parts) < 2:
        return None
    return MONTH_SEGMENTS.get(parts[1])


@dataclass(frozen=True)
class PlayerRecord:
    """Raw attendance for one player."""
    name: str
    dates_by_year: Dict[int, Tuple[str, ...]] = field(default_factory=dict)
    # dates_by_year[year] = ("DD/MM", ...) exactly as logged, malformed entries included

    def dates(self, year: int) -> Tuple[str, ...]:
        return tuple(self.dates_by_year.get(year) or ())


@dataclass
class StreakData:
    """Longest run found by a streak walk."""
    count: int = 0
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    dates: List[str] = field(default_factory=list)


@dataclass
class ProcessedPlayer:
    """PlayerRecord enriched with totals, ranks, monthly buckets and streak."""
    name: str
    dates_by_year: Dict[int, Tuple[str, ...]]
    total: Dict[int, int]
    total_all_time: int
    rank: Dict[int, int]  # 0 = did not play that year, never a competitive rank
    monthly_breakdown: Dict[int, Dict[str, int]]
    longest_streak: int = 0
    streak_dates: List[str] = field(default_factory=list)
    streak_start: Optional[str] = None
    streak_end: Optional[str] = None

    def dates(self, year: int) -> Tuple[str, ...]:
        return tuple(self.dates_by_year.get(year) or ())

    def played_in(self, year: int) -> bool:
        return self.rank.get(year, 0) != 0


@dataclass(frozen=True)
class CommunityGameRecord:
    """One scheduled community game."""
    date: str
    month: str
    played: bool
    players: Optional[int] = None
    field: Optional[str] = None


@dataclass
class YearStats:
    """Community aggregates for a single season."""
    games_played: int = 0
    games_cancelled: int = 0
    total_attempted: int = 0
    avg_players: float = 0.0
    success_rate: int = 0
    games_per_month: Dict[str, int] = field(default_factory=dict)
    fields: Dict[str, int] = field(default_factory=dict)


@dataclass
class CommunityStats:
    """Per-season community aggregates plus season-over-season deltas."""
    current_year: int
    prior_year: int
    years: Dict[int, YearStats] = field(default_factory=dict)
    games_change: int = 0
    avg_players_change: float = 0.0
    success_rate_change: int = 0
    total_games_all_time: int = 0

    @property
    def current(self) -> YearStats:
        return self.years.get(self.current_year, YearStats())

    @property
    def prior(self) -> YearStats:
        return self.years.get(self.prior_year, YearStats())


@dataclass
class FootballBuddy:
    """Co-attendance metrics between a subject player and another player."""
    subject: str
    name: str
    games_with_you: int
    their_total_games: int
    percentage_of_your_games: int  # % of the subject's games shared with them
    influence_on_them: int  # % of their games the subject was part of
    affinity: float  # observed overlap / overlap expected under independence


@dataclass
class RankChange:
    value: int
    direction: str  # 'new', 'up', 'down' or 'same'


@dataclass
class BestWorstMonths:
    best: List[Tuple[str, int]] = field(default_factory=list)
    worst: List[Tuple[str, int]] = field(default_factory=list)


@dataclass
class BestWorstSeason:
    best: Tuple[str, int]
    worst: Tuple[str, int]


@dataclass
class ConsistencyData:
    score: int = 0  # 0-100, higher = more regular
    rating: str = 'irregular'
    avg_games_gap: float = 0.0  # community games skipped between appearances
    max_gap: int = 0  # longest gap in days


@dataclass
class ClutchData:
    clutch_games: int = 0
    total_low_games: int = 0
    clutch_rate: int = 0
    games_saved: int = 0


@dataclass
class PerfectMonth:
    month: str
    games_played: int
    total_games: int


@dataclass
class DynamicDuo:
    player1: str
    player2: str
    games_together: int
    mutual_rate: int
    player1_rate: int
    player2_rate: int


@dataclass
class RareDuo:
    player1: str
    player2: str
    player1_games: int
    player2_games: int
    total_games: int
    games_together: int
    rarity_score: int
    overlap_rate: int


@dataclass
class SocialButterfly:
    unique_players_count: int
    total_players_count: int
    percentage: int
    played_with: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class QuizAnchor:
    """Prior-season reference value shown beside a range question."""
    value: int
    label_key: str


@dataclass(frozen=True)
class RangeQuestion:
    id: str
    category: str  # 'organization' or 'personal'
    question_key: str
    correct_answer: int
    min: int
    max: int
    margin: int = 0
    anchor: Optional[QuizAnchor] = None


@dataclass(frozen=True)
class ChoiceQuestion:
    id: str
    category: str
    question_key: str
    options: Tuple[str, ...]
    correct_answer: str


QuizQuestion = Union[RangeQuestion, ChoiceQuestion]


@dataclass
class QuizSlide:
    title_key: str
    questions: List[QuizQuestion] = field(default_factory=list)


@dataclass
class QuizAnswer:
    question_id: str
    user_answer: Union[int, str, None]
    correct_answer: Union[int, str]
    is_correct: bool
    is_exact: Optional[bool] = None  # range questions only
    margin: Optional[int] = None  # range questions only


@dataclass
class QuizResult:
    answers: List[QuizAnswer] = field(default_factory=list)
    total_correct: int = 0
    total_questions: int = 0
