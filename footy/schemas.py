"""Pydantic schemas for JSON data validation."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import ANCHOR_WEEKDAY, CURRENT_YEAR, PRIOR_YEAR, SUPPORTED_LANGUAGES
from .models import CommunityGameRecord, PlayerRecord, ProcessedPlayer


class PlayerEntry(BaseModel):
    """Raw attendance entry for one player."""

    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    name: str = Field(..., min_length=1)
    dates_by_year: dict[int, list[str]] = Field(default_factory=dict, alias='datesByYear')

    def to_record(self) -> PlayerRecord:
        return PlayerRecord(
            name=self.name,
            dates_by_year={year: tuple(dates) for year, dates in self.dates_by_year.items()},
        )


class RosterFile(BaseModel):
    """Raw players file structure."""

    model_config = ConfigDict(extra='forbid')

    players: list[PlayerEntry]

    @field_validator('players')
    @classmethod
    def validate_unique_names(cls, v):
        """Player names are identifiers and must be unique."""
        seen = set()
        for entry in v:
            if entry.name in seen:
                raise ValueError(f'Duplicate player name: {entry.name}')
            seen.add(entry.name)
        return v


class ProcessedPlayerEntry(BaseModel):
    """Cached output of process_player_data for one player."""

    model_config = ConfigDict(extra='forbid')

    name: str = Field(..., min_length=1)
    dates_by_year: dict[int, list[str]]
    total: dict[int, int]
    total_all_time: int = Field(..., ge=0)
    rank: dict[int, int]
    monthly_breakdown: dict[int, dict[str, int]]
    longest_streak: int = Field(0, ge=0)
    streak_dates: list[str] = Field(default_factory=list)
    streak_start: str | None = None
    streak_end: str | None = None

    def to_processed(self) -> ProcessedPlayer:
        return ProcessedPlayer(
            name=self.name,
            dates_by_year={year: tuple(dates) for year, dates in self.dates_by_year.items()},
            total=dict(self.total),
            total_all_time=self.total_all_time,
            rank=dict(self.rank),
            monthly_breakdown={year: dict(m) for year, m in self.monthly_breakdown.items()},
            longest_streak=self.longest_streak,
            streak_dates=list(self.streak_dates),
            streak_start=self.streak_start,
            streak_end=self.streak_end,
        )


class ProcessedRosterFile(BaseModel):
    """Cached processed players file structure."""

    model_config = ConfigDict(extra='forbid')

    players: list[ProcessedPlayerEntry]


class GameEntry(BaseModel):
    """One scheduled community game."""

    model_config = ConfigDict(extra='ignore')

    date: str
    month: str
    played: bool
    players: int | None = Field(None, ge=0)
    field: str | None = None

    def to_record(self) -> CommunityGameRecord:
        return CommunityGameRecord(
            date=self.date,
            month=self.month,
            played=self.played,
            players=self.players,
            field=self.field or None,
        )


class CommunityScheduleFile(BaseModel):
    """Community schedule file: games keyed by season year."""

    model_config = ConfigDict(extra='forbid')

    games: dict[int, list[GameEntry]]


class AnalyticsConfig(BaseModel):
    """Analytics configuration settings."""

    model_config = ConfigDict(extra='forbid')

    current_year: int = Field(CURRENT_YEAR, ge=2000, le=2100)
    prior_year: int = Field(PRIOR_YEAR, ge=2000, le=2100)
    anchor_weekday: int = Field(ANCHOR_WEEKDAY, ge=0, le=6)
    min_games_for_stats: int = Field(3, ge=0)
    min_overlap: int = Field(2, ge=0)
    buddies_top_n: int = Field(5, ge=1)
    min_their_games: int = Field(3, ge=0)
    language: str = 'bg'

    @field_validator('language')
    @classmethod
    def validate_language(cls, v):
        """Ensure the language has month/season tables."""
        if v not in SUPPORTED_LANGUAGES:
            raise ValueError(f'Unsupported language: {v}')
        return v

    @field_validator('prior_year')
    @classmethod
    def validate_prior_year(cls, v, info):
        """Prior season must come before the current one."""
        current = info.data.get('current_year')
        if current is not None and v >= current:
            raise ValueError(f'prior_year ({v}) must be before current_year ({current})')
        return v
