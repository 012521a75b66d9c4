"""Loading inputs and running the full analytics pipeline.

Whether a players file holds raw attendance or already-processed output is
decided by the caller, once, through load_players(processed=...). Nothing
downstream inspects a record to guess which kind it is.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from .buddies import get_football_buddies, get_players_you_influence
from .community import calculate_community_stats
from .formatting import format_month_name, format_season_name
from .models import (
    CommunityGameRecord,
    CommunityStats,
    FootballBuddy,
    PlayerRecord,
    ProcessedPlayer,
    QuizSlide,
)
from .quiz import generate_quiz_questions
from .ranking import process_player_data
from .schemas import AnalyticsConfig, CommunityScheduleFile, ProcessedRosterFile, RosterFile
from .utils import load_json, require_sequence, save_json

logger = logging.getLogger('footy.pipeline')


@dataclass
class AnalyticsSnapshot:
    """Everything derived from one set of raw inputs."""
    config: AnalyticsConfig
    players: List[ProcessedPlayer] = field(default_factory=list)
    community: Optional[CommunityStats] = None
    games_by_year: Dict[int, List[CommunityGameRecord]] = field(default_factory=dict)

    def games(self, year: int) -> List[CommunityGameRecord]:
        return list(self.games_by_year.get(year, []))

    def find_player(self, name: str) -> Optional[ProcessedPlayer]:
        for player in self.players:
            if player.name == name:
                return player
        return None

    def _require_player(self, name: str) -> ProcessedPlayer:
        player = self.find_player(name)
        if player is None:
            raise KeyError(f'Unknown player: {name}')
        return player

    def football_buddies(self, name: str) -> List[FootballBuddy]:
        """Buddies for one player, using the configured thresholds."""
        return get_football_buddies(
            self._require_player(name),
            self.players,
            self.config.current_year,
            min_games_for_stats=self.config.min_games_for_stats,
            min_overlap=self.config.min_overlap,
            top_n=self.config.buddies_top_n,
        )

    def players_influenced(self, name: str) -> List[FootballBuddy]:
        return get_players_you_influence(
            self._require_player(name),
            self.players,
            self.config.current_year,
            min_their_games=self.config.min_their_games,
            top_n=self.config.buddies_top_n,
        )

    def quiz(self, name: str) -> List[QuizSlide]:
        """Quiz slides for one player over the snapshot's two seasons."""
        return generate_quiz_questions(
            self._require_player(name),
            self.players,
            self.games(self.config.prior_year),
            self.games(self.config.current_year),
            current_year=self.config.current_year,
            prior_year=self.config.prior_year,
            min_games_for_stats=self.config.min_games_for_stats,
            min_overlap=self.config.min_overlap,
        )

    def month_name(self, month: str) -> str:
        """Month key in the configured display language."""
        return format_month_name(month, self.config.language)

    def season_name(self, season: str) -> str:
        return format_season_name(season, self.config.language)


def load_players(path: Path | str, processed: bool = False) -> List[PlayerRecord] | List[ProcessedPlayer]:
    """
    Load a players file.

    Args:
        path: Path to the JSON file
        processed: False for raw attendance ({"players": [{name, datesByYear}]}),
            True for a file written by save_processed_players

    Returns:
        PlayerRecord list (raw) or ProcessedPlayer list (processed)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file doesn't match the requested kind
    """
    if processed:
        cached = load_json(path, schema=ProcessedRosterFile)
        logger.info(f'Loaded {len(cached.players)} processed players from {path}')
        return [entry.to_processed() for entry in cached.players]

    roster = load_json(path, schema=RosterFile)
    logger.info(f'Loaded {len(roster.players)} players from {path}')
    return [entry.to_record() for entry in roster.players]


def load_community_games(path: Path | str) -> Dict[int, List[CommunityGameRecord]]:
    """Load the community schedule, keyed by season year."""
    schedule = load_json(path, schema=CommunityScheduleFile)
    games = {year: [entry.to_record() for entry in entries] for year, entries in schedule.games.items()}
    logger.info(f'Loaded community schedule for seasons: {sorted(games)}')
    return games


def save_processed_players(path: Path | str, players: Sequence[ProcessedPlayer]) -> None:
    """Write processed players in the format load_players(processed=True) reads."""
    require_sequence(players, 'players')
    save_json(path, {'players': list(players)})


def build_snapshot(
    players: Sequence[PlayerRecord],
    games_by_year: Mapping[int, Sequence[CommunityGameRecord]],
    config: Optional[AnalyticsConfig] = None,
) -> AnalyticsSnapshot:
    """
    Run the whole pipeline over raw inputs.

    Args:
        players: Raw player records
        games_by_year: Community schedule keyed by season
        config: Settings (default: AnalyticsConfig defaults)

    Returns:
        AnalyticsSnapshot with processed players and community stats
    """
    config = config or AnalyticsConfig()
    require_sequence(players, 'players')

    processed = process_player_data(
        players,
        current_year=config.current_year,
        prior_year=config.prior_year,
        anchor_weekday=config.anchor_weekday,
    )
    community = calculate_community_stats(games_by_year, config.current_year, config.prior_year)

    logger.info(
        f'Snapshot {config.current_year}: {len(processed)} players, '
        f'{community.current.games_played} games played'
    )
    return AnalyticsSnapshot(
        config=config,
        players=processed,
        community=community,
        games_by_year={year: list(games) for year, games in games_by_year.items()},
    )
