from .models import (
    GameDate,
    PlayerRecord,
    ProcessedPlayer,
    CommunityGameRecord,
    CommunityStats,
    YearStats,
    FootballBuddy,
    StreakData,
    RangeQuestion,
    ChoiceQuestion,
    QuizSlide,
    QuizAnswer,
    QuizResult,
    parse_game_date,
)
from .ranking import (
    calculate_total,
    calculate_monthly_games,
    calculate_ranks,
    dense_rank,
    process_player_data,
    get_rank_tier,
    get_rank_change,
    get_best_worst_months,
    get_best_season,
)
from .streaks import (
    calculate_longest_streak,
    calculate_community_streak,
    calculate_peak_performance,
)
from .buddies import (
    get_football_buddies,
    get_players_you_influence,
    calculate_dynamic_duos,
    calculate_rare_duos,
    calculate_social_butterfly,
)
from .community import calculate_year_stats, calculate_community_stats
from .quiz import (
    generate_quiz_questions,
    calculate_quiz_results,
    default_answers,
    get_all_questions,
)
from .pipeline import (
    AnalyticsSnapshot,
    build_snapshot,
    load_players,
    load_community_games,
    save_processed_players,
)

__all__ = [
    # Models
    'GameDate',
    'PlayerRecord',
    'ProcessedPlayer',
    'CommunityGameRecord',
    'CommunityStats',
    'YearStats',
    'FootballBuddy',
    'StreakData',
    'RangeQuestion',
    'ChoiceQuestion',
    'QuizSlide',
    'QuizAnswer',
    'QuizResult',
    'parse_game_date',
    # Ranking & aggregation
    'calculate_total',
    'calculate_monthly_games',
    'calculate_ranks',
    'dense_rank',
    'process_player_data',
    'get_rank_tier',
    'get_rank_change',
    'get_best_worst_months',
    'get_best_season',
    # Streaks
    'calculate_longest_streak',
    'calculate_community_streak',
    'calculate_peak_performance',
    # Football buddies
    'get_football_buddies',
    'get_players_you_influence',
    'calculate_dynamic_duos',
    'calculate_rare_duos',
    'calculate_social_butterfly',
    # Community
    'calculate_year_stats',
    'calculate_community_stats',
    # Quiz
    'generate_quiz_questions',
    'calculate_quiz_results',
    'default_answers',
    'get_all_questions',
    # Pipeline
    'AnalyticsSnapshot',
    'build_snapshot',
    'load_players',
    'load_community_games',
    'save_processed_players',
]
