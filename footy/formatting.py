"""Display names for months and seasons.

The language is always passed in by the caller; nothing here remembers a
current language.
"""

from .constants import SUPPORTED_LANGUAGES

MONTH_NAMES = {
    'bg': {
        'january': 'Януари',
        'february': 'Февруари',
        'march': 'Март',
        'april': 'Април',
        'may': 'Май',
        'june': 'Юни',
        'july': 'Юли',
        'august': 'Август',
        'september': 'Септември',
        'october': 'Октомври',
        'november': 'Ноември',
        'december': 'Декември',
    },
    'en': {
        'january': 'January',
        'february': 'February',
        'march': 'March',
        'april': 'April',
        'may': 'May',
        'june': 'June',
        'july': 'July',
        'august': 'August',
        'september': 'September',
        'october': 'October',
        'november': 'November',
        'december': 'December',
    },
}

SEASON_NAMES = {
    'bg': {
        'winter': 'Зима',
        'spring': 'Пролет',
        'summer': 'Лято',
        'autumn': 'Есен',
    },
    'en': {
        'winter': 'Winter',
        'spring': 'Spring',
        'summer': 'Summer',
        'autumn': 'Autumn',
    },
}

SEASON_EMOJIS = {
    'winter': '❄️',
    'spring': '🌸',
    'summer': '☀️',
    'autumn': '🍂',
}


def _check_language(language: str) -> None:
    if language not in SUPPORTED_LANGUAGES:
        raise ValueError(f'Unsupported language: {language} (expected one of {", ".join(SUPPORTED_LANGUAGES)})')


def format_month_name(month: str, language: str) -> str:
    """Localized month name; unknown month keys are returned unchanged."""
    _check_language(language)
    return MONTH_NAMES[language].get(month, month)


def format_season_name(season: str, language: str) -> str:
    """Localized season name; unknown season keys are returned unchanged."""
    _check_language(language)
    return SEASON_NAMES[language].get(season, season)


def get_season_emoji(season: str) -> str:
    return SEASON_EMOJIS.get(season, '🌍')
