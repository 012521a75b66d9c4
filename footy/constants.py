"""Constants and mappings for the footy analytics engine."""

# Seasons tracked by default (prior season is the comparison baseline)
CURRENT_YEAR = 2025
PRIOR_YEAR = 2024

# Weekly game day (datetime.weekday(): Monday=0 ... Sunday=6)
ANCHOR_WEEKDAY = 5

# Month segment of a "DD/MM" date -> month key
MONTH_MAP = {
    1: 'january',
    2: 'february',
    3: 'march',
    4: 'april',
    5: 'may',
    6: 'june',
    7: 'july',
    8: 'august',
    9: 'september',
    10: 'october',
    11: 'november',
    12: 'december',
}

# Monthly buckets only recognize the zero-padded segment ('04', never '4')
MONTH_SEGMENTS = {f'{number:02d}': key for number, key in MONTH_MAP.items()}

# Calendar order of month keys
MONTH_KEYS = list(MONTH_MAP.values())

# Community schedule records label months in title case ('March')
MONTH_LABELS = [key.capitalize() for key in MONTH_KEYS]

SEASON_MONTHS = {
    'winter': ('december', 'january', 'february'),
    'spring': ('march', 'april', 'may'),
    'summer': ('june', 'july', 'august'),
    'autumn': ('september', 'october', 'november'),
}

# Rank tiers, checked in order: (lowest rank, highest rank or None, tier key)
RANK_TIERS = [
    (1, 1, '1'),
    (2, 5, '2-5'),
    (6, 10, '6-10'),
    (11, 20, '11-20'),
    (21, 30, '21-30'),
    (31, None, '31+'),
]

# Football buddies defaults
MIN_GAMES_FOR_STATS = 3
MIN_OVERLAP = 2
MIN_BUDDY_GAMES = 2
MIN_THEIR_GAMES = 3
BUDDIES_TOP_N = 5

# Buddies whose affinity differs by no more than this are ordered by influence
AFFINITY_TIE_THRESHOLD = 0.1

SUPPORTED_LANGUAGES = ('bg', 'en')
