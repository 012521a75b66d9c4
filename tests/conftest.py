"""Shared two-season fixture.

2025 game days are the March Saturdays (01, 08, 15, 22, 29), two
Wednesdays (05/03, 12/03) and Saturday 05/04; 19/04 was cancelled.
"""

import pytest

from footy.models import CommunityGameRecord, PlayerRecord
from footy.ranking import process_player_data

PRIOR_2024 = ('06/01', '13/01', '20/01', '27/01', '03/02', '10/02')


def make_raw_players():
    return [
        PlayerRecord('Carol', {2025: ('08/03', '12/03', '15/03')}),
        PlayerRecord('Dan', {2024: ('06/01', '13/01')}),
        PlayerRecord('Bob', {2025: ('01/03', '08/03', '15/03', '22/03', '05/04'), 2024: PRIOR_2024}),
        PlayerRecord('Alice', {
            2025: ('01/03', '05/03', '08/03', '15/03', '22/03', '29/03', '05/04'),
            2024: PRIOR_2024[:4],
        }),
    ]


def make_games_by_year():
    march = ['01/03', '05/03', '08/03', '12/03', '15/03', '22/03', '29/03']
    current = [CommunityGameRecord(d, 'March', True, players=10, field='Arena') for d in march]
    current.append(CommunityGameRecord('05/04', 'April', True, players=12, field='Arena'))
    current.append(CommunityGameRecord('19/04', 'April', False))
    prior = [
        CommunityGameRecord(d, 'January' if d.endswith('/01') else 'February', True, players=11)
        for d in PRIOR_2024
    ]
    return {2024: prior, 2025: current}


@pytest.fixture
def raw_players():
    return make_raw_players()


@pytest.fixture
def games_by_year():
    return make_games_by_year()


@pytest.fixture
def processed_players(raw_players):
    return process_player_data(raw_players, 2025, 2024)


@pytest.fixture
def by_name(processed_players):
    return {player.name: player for player in processed_players}
