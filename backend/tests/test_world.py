import random

import pytest

from pixelquiz.models import GameSettings, Rect, parse_rect, parse_zones
from pixelquiz.services.quiz.world import DIRECTIONS, NAME_PLACEHOLDER, World, sanitize_name


@pytest.mark.parametrize('raw, expected', [
    ('ana!! ', 'ANA'),
    ('  bob  ', 'BOB'),
    ('verylongname', 'VERYLONG'),
    ('r2 d2', 'R2 D2'),
    ('!!!', NAME_PLACEHOLDER),
    ('', NAME_PLACEHOLDER),
    (None, NAME_PLACEHOLDER),
    ('abcdefg hij', 'ABCDEFG'),
])
def test_sanitize_name(raw, expected):
    assert sanitize_name(raw) == expected


def test_rect_contains_edges_and_clamp():
    r = Rect(0, 0, 10, 10)
    assert r.contains(0, 0) and r.contains(10, 10)
    assert not r.contains(10.1, 5)
    assert r.clamp(-5, 20) == (0, 10)


def test_parse_rect_rejects_bad_input():
    assert parse_rect('1,2,3,4') == Rect(1, 2, 3, 4)
    with pytest.raises(ValueError):
        parse_rect('1,2,3')
    with pytest.raises(ValueError):
        parse_rect('5,5,1,1')


def test_parse_zones_validates_geometry():
    zones = parse_zones('[{"x": 0, "y": 0, "width": 10, "height": 10, "answer": "a"}]')
    assert zones[0].answer == 'A'
    with pytest.raises(ValueError):
        parse_zones([
            {'x': 0, 'y': 0, 'width': 10, 'height': 10, 'answer': 'A'},
            {'x': 5, 'y': 5, 'width': 10, 'height': 10, 'answer': 'B'},
        ])
    with pytest.raises(ValueError):
        parse_zones([
            {'x': 0, 'y': 0, 'width': 10, 'height': 10, 'answer': 'A'},
            {'x': 50, 'y': 0, 'width': 10, 'height': 10, 'answer': 'A'},
        ])
    with pytest.raises(ValueError):
        parse_zones([])


def test_three_zone_layout_is_accepted():
    zones = parse_zones([
        {'x': 100, 'y': 50, 'width': 150, 'height': 120, 'answer': 'A'},
        {'x': 330, 'y': 50, 'width': 150, 'height': 120, 'answer': 'B'},
        {'x': 560, 'y': 50, 'width': 150, 'height': 120, 'answer': 'C'},
    ])
    settings = GameSettings(zones=zones)
    assert settings.answer_letters == ['A', 'B', 'C']


def test_add_player_spawns_in_band_and_replaces_same_sid():
    world = World(GameSettings(), random.Random(1))
    first = world.add_player('s1', 'ana')
    assert world.settings.spawn_band.contains(first.x, first.y)
    first.score = 300
    second = world.add_player('s1', 'bob')
    assert list(world.players) == ['s1']
    assert world.players['s1'] is second
    assert second.name == 'BOB'


def test_positions_stay_in_bounds_for_any_moves():
    settings = GameSettings()
    world = World(settings, random.Random(5))
    players = [world.add_player(f"s{i}", f"p{i}") for i in range(5)]
    rng = random.Random(99)
    for _ in range(2000):
        player = rng.choice(players)
        world.step_player(player, rng.choice(list(DIRECTIONS)))
        assert settings.world.contains(player.x, player.y)


def test_zone_lookup_uses_configured_zones():
    world = World(GameSettings(), random.Random(1))
    assert world.zone_at(110, 60) == 'A'
    assert world.zone_at(330, 170) == 'B'
    assert world.zone_at(240, 100) is None
    assert world.zone_at(400, 400) is None
