"""Plain data records shared by the quiz session, the bee engine and the API."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with inclusive edges."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def overlaps(self, other: 'Rect') -> bool:
        return not (
            self.max_x < other.min_x
            or other.max_x < self.min_x
            or self.max_y < other.min_y
            or other.max_y < self.min_y
        )

    def clamp(self, x: float, y: float) -> Tuple[float, float]:
        return (
            max(self.min_x, min(x, self.max_x)),
            max(self.min_y, min(y, self.max_y)),
        )

    def random_point(self, rng) -> Tuple[float, float]:
        return (
            rng.uniform(self.min_x, self.max_x),
            rng.uniform(self.min_y, self.max_y),
        )


@dataclass(frozen=True)
class AnswerZone:
    answer: str
    area: Rect

    def to_dict(self):
        return {
            'x': self.area.min_x,
            'y': self.area.min_y,
            'width': self.area.max_x - self.area.min_x,
            'height': self.area.max_y - self.area.min_y,
            'answer': self.answer,
        }


@dataclass(frozen=True)
class Sprite:
    id: int
    color: str
    pattern: str

    def to_dict(self):
        return {'id': self.id, 'color': self.color, 'pattern': self.pattern}


SPRITES: Tuple[Sprite, ...] = (
    Sprite(1, '#FF6B6B', 'robot'),
    Sprite(2, '#4ECDC4', 'ghost'),
    Sprite(3, '#45B7D1', 'alien'),
    Sprite(4, '#F9CA24', 'knight'),
    Sprite(5, '#6C5CE7', 'wizard'),
    Sprite(6, '#A8E6CF', 'ninja'),
    Sprite(7, '#FFB6C1', 'cat'),
    Sprite(8, '#98D8C8', 'bear'),
)


@dataclass(frozen=True)
class Question:
    id: int
    question: str
    options: Tuple[str, ...]
    correct_answer: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Question':
        correct = data.get('correctAnswer', data.get('correct_answer'))
        if not correct:
            raise ValueError(f"Question {data.get('id')!r} has no correct answer")
        return cls(
            id=int(data['id']),
            question=str(data['question']),
            options=tuple(str(o) for o in data.get('options', [])),
            correct_answer=str(correct).upper(),
        )

    def to_dict(self):
        return {
            'id': self.id,
            'question': self.question,
            'options': list(self.options),
            'correctAnswer': self.correct_answer,
        }


@dataclass
class Player:
    id: str
    name: str
    x: float
    y: float
    sprite: Sprite
    score: int = 0
    current_answer: Optional[str] = None
    answered_at: Optional[int] = None
    last_move_at: Optional[float] = None

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'x': self.x,
            'y': self.y,
            'score': self.score,
            'currentAnswer': self.current_answer,
            'answeredAt': self.answered_at,
            'sprite': self.sprite.to_dict(),
        }


@dataclass
class Bee:
    x: float
    y: float
    target_x: float
    target_y: float
    speed: float

    def to_dict(self):
        return {
            'x': self.x,
            'y': self.y,
            'targetX': self.target_x,
            'targetY': self.target_y,
            'speed': self.speed,
        }


DEFAULT_ZONES = [
    {'x': 100, 'y': 50, 'width': 120, 'height': 120, 'answer': 'A'},
    {'x': 270, 'y': 50, 'width': 120, 'height': 120, 'answer': 'B'},
    {'x': 460, 'y': 50, 'width': 120, 'height': 120, 'answer': 'C'},
    {'x': 630, 'y': 50, 'width': 120, 'height': 120, 'answer': 'D'},
]


@dataclass
class GameSettings:
    """Tunables for one session, normally built from the Flask config."""

    world: Rect = Rect(50, 50, 800, 550)
    spawn_band: Rect = Rect(100, 450, 750, 550)
    zones: List[AnswerZone] = field(default_factory=lambda: parse_zones(DEFAULT_ZONES))
    move_step: float = 20
    move_interval_ms: int = 50
    score_award: int = 100
    bee_start: Tuple[float, float] = (425, 300)
    bee_wander: Rect = Rect(50, 200, 800, 550)
    bee_speed: float = 6
    bee_retarget_chance: float = 0.3
    bee_collision_radius: float = 30

    @property
    def answer_letters(self) -> List[str]:
        return sorted(z.answer for z in self.zones)


def parse_rect(value) -> Rect:
    if isinstance(value, Rect):
        return value
    if isinstance(value, str):
        value = [v for v in value.split(',') if v.strip()]
    parts = [float(v) for v in value]
    if len(parts) != 4:
        raise ValueError(f"Expected min_x,min_y,max_x,max_y, got {value!r}")
    min_x, min_y, max_x, max_y = parts
    if min_x > max_x or min_y > max_y:
        raise ValueError(f"Degenerate rectangle {value!r}")
    return Rect(min_x, min_y, max_x, max_y)


def parse_point(value) -> Tuple[float, float]:
    if isinstance(value, str):
        value = value.split(',')
    x, y = (float(v) for v in value)
    return x, y


def parse_zones(value) -> List[AnswerZone]:
    """Build answer zones from JSON text or a list of dicts.

    Each zone must name a distinct letter and no two rectangles may overlap.
    """
    if isinstance(value, str):
        value = json.loads(value)
    zones = []
    for raw in value:
        x, y = float(raw['x']), float(raw['y'])
        area = Rect(x, y, x + float(raw['width']), y + float(raw['height']))
        zones.append(AnswerZone(answer=str(raw['answer']).upper(), area=area))
    letters = [z.answer for z in zones]
    if not zones:
        raise ValueError('At least one answer zone is required')
    if len(set(letters)) != len(letters):
        raise ValueError(f"Duplicate answer zone letters: {letters}")
    for i, zone in enumerate(zones):
        for other in zones[i + 1:]:
            if zone.area.overlaps(other.area):
                raise ValueError(f"Answer zones {zone.answer} and {other.answer} overlap")
    return zones


def settings_from_config(cfg) -> GameSettings:
    zones = cfg.get('ANSWER_ZONES') or DEFAULT_ZONES
    return GameSettings(
        world=parse_rect(cfg.get('WORLD_BOUNDS', '50,50,800,550')),
        spawn_band=parse_rect(cfg.get('SPAWN_BAND', '100,450,750,550')),
        zones=parse_zones(zones),
        move_step=float(cfg.get('MOVE_STEP', 20)),
        move_interval_ms=int(cfg.get('MOVE_INTERVAL_MS', 50)),
        score_award=int(cfg.get('SCORE_AWARD', 100)),
        bee_start=parse_point(cfg.get('BEE_START', '425,300')),
        bee_wander=parse_rect(cfg.get('BEE_WANDER', '50,200,800,550')),
        bee_speed=float(cfg.get('BEE_SPEED', 6)),
        bee_retarget_chance=float(cfg.get('BEE_RETARGET_CHANCE', 0.3)),
        bee_collision_radius=float(cfg.get('BEE_COLLISION_RADIUS', 30)),
    )
