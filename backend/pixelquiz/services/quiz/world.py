import random
import re
from typing import Dict, List, Optional, Tuple

from pixelquiz.models import SPRITES, Bee, GameSettings, Player

NAME_MAX_LEN = 8
NAME_PLACEHOLDER = 'PLAYER'
_NAME_DISALLOWED = re.compile(r'[^A-Za-z0-9 ]+')

DIRECTIONS = {
    'up': (0, -1),
    'down': (0, 1),
    'left': (-1, 0),
    'right': (1, 0),
}


def sanitize_name(raw) -> str:
    """Uppercase letters/digits/spaces only, at most 8 characters."""
    text = _NAME_DISALLOWED.sub('', str(raw or '')).strip()
    text = text[:NAME_MAX_LEN].strip().upper()
    return text or NAME_PLACEHOLDER


class World:
    """Players, the bee and the static geometry they move through.

    Players are keyed by connection sid in join order; that order is what
    result rankings fall back on for ties.
    """

    def __init__(self, settings: GameSettings, rng: Optional[random.Random] = None):
        self.settings = settings
        self.rng = rng or random.Random()
        self.players: Dict[str, Player] = {}
        sx, sy = settings.world.clamp(*settings.bee_start)
        self.bee = Bee(x=sx, y=sy, target_x=sx, target_y=sy, speed=settings.bee_speed)

    def spawn_point(self) -> Tuple[float, float]:
        x, y = self.settings.spawn_band.random_point(self.rng)
        return self.settings.world.clamp(x, y)

    def add_player(self, sid: str, raw_name) -> Player:
        # A second join from the same connection replaces its player
        self.players.pop(sid, None)
        x, y = self.spawn_point()
        player = Player(
            id=sid,
            name=sanitize_name(raw_name),
            x=x,
            y=y,
            sprite=self.rng.choice(SPRITES),
        )
        self.players[sid] = player
        return player

    def remove_player(self, sid: str) -> Optional[Player]:
        return self.players.pop(sid, None)

    def get_player(self, sid: str) -> Optional[Player]:
        return self.players.get(sid)

    def roster(self) -> List[dict]:
        return [p.to_dict() for p in self.players.values()]

    def step_player(self, player: Player, direction: str) -> None:
        dx, dy = DIRECTIONS[direction]
        step = self.settings.move_step
        player.x, player.y = self.settings.world.clamp(player.x + dx * step, player.y + dy * step)

    def respawn(self, player: Player) -> None:
        player.x, player.y = self.spawn_point()

    def zone_at(self, x: float, y: float) -> Optional[str]:
        for zone in self.settings.zones:
            if zone.area.contains(x, y):
                return zone.answer
        return None

    def reset_bee(self) -> None:
        x, y = self.settings.world.clamp(*self.settings.bee_start)
        self.bee.x, self.bee.y = x, y
        self.bee.target_x, self.bee.target_y = x, y

    def reset_for_question(self) -> None:
        """Clear per-question answers and scatter everyone back to the spawn band."""
        self.reset_bee()
        for player in self.players.values():
            player.current_answer = None
            player.answered_at = None
            self.respawn(player)
