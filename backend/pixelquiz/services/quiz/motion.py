import math
from typing import List

from pixelquiz.models import Player

from .messages import Action, to_all, to_display
from .world import World


class BeeEngine:
    """Moves the bee one tick at a time and knocks back players it touches."""

    def __init__(self, world: World):
        self.world = world

    def retarget(self) -> None:
        bee = self.world.bee
        bee.target_x, bee.target_y = self.world.settings.bee_wander.random_point(self.world.rng)

    def advance(self) -> None:
        settings = self.world.settings
        bee = self.world.bee
        if self.world.rng.random() < settings.bee_retarget_chance:
            self.retarget()
        dx = bee.target_x - bee.x
        dy = bee.target_y - bee.y
        distance = math.hypot(dx, dy)
        # Within one step of the target: hold still rather than overshoot
        if distance > bee.speed:
            x = bee.x + dx / distance * bee.speed
            y = bee.y + dy / distance * bee.speed
            bee.x, bee.y = settings.world.clamp(x, y)

    def collide(self) -> List[Player]:
        bee = self.world.bee
        radius = self.world.settings.bee_collision_radius
        hit = []
        for player in self.world.players.values():
            if player.current_answer is not None:
                continue
            if math.hypot(player.x - bee.x, player.y - bee.y) < radius:
                self.world.respawn(player)
                hit.append(player)
        return hit

    def step(self) -> List[Action]:
        self.advance()
        actions: List[Action] = [
            to_all('bee-collision', {
                'playerId': p.id,
                'playerName': p.name,
                'newX': p.x,
                'newY': p.y,
            })
            for p in self.collide()
        ]
        bee = self.world.bee
        actions.append(to_display('bee-update', {'x': bee.x, 'y': bee.y}))
        return actions
