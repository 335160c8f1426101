"""Quiz domain services: world, roles, scoring, bee motion and the tick loop.

This package contains pure(ish) domain logic that is driven by the socket
handlers and the background ticker, keeping transport concerns separated
from core game mechanics. Operations return addressed messages instead of
emitting them.
"""

from .session import GameSession, Phase

__all__ = ['GameSession', 'Phase']
