from typing import Iterable

from pixelquiz import socketio
from pixelquiz.services.quiz import GameSession
from pixelquiz.services.quiz.messages import Action, Audience, Evict, resolve_target


def deliver(actions: Iterable[Action], session: GameSession, namespace: str = '/') -> None:
    """Turn addressed messages into Socket.IO traffic.

    Callers hold ``session.lock`` so role lookups and emits see the same state.
    Role-addressed messages whose role is unbound are dropped.
    """
    for action in actions:
        if isinstance(action, Evict):
            session.logger.info(f"[evict] sid={action.sid}")
            socketio.server.disconnect(action.sid, namespace=namespace)
            continue
        if action.audience is Audience.ALL:
            socketio.emit(action.event, action.payload, namespace=namespace)
            continue
        target = resolve_target(action, session.roles.teacher_sid, session.roles.display_sid)
        if target is None:
            continue
        socketio.emit(action.event, action.payload, to=target, namespace=namespace)
