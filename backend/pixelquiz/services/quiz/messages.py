"""Addressed outbound messages.

Session operations describe *who* should hear about a change; the socket
layer decides *how* to deliver it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union


class Audience(Enum):
    ALL = 'all'
    SENDER = 'sender'
    TEACHER = 'teacher'
    DISPLAY = 'display'


@dataclass(frozen=True)
class Outbound:
    audience: Audience
    event: str
    payload: Any = field(default_factory=dict)
    # Only meaningful for Audience.SENDER
    target: Optional[str] = None


@dataclass(frozen=True)
class Evict:
    """Forcibly disconnect a connection that lost its role."""

    sid: str


Action = Union[Outbound, Evict]


def to_all(event: str, payload: Any = None) -> Outbound:
    return Outbound(Audience.ALL, event, {} if payload is None else payload)


def to_sender(sid: str, event: str, payload: Any = None) -> Outbound:
    return Outbound(Audience.SENDER, event, {} if payload is None else payload, target=sid)


def to_teacher(event: str, payload: Any = None) -> Outbound:
    return Outbound(Audience.TEACHER, event, {} if payload is None else payload)


def to_display(event: str, payload: Any = None) -> Outbound:
    return Outbound(Audience.DISPLAY, event, {} if payload is None else payload)


def resolve_target(action: Outbound, teacher_sid: Optional[str], display_sid: Optional[str]) -> Optional[str]:
    """Return the sid an addressed message goes to, or None for broadcast/undeliverable."""
    if action.audience is Audience.SENDER:
        return action.target
    if action.audience is Audience.TEACHER:
        return teacher_sid
    if action.audience is Audience.DISPLAY:
        return display_sid
    return None


def payloads(actions, event: str) -> Dict[Audience, list]:
    """Group the payloads of one event by audience. Handy for tests and logs."""
    grouped: Dict[Audience, list] = {}
    for action in actions:
        if isinstance(action, Outbound) and action.event == event:
            grouped.setdefault(action.audience, []).append(action.payload)
    return grouped
