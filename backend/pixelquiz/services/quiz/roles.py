from typing import List, Optional

from .messages import Action, Evict


class RoleBindings:
    """Teacher and display slots, each held by at most one connection.

    Binding is a single swap: the previous holder (if any, and if it is a
    different connection) is reported for eviction before the new sid is
    stored.
    """

    def __init__(self):
        self.teacher_sid: Optional[str] = None
        self.display_sid: Optional[str] = None

    @property
    def display_connected(self) -> bool:
        return self.display_sid is not None

    def is_teacher(self, sid: str) -> bool:
        return sid is not None and sid == self.teacher_sid

    def is_display(self, sid: str) -> bool:
        return sid is not None and sid == self.display_sid

    def bind_teacher(self, sid: str) -> List[Action]:
        previous, self.teacher_sid = self.teacher_sid, sid
        return [Evict(previous)] if previous and previous != sid else []

    def bind_display(self, sid: str) -> List[Action]:
        previous, self.display_sid = self.display_sid, sid
        return [Evict(previous)] if previous and previous != sid else []

    def release(self, sid: str) -> List[str]:
        """Drop every role held by sid and return the names of the released roles."""
        released = []
        if self.is_teacher(sid):
            self.teacher_sid = None
            released.append('teacher')
        if self.is_display(sid):
            self.display_sid = None
            released.append('display')
        return released
