import logging
import random
import threading
import time
from enum import Enum
from typing import Callable, List, Optional

from pixelquiz.models import GameSettings, Question

from .errors import InvalidJoin, PreconditionFailed, Unauthorized
from .messages import Action, to_all, to_display, to_sender, to_teacher
from .motion import BeeEngine
from .roles import RoleBindings
from .scoring import compute_results, record_answer
from .world import DIRECTIONS, World


class Phase(str, Enum):
    NOT_STARTED = 'not_started'
    WAITING_FOR_PLAYERS = 'waiting_for_players'
    QUESTION_ACTIVE = 'question_active'
    RESULTS_SHOWN = 'results_shown'


# Phases in which students may join and walk around freely
_OPEN_PHASES = (Phase.WAITING_FOR_PLAYERS, Phase.RESULTS_SHOWN)


class GameSession:
    """The single authoritative quiz session.

    Owns every piece of mutable game state. Each public operation takes the
    acting connection's sid, mutates state, and returns the messages that
    should go out; nothing here talks to the network. Callers serialize
    access by holding ``lock`` around an operation and its delivery.
    """

    def __init__(
        self,
        questions: List[Question],
        settings: Optional[GameSettings] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
        logger: Optional[logging.Logger] = None,
    ):
        if not questions:
            raise ValueError('GameSession needs at least one question')
        self.questions = list(questions)
        self.settings = settings or GameSettings()
        self.rng = rng or random.Random()
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)
        self.lock = threading.RLock()

        self.world = World(self.settings, self.rng)
        self.bee_engine = BeeEngine(self.world)
        self.roles = RoleBindings()
        self.phase = Phase.NOT_STARTED
        self.question_index = -1
        self.current_question: Optional[Question] = None

    # ---- read side ----

    @property
    def display_connected(self) -> bool:
        return self.roles.display_connected

    @property
    def question_number(self) -> Optional[int]:
        return self.question_index + 1 if self.current_question else None

    def status(self) -> dict:
        return {
            'phase': self.phase.value,
            'isGameStarted': self.phase is not Phase.NOT_STARTED,
            'isWaitingForPlayers': self.phase in _OPEN_PHASES,
            'isQuestionActive': self.phase is Phase.QUESTION_ACTIVE,
            'displayConnected': self.display_connected,
            'playerCount': len(self.world.players),
            'questionNumber': self.question_number,
            'currentQuestion': self.current_question.to_dict() if self.current_question else None,
        }

    def results(self) -> dict:
        return compute_results(
            self.world.players.values(), self.current_question, self.settings.answer_letters
        )

    # ---- role binding ----

    def connect_teacher(self, sid: str) -> List[Action]:
        actions = self.roles.bind_teacher(sid)
        self.logger.info(f"[teacher-bind] sid={sid} evicted={[a.sid for a in actions]}")
        actions.append(to_sender(sid, 'teacher-state', self.status()))
        actions.append(to_sender(sid, 'display-status', {'connected': self.display_connected}))
        return actions

    def connect_display(self, sid: str) -> List[Action]:
        actions = self.roles.bind_display(sid)
        self.logger.info(f"[display-bind] sid={sid} evicted={[a.sid for a in actions]}")
        actions.append(to_all('display-status', {'connected': True}))
        snapshot = self.status()
        snapshot['players'] = self.world.roster()
        snapshot['bee'] = self.world.bee.to_dict()
        actions.append(to_sender(sid, 'game-state', snapshot))
        return actions

    def disconnect(self, sid: str) -> List[Action]:
        actions: List[Action] = []
        released = self.roles.release(sid)
        if released:
            self.logger.info(f"[role-release] sid={sid} roles={released}")
        if 'display' in released:
            actions.append(to_all('display-status', {'connected': False}))
        player = self.world.remove_player(sid)
        if player:
            self.logger.info(f"[player-left] sid={sid} name={player.name}")
            actions.append(to_all('player-left', {'id': sid}))
        return actions

    # ---- joining ----

    def request_join(self, sid: str) -> List[Action]:
        if self.phase is Phase.NOT_STARTED:
            return [to_sender(sid, 'game-not-started', {'message': 'Waiting for teacher to start...'})]
        if self.phase is Phase.QUESTION_ACTIVE:
            return [to_sender(sid, 'wait-for-round', {
                'message': 'Question in progress. You can join after this round!'
            })]
        return [to_sender(sid, 'can-join', {'message': 'Enter your name to join!'})]

    def confirm_join(self, sid: str, raw_name) -> List[Action]:
        if self.phase is Phase.NOT_STARTED:
            raise InvalidJoin('not_started', 'Game not started yet')
        if self.phase is Phase.QUESTION_ACTIVE:
            raise InvalidJoin('round_in_progress', 'Please wait for the current question to end')
        player = self.world.add_player(sid, raw_name)
        self.logger.info(f"[player-join] sid={sid} name={player.name} sprite={player.sprite.pattern}")
        return [
            to_all('player-joined', player.to_dict()),
            to_sender(sid, 'join-success', {'player': player.to_dict(), 'gameState': self.status()}),
        ]

    # ---- movement ----

    def _can_move(self, player) -> bool:
        if self.phase in _OPEN_PHASES:
            return True
        return self.phase is Phase.QUESTION_ACTIVE and player.current_answer is None

    def move(self, sid: str, direction) -> List[Action]:
        player = self.world.get_player(sid)
        if player is None:
            raise Unauthorized(f"move from {sid} without a player")
        if not isinstance(direction, str) or direction not in DIRECTIONS:
            return []
        if not self._can_move(player):
            return []

        now = self.clock()
        interval = self.settings.move_interval_ms / 1000.0
        if player.last_move_at is not None and now - player.last_move_at < interval:
            return []
        player.last_move_at = now

        old_x, old_y = player.x, player.y
        self.world.step_player(player, direction)

        entered = None
        if self.phase is Phase.QUESTION_ACTIVE and self.current_question is not None:
            letter = self.world.zone_at(player.x, player.y)
            if letter and record_answer(
                player, letter, self.current_question, self.settings.score_award, int(now * 1000)
            ):
                entered = letter
                self.logger.info(f"[answer] player={player.name} answer={letter} score={player.score}")

        actions: List[Action] = [to_all('player-moved', {
            'id': sid,
            'x': player.x,
            'y': player.y,
            'oldX': old_x,
            'oldY': old_y,
            'direction': direction,
            'currentAnswer': player.current_answer,
            'enteredZone': entered,
        })]
        if entered:
            actions.append(to_teacher('player-answered', {
                'playerId': sid,
                'playerName': player.name,
                'answer': entered,
            }))
        return actions

    # ---- teacher transitions ----

    def _require_teacher(self, sid: str, no_display_message: str = 'Display not connected!') -> None:
        if not self.roles.is_teacher(sid):
            raise Unauthorized(f"teacher event from non-teacher {sid}")
        if not self.display_connected:
            raise PreconditionFailed('display_not_connected', no_display_message)

    def start(self, sid: str) -> List[Action]:
        self._require_teacher(sid, 'Please open display first!')
        if self.phase is not Phase.NOT_STARTED:
            raise PreconditionFailed('already_started', 'Game already started!')
        self.phase = Phase.WAITING_FOR_PLAYERS
        self.logger.info('[game-start] waiting for players')
        return [to_all('game-started', {'message': 'Game started! Players can now join.'})]

    def advance_question(self, sid: str) -> List[Action]:
        self._require_teacher(sid)
        if self.phase is Phase.NOT_STARTED:
            raise PreconditionFailed('not_started', 'Start the game first!')
        if self.phase is Phase.QUESTION_ACTIVE:
            raise PreconditionFailed('question_active', 'Show results before the next question!')

        self.question_index = (self.question_index + 1) % len(self.questions)
        self.current_question = self.questions[self.question_index]
        self.phase = Phase.QUESTION_ACTIVE
        self.world.reset_for_question()
        self.logger.info(
            f"[question-start] index={self.question_index} id={self.current_question.id} "
            f"players={len(self.world.players)}"
        )
        return [
            to_display('show-question', {
                'question': self.current_question.to_dict(),
                'questionNumber': self.question_number,
                'players': self.world.roster(),
                'bee': self.world.bee.to_dict(),
            }),
            to_all('question-started', {
                'questionNumber': self.question_number,
                'totalQuestions': len(self.questions),
            }),
        ]

    def reveal_results(self, sid: str) -> List[Action]:
        self._require_teacher(sid)
        if self.phase is not Phase.QUESTION_ACTIVE:
            raise PreconditionFailed('no_active_question', 'No active question!')
        results = self.results()
        self.phase = Phase.RESULTS_SHOWN
        self.logger.info(f"[results] correct={results['correctAnswer']} stats={results['stats']}")
        return [
            to_display('show-results', results),
            to_sender(sid, 'show-results', results),
            to_all('results-shown', {'canJoinNow': True}),
        ]

    # ---- simulation ----

    def tick(self) -> List[Action]:
        if self.phase is not Phase.QUESTION_ACTIVE:
            return []
        actions = self.bee_engine.step()
        for action in actions:
            if action.event == 'bee-collision':
                self.logger.info(f"[bee-hit] player={action.payload['playerName']}")
        return actions
