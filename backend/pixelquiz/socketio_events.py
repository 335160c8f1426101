from flask import current_app, request
from pixelquiz import socketio
from pixelquiz.broadcast import deliver
from pixelquiz.services.quiz import GameSession
from pixelquiz.services.quiz.errors import InvalidJoin, PreconditionFailed, Unauthorized
from pixelquiz.services.quiz.messages import to_sender
from pixelquiz.services.quiz.ticker import start_ticker


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _session() -> GameSession:
    return current_app.extensions['pixelquiz']


def _namespace() -> str:
    return current_app.config.get('SOCKETIO_NAMESPACE', '/')


def _field(data, key):
    """Accept either {key: value} or a bare value as the event payload."""
    if isinstance(data, dict):
        return data.get(key)
    return data


def _dispatch(operation, *args) -> None:
    """Run one session operation for the calling connection and deliver its output.

    The whole read-modify-deliver step happens under the session lock, so
    socket events and bee ticks never interleave.
    """
    session = _session()
    sid = _get_sid()
    name = getattr(operation, '__name__', 'operation')
    with session.lock:
        try:
            actions = operation(sid, *args)
        except PreconditionFailed as exc:
            current_app.logger.info(f"[rejected] op={name} sid={sid} reason={exc.reason}")
            actions = [to_sender(sid, 'error', exc.to_dict())]
        except InvalidJoin as exc:
            current_app.logger.info(f"[join-failed] sid={sid} reason={exc.reason}")
            actions = [to_sender(sid, 'join-failed', exc.to_dict())]
        except Unauthorized as exc:
            current_app.logger.debug(f"[ignored] op={name} {exc}")
            return
        except Exception:
            current_app.logger.exception(f"[handler-error] op={name} sid={sid}")
            return
        deliver(actions, session, _namespace())


def handle_connect(auth=None):
    start_ticker(current_app._get_current_object())
    current_app.logger.debug(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    _dispatch(_session().disconnect)


def handle_teacher_connect(data=None):
    _dispatch(_session().connect_teacher)


def handle_display_connect(data=None):
    _dispatch(_session().connect_display)


def handle_student_join_request(data=None):
    _dispatch(_session().request_join)


def handle_confirm_join(data=None):
    _dispatch(_session().confirm_join, _field(data, 'name'))


def handle_player_move(data=None):
    _dispatch(_session().move, _field(data, 'direction'))


def handle_teacher_start_game(data=None):
    _dispatch(_session().start)


def handle_teacher_next_question(data=None):
    _dispatch(_session().advance_question)


def handle_teacher_show_results(data=None):
    _dispatch(_session().reveal_results)


EVENT_HANDLERS = {
    'connect': handle_connect,
    'disconnect': handle_disconnect,
    'teacher-connect': handle_teacher_connect,
    'display-connect': handle_display_connect,
    'student-join-request': handle_student_join_request,
    'confirm-join': handle_confirm_join,
    'player-move': handle_player_move,
    'teacher-start-game': handle_teacher_start_game,
    'teacher-next-question': handle_teacher_next_question,
    'teacher-show-results': handle_teacher_show_results,
}


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register every quiz Socket.IO event on the given namespace."""
    for event, handler in EVENT_HANDLERS.items():
        socketio.on_event(event, handler, namespace=namespace)
