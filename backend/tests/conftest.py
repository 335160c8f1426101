import os
import random
import sys
import pytest

# Ensure the backend root (containing the `pixelquiz` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from pixelquiz import create_app, socketio
from pixelquiz.models import GameSettings, Question
from pixelquiz.questions import load_question_bank
from pixelquiz.services.quiz import GameSession


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    LOG_LEVEL = 'DEBUG'
    MOVE_INTERVAL_MS = 50
    PUBLIC_BASE_URL = None


class FakeClock:
    """Manually advanced stand-in for time.time."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds=1.0):
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def session(clock):
    return GameSession(load_question_bank(), settings=GameSettings(), rng=random.Random(7), clock=clock)


@pytest.fixture()
def two_question_session(clock):
    bank = [
        Question(id=0, question='Q0', options=('A: x', 'B: y', 'C: z', 'D: w'), correct_answer='B'),
        Question(id=1, question='Q1', options=('A: x', 'B: y', 'C: z', 'D: w'), correct_answer='A'),
    ]
    return GameSession(bank, settings=GameSettings(), rng=random.Random(11), clock=clock)


@pytest.fixture()
def started_session(session):
    """Teacher 't' and display 'd' bound, game started."""
    session.connect_teacher('t')
    session.connect_display('d')
    session.start('t')
    return session


@pytest.fixture()
def flask_app(clock):
    application = create_app(TestConfig)
    application.extensions['pixelquiz'].clock = clock
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio(flask_app):
    """Factory for extra Socket.IO test clients; all are disconnected on teardown."""
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


def received(test_client):
    """Drain a test client's queue into {event name: [payload, ...]}."""
    grouped = {}
    for pkt in test_client.get_received():
        payload = pkt['args'][0] if pkt['args'] else None
        grouped.setdefault(pkt['name'], []).append(payload)
    return grouped
