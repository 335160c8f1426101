import json

from pixelquiz import create_app
from conftest import TestConfig


def test_index_and_health(client):
    assert client.get('/').status_code == 200
    res = client.get('/health')
    assert res.status_code == 200
    assert res.get_json() == {'status': 'ok'}


def test_questions_endpoint_lists_bank(client):
    res = client.get('/api/questions')
    assert res.status_code == 200
    data = res.get_json()
    assert len(data) == 5
    assert data[0]['correctAnswer'] == 'A'
    assert data[0]['options'][0] == 'A: Plumber'


def test_game_status_reflects_session(flask_app, client):
    status = client.get('/api/game-status').get_json()
    assert status['isGameStarted'] is False
    assert status['displayConnected'] is False
    assert status['playerCount'] == 0
    assert status['currentQuestion'] is None

    session = flask_app.extensions['pixelquiz']
    session.connect_teacher('t')
    session.connect_display('d')
    session.start('t')
    session.advance_question('t')
    status = client.get('/api/game-status').get_json()
    assert status['isQuestionActive'] is True
    assert status['displayConnected'] is True
    assert status['currentQuestion']['id'] == 1


def test_join_url_uses_request_host(client):
    data = client.get('/api/join-url', base_url='http://quiz.local:3000').get_json()
    assert data == {'success': True, 'url': 'http://quiz.local:3000/play'}


def test_join_url_prefers_public_base_url():
    class PublicConfig(TestConfig):
        PUBLIC_BASE_URL = 'https://class.example.org/'

    app = create_app(PublicConfig)
    data = app.test_client().get('/api/join-url').get_json()
    assert data['url'] == 'https://class.example.org/play'


def test_question_bank_file_and_zone_config(tmp_path):
    bank = tmp_path / 'bank.json'
    bank.write_text(json.dumps([
        {'id': 7, 'question': 'Sky?', 'options': ['A: Blue', 'B: Red', 'C: Green'], 'correctAnswer': 'a'},
    ]))

    class CustomConfig(TestConfig):
        QUESTION_BANK_PATH = str(bank)
        ANSWER_ZONES = json.dumps([
            {'x': 100, 'y': 50, 'width': 150, 'height': 120, 'answer': 'A'},
            {'x': 330, 'y': 50, 'width': 150, 'height': 120, 'answer': 'B'},
            {'x': 560, 'y': 50, 'width': 150, 'height': 120, 'answer': 'C'},
        ])

    app = create_app(CustomConfig)
    session = app.extensions['pixelquiz']
    assert [q.id for q in session.questions] == [7]
    assert session.questions[0].correct_answer == 'A'
    assert session.settings.answer_letters == ['A', 'B', 'C']


def test_questions_cli_command(flask_app):
    result = flask_app.test_cli_runner().invoke(args=['questions'])
    assert result.exit_code == 0
    assert "[A] What is Mario's job?" in result.output
    assert '5 question(s)' in result.output
