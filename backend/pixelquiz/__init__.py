from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

cors = CORS()
socketio = SocketIO(async_mode=None)


def _origins(value):
    if not value or value == '*':
        return '*'
    if isinstance(value, str):
        return [o.strip() for o in value.split(',') if o.strip()]
    return list(value)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _origins(flask_app.config.get('CORS_ORIGINS', '*'))
    cors.init_app(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One session per app; handlers and routes find it in app.extensions
    from pixelquiz.models import settings_from_config
    from pixelquiz.questions import load_question_bank
    from pixelquiz.services.quiz import GameSession
    flask_app.extensions['pixelquiz'] = GameSession(
        load_question_bank(flask_app.config.get('QUESTION_BANK_PATH')),
        settings=settings_from_config(flask_app.config),
        logger=flask_app.logger,
    )

    from pixelquiz.routes import main
    flask_app.register_blueprint(main)

    from pixelquiz.socketio_events import register_socketio_handlers
    register_socketio_handlers(flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    @click.command('questions')
    def questions_command():
        """Prints the loaded question bank in play order."""
        bank = flask_app.extensions['pixelquiz'].questions
        for number, q in enumerate(bank, start=1):
            click.echo(f"{number}. [{q.correct_answer}] {q.question}  ({' | '.join(q.options)})")
        click.echo(f"{len(bank)} question(s)")

    flask_app.cli.add_command(questions_command)

    return flask_app
