from flask import Blueprint, current_app, jsonify, request

main = Blueprint('main', __name__)


def _session():
    return current_app.extensions['pixelquiz']


@main.route('/')
def index():
    return jsonify({'message': 'Pixel Quiz server is running'})


@main.route('/health')
def health():
    return jsonify({'status': 'ok'})


@main.route('/api/questions')
def get_questions():
    return jsonify([q.to_dict() for q in _session().questions])


@main.route('/api/game-status')
def get_game_status():
    session = _session()
    with session.lock:
        return jsonify(session.status())


@main.route('/api/join-url')
def get_join_url():
    """URL students open to join; the teacher page renders it as a QR code."""
    base = current_app.config.get('PUBLIC_BASE_URL') or request.host_url
    return jsonify({'success': True, 'url': f"{base.rstrip('/')}/play"})
