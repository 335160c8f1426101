import os

from pixelquiz import create_app, socketio

app = create_app()

if __name__ == '__main__':
    port = int(os.environ.get('PORT', '3000'))
    app.logger.info(f"[boot] Pixel Quiz listening on http://localhost:{port}")
    # Use SocketIO server to enable websockets in dev
    socketio.run(app, host='0.0.0.0', port=port, debug=True, allow_unsafe_werkzeug=True)
