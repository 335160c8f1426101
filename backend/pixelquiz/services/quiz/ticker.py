from pixelquiz import socketio


def start_ticker(app) -> bool:
    """Start the background bee loop for this app, once.

    - No-ops in TESTING mode or when TICKER_ENABLED is off
    - Each tick runs under the session lock inside an app context
    - Free running: the loop never waits on clients
    """
    if app.config.get('TESTING') or not app.config.get('TICKER_ENABLED', True):
        return False
    state = app.extensions.setdefault('pixelquiz_ticker', {'started': False})
    if state['started']:
        return False
    state['started'] = True

    interval = max(1, int(app.config.get('TICK_INTERVAL_MS', 50))) / 1000.0
    namespace = app.config.get('SOCKETIO_NAMESPACE', '/')
    session = app.extensions['pixelquiz']

    def _worker():
        from pixelquiz.broadcast import deliver

        app.logger.info(f"[ticker-start] interval={interval}s namespace={namespace}")
        while True:
            socketio.sleep(interval)
            with app.app_context():
                with session.lock:
                    try:
                        deliver(session.tick(), session, namespace)
                    except Exception:
                        app.logger.exception('[ticker-error]')

    socketio.start_background_task(_worker)
    return True
