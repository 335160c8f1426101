import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Bee simulation tick (ms). The loop only runs outside TESTING.
    TICK_INTERVAL_MS = int(os.environ.get('TICK_INTERVAL_MS', '50'))
    TICKER_ENABLED = os.environ.get('TICKER_ENABLED', '1') == '1'
    # Minimum gap between accepted moves per player (ms). 0 disables.
    MOVE_INTERVAL_MS = int(os.environ.get('MOVE_INTERVAL_MS', '50'))
    MOVE_STEP = float(os.environ.get('MOVE_STEP', '20'))
    SCORE_AWARD = int(os.environ.get('SCORE_AWARD', '100'))
    # Rectangles are "min_x,min_y,max_x,max_y"
    WORLD_BOUNDS = os.environ.get('WORLD_BOUNDS', '50,50,800,550')
    SPAWN_BAND = os.environ.get('SPAWN_BAND', '100,450,750,550')
    BEE_START = os.environ.get('BEE_START', '425,300')
    BEE_WANDER = os.environ.get('BEE_WANDER', '50,200,800,550')
    BEE_SPEED = float(os.environ.get('BEE_SPEED', '6'))
    BEE_RETARGET_CHANCE = float(os.environ.get('BEE_RETARGET_CHANCE', '0.3'))
    BEE_COLLISION_RADIUS = float(os.environ.get('BEE_COLLISION_RADIUS', '30'))
    # JSON list of {x, y, width, height, answer}. Unset uses the A-D row.
    ANSWER_ZONES = os.environ.get('ANSWER_ZONES')
    # Optional JSON file replacing the built-in question bank
    QUESTION_BANK_PATH = os.environ.get('QUESTION_BANK_PATH')
    # Overrides the request host when building the student join URL
    PUBLIC_BASE_URL = os.environ.get('PUBLIC_BASE_URL')
