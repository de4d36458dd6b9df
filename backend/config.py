import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Session identity shown to every client; immutable for the process lifetime
    GAME_CODE = os.environ.get('GAME_CODE') or 'RSU150'
    # Comma-separated list of allowed origins, '*' for any
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '8080'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Optional: seed deck draws for a reproducible rehearsal. Unset uses system randomness.
    RANDOM_SEED = os.environ.get('RANDOM_SEED')
