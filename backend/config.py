import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Round scoring rules
    BUST_THRESHOLD = int(os.environ.get('BUST_THRESHOLD', '100'))
    MAX_ROUND_SCORE = int(os.environ.get('MAX_ROUND_SCORE', '999'))
    # Minimum active players needed to compute a round
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '2'))
    # How long a player row stays flagged as "just updated" after a round (ms)
    SCORE_FLASH_MS = int(os.environ.get('SCORE_FLASH_MS', '600'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Comma-separated list of browser origins allowed to call the API
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173'
        ).split(',') if o.strip()
    ]
