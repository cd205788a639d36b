import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///skullking.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Comma-separated list of client origins allowed by CORS
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173'
        ).split(',') if o.strip()
    ]
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Player names that create well-known demo games with fixed codes
    SAMPLE_GAMES = {
        '__Sample Game 1__': 'ABCD',
        '__Sample Game 2__': '1234',
    }
