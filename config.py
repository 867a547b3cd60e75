import os


class Config:
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'dev-key-placeholder')
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///taskmaster.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    PORT = int(os.environ.get('PORT', 5000))

    # Signed login tokens expire after this many seconds
    TOKEN_MAX_AGE = int(os.environ.get('TOKEN_MAX_AGE', 3600))

    # Client side
    API_BASE_URL = os.environ.get('API_BASE_URL', 'http://localhost:5000')
    HTTP_TIMEOUT = float(os.environ.get('HTTP_TIMEOUT', 10))
    LANDING_DELAY = float(os.environ.get('LANDING_DELAY', 0.8))
    TASK_STORE_PATH = os.environ.get('TASK_STORE_PATH', 'local_storage.json')


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    LANDING_DELAY = 0
