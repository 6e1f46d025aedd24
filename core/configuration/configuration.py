import os


def pocketbase_url() -> str:
    return os.getenv("POCKETBASE_URL", "http://127.0.0.1:8090")


def flask_env() -> str:
    return os.getenv("FLASK_ENV", "development")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev_test_key_1234567890abcdefghijklmnopqrstu")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    POCKETBASE_URL = pocketbase_url()
    POCKETBASE_TIMEOUT = int(os.getenv("POCKETBASE_TIMEOUT", "10"))

    GAMES_COLLECTION = "wap_games"
    REVIEWS_COLLECTION = "wap_games_comments"
    REVIEW_GAME_FIELD = "wap_game"

    SUBMISSIONS_PAGE_SIZE = 500
    REVIEWS_PAGE_SIZE = 50

    # screenshot (5MB) plus the text fields of the form
    MAX_CONTENT_LENGTH = 6 * 1024 * 1024


class DevelopmentConfig(Config):
    DEBUG = True
    TEMPLATES_AUTO_RELOAD = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(Config):
    TESTING = True
    WTF_CSRF_ENABLED = False
    POCKETBASE_URL = "http://pocketbase.test"


class ProductionConfig(Config):
    DEBUG = False


CONFIGS = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}
