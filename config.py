import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _database_url():
    # Railway/Render hand out postgres:// URLs, SQLAlchemy only knows postgresql://
    database_url = os.environ.get("DATABASE_URL")
    if database_url and database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)
    return database_url or ("sqlite:///" + os.path.join(BASE_DIR, "gallery_comments.db"))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "gallery-comments-dev")
    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LOG_LEVEL = "WARNING"
