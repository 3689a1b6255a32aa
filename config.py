import os
from dotenv import load_dotenv
from sqlalchemy.engine import URL
from sqlalchemy.pool import QueuePool
from urllib.parse import urlparse
import pymysql
pymysql.install_as_MySQLdb()

load_dotenv()


def build_database_uri():
    """Assemble the MySQL URI from the DB_* environment variables."""
    url = URL.create(
        "mysql+pymysql",
        username=os.getenv("DB_USER", "root"),
        password=os.getenv("DB_PASSWORD", "rootpassword"),
        host=os.getenv("DB_HOST", "localhost"),
        port=int(os.getenv("DB_PORT", 3307)),
        database=os.getenv("DB_NAME", "quiz_database"),
        query={"charset": os.getenv("DB_CHARSET", "utf8mb4")},
    )
    return url.render_as_string(hide_password=False)


class Config:
    API_NAME = "Quiz API"
    API_VERSION = "1.0.0"
    SECRET_KEY = os.getenv('SECRET_KEY', 'change_this_secret_key')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SQLALCHEMY_ENGINE_OPTIONS = {
        "poolclass": QueuePool,
        "pool_size": 5,
        "max_overflow": 2,
        "pool_timeout": 10,
        "pool_pre_ping": True,
    }

    # Validation limits
    MAX_TITLE_LENGTH = 255
    MAX_DESCRIPTION_LENGTH = 1000
    MAX_CATEGORY_LENGTH = 100
    MAX_TAGS_LENGTH = 500
    MAX_QUESTION_LENGTH = 500
    MAX_ANSWER_LENGTH = 500
    MAX_URL_LENGTH = 500
    DEFAULT_TIME_LIMIT = 30
    MAX_TIME_LIMIT = 300
    SECURITY_PATTERN_CHECK = os.getenv("SECURITY_PATTERN_CHECK", "True") == "True"

    # Rate limiting (fixed window per client address)
    RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "True") == "True"
    RATE_LIMIT_REQUESTS = int(os.getenv("RATE_LIMIT_REQUESTS", 100))
    RATE_LIMIT_WINDOW = int(os.getenv("RATE_LIMIT_WINDOW", 3600))

    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3000,http://localhost:8080,http://127.0.0.1:8080",
        ).split(",")
        if origin.strip()
    ]

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    SECURITY_LOG_FILE = os.getenv(
        "SECURITY_LOG_FILE",
        os.path.join(os.path.dirname(os.path.abspath(__file__)), "logs", "security.log"),
    )


class DevConfig(Config):
    """Development Configuration"""
    DEBUG = True
    TESTING = False
    SQLALCHEMY_DATABASE_URI = os.getenv('SQLALCHEMY_DATABASE_URI', build_database_uri())


class TestConfig(Config):
    DEBUG = False
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SECURITY_LOG_FILE = None
    LOG_LEVEL = "DEBUG"


class ProdConfig(Config):
    """Production Configuration"""
    DEBUG = False

    raw_db_url = os.getenv('DATABASE_URL')

    if raw_db_url:
        if raw_db_url.startswith("mysql://"):
            raw_db_url = raw_db_url.replace("mysql://", "mysql+pymysql://", 1)

        parsed_url = urlparse(raw_db_url)
        SQLALCHEMY_DATABASE_URI = f"{parsed_url.scheme}://{parsed_url.netloc}{parsed_url.path}"
    else:
        SQLALCHEMY_DATABASE_URI = os.getenv('SQLALCHEMY_DATABASE_URI', build_database_uri())


ENV = os.getenv('FLASK_ENV', 'production').lower()

config_dict = {
    "development": DevConfig,
    "testing": TestConfig,
    "production": ProdConfig
}

CurrentConfig = config_dict.get(ENV, ProdConfig)
