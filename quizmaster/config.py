"""
Configuration module for the application.
All configuration values are read from environment variables
(a local .env file is loaded by the application package).
"""
import os
import secrets
import warnings


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name, "")
    if not raw:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    return int(raw) if raw else default


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        # Flask Configuration
        self.SECRET_KEY: str = os.getenv("SECRET_KEY", "")
        self.FLASK_ENV: str = os.getenv("FLASK_ENV", "")

        # Generate a development SECRET_KEY if not set and in development mode
        if not self.SECRET_KEY and self.FLASK_ENV != "production":
            self.SECRET_KEY = secrets.token_urlsafe(32)
            warnings.warn(
                "SECRET_KEY not set. Generated a temporary key for development. "
                "Set SECRET_KEY in your .env file for production!",
                UserWarning
            )

        # Database Configuration
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "")
        self.DB_USER: str = os.getenv("DB_USER", "")
        self.DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")
        self.DB_HOST: str = os.getenv("DB_HOST", "localhost")
        self.DB_PORT: str = os.getenv("DB_PORT", "3306")
        self.DB_NAME: str = os.getenv("DB_NAME", "quizmaster")
        self.SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
        self.SQLALCHEMY_ECHO: bool = _env_bool("SQLALCHEMY_ECHO")

        # API Configuration
        self.API_PREFIX: str = os.getenv("API_PREFIX", "")

        # Session token (signed cookie) Configuration
        self.SESSION_TOKEN_COOKIE: str = os.getenv("SESSION_TOKEN_COOKIE", "token")
        self.TOKEN_MAX_AGE_HOURS: int = _env_int("TOKEN_MAX_AGE_HOURS", 24)

        # Password hashing / validation
        self.BCRYPT_ROUNDS: int = _env_int("BCRYPT_ROUNDS", 10)
        self.MIN_PASSWORD_LENGTH: int = _env_int("MIN_PASSWORD_LENGTH", 6)

        # Account policy
        self.ALLOW_ADMIN_REGISTRATION: bool = _env_bool("ALLOW_ADMIN_REGISTRATION")
        self.UNIFY_LOGIN_ERRORS: bool = _env_bool("UNIFY_LOGIN_ERRORS")

        # Rate limiting for /login and /register
        self.RATE_LIMIT_ENABLED: bool = _env_bool("RATE_LIMIT_ENABLED", True)
        self.AUTH_RATE_LIMIT: int = _env_int("AUTH_RATE_LIMIT", 10)
        self.AUTH_RATE_WINDOW_SECONDS: int = _env_int("AUTH_RATE_WINDOW_SECONDS", 60)

        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def is_production(self) -> bool:
        return self.FLASK_ENV == "production"

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Use DATABASE_URL when given, otherwise build a MySQL URI from the DB_* variables."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @property
    def SESSION_TOKEN_SECURE(self) -> bool:
        return self.is_production

    @property
    def SESSION_TOKEN_SAMESITE(self) -> str:
        # Cross-site cookies require SameSite=None together with Secure
        return "None" if self.is_production else "Lax"

    def validate(self) -> None:
        """
        Validate required configuration values.
        Only enforces SECRET_KEY in production environment.
        """
        if not self.SECRET_KEY:
            if self.is_production:
                raise ValueError(
                    "SECRET_KEY environment variable is required in production. "
                    "Set it in your .env file or environment variables."
                )
        if self.TOKEN_MAX_AGE_HOURS <= 0:
            raise ValueError("TOKEN_MAX_AGE_HOURS must be a positive number of hours")
        if not 4 <= self.BCRYPT_ROUNDS <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")

    def to_flask_config(self) -> dict:
        """Flatten into the keys stored on app.config."""
        return {
            "SECRET_KEY": self.SECRET_KEY,
            "ENV_NAME": self.FLASK_ENV,
            "SQLALCHEMY_DATABASE_URI": self.SQLALCHEMY_DATABASE_URI,
            "SQLALCHEMY_TRACK_MODIFICATIONS": self.SQLALCHEMY_TRACK_MODIFICATIONS,
            "SQLALCHEMY_ECHO": self.SQLALCHEMY_ECHO,
            "API_PREFIX": self.API_PREFIX,
            "SESSION_TOKEN_COOKIE": self.SESSION_TOKEN_COOKIE,
            "SESSION_TOKEN_SECURE": self.SESSION_TOKEN_SECURE,
            "SESSION_TOKEN_SAMESITE": self.SESSION_TOKEN_SAMESITE,
            "TOKEN_MAX_AGE_HOURS": self.TOKEN_MAX_AGE_HOURS,
            "BCRYPT_ROUNDS": self.BCRYPT_ROUNDS,
            "MIN_PASSWORD_LENGTH": self.MIN_PASSWORD_LENGTH,
            "ALLOW_ADMIN_REGISTRATION": self.ALLOW_ADMIN_REGISTRATION,
            "UNIFY_LOGIN_ERRORS": self.UNIFY_LOGIN_ERRORS,
            "RATE_LIMIT_ENABLED": self.RATE_LIMIT_ENABLED,
            "AUTH_RATE_LIMIT": self.AUTH_RATE_LIMIT,
            "AUTH_RATE_WINDOW_SECONDS": self.AUTH_RATE_WINDOW_SECONDS,
            "LOG_LEVEL": self.LOG_LEVEL,
        }


# Global config instance - will be re-initialized after load_dotenv()
config = Config()
