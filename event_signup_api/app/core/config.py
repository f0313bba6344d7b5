"""
Application configuration.

Like the rest of the service, configuration is kept dependency free:
the ``Settings`` dataclass reads its values from environment variables
when it is instantiated.  Every field has a default except
``secret_key``, which signs the access tokens and therefore has to be
provided by the deployment (``SECRET_KEY``).  ``Settings.validate`` is
called once by the application factory so that a missing secret stops
the process at startup instead of surfacing on the first login.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


class ConfigError(RuntimeError):
    """Raised when the application is started with an unusable configuration."""


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _env_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, "true" if default else "false").lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: _env("PROJECT_NAME", "Event Sign-up API"))
    api_version: str = field(default_factory=lambda: _env("API_VERSION", "1.0.0"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: _env("LOG_FILE"))

    # Token signing.  The secret has no default on purpose.
    secret_key: str = field(default_factory=lambda: _env("SECRET_KEY"))
    access_token_expire_minutes: int = field(default_factory=lambda: _env_int("ACCESS_TOKEN_EXPIRE_MINUTES", 120))
    algorithm: str = "HS256"

    # bcrypt work factor used for every password hash of this process.
    bcrypt_rounds: int = field(default_factory=lambda: _env_int("BCRYPT_ROUNDS", 14))

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root (see ``database_path``).
    database_url: str = field(default_factory=lambda: _env("DATABASE_URL", "api.db"))
    db_max_open_conns: int = field(default_factory=lambda: _env_int("DB_MAX_OPEN_CONNS", 10))
    db_max_idle_conns: int = field(default_factory=lambda: _env_int("DB_MAX_IDLE_CONNS", 5))

    host: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_int("PORT", 8080))

    @property
    def database_path(self) -> str:
        """Absolute location of the SQLite database file."""
        if os.path.isabs(self.database_url):
            return self.database_url
        base_dir = Path(__file__).resolve().parent.parent.parent.parent
        return str((base_dir / self.database_url).resolve())

    def validate(self) -> None:
        """Check settings that have no safe default."""
        if not self.secret_key:
            raise ConfigError("SECRET_KEY must be set to sign access tokens")
        if not self.database_url or self.database_url == ":memory:" or "mode=memory" in self.database_url:
            # Every pooled connection would open its own empty database.
            raise ConfigError("DATABASE_URL must point to a database file")
        if self.bcrypt_rounds < 4 or self.bcrypt_rounds > 31:
            raise ConfigError("BCRYPT_ROUNDS must be between 4 and 31")
        if self.db_max_open_conns < 1:
            raise ConfigError("DB_MAX_OPEN_CONNS must be at least 1")
        if self.db_max_idle_conns < 0 or self.db_max_idle_conns > self.db_max_open_conns:
            raise ConfigError("DB_MAX_IDLE_CONNS must be between 0 and DB_MAX_OPEN_CONNS")
        if self.access_token_expire_minutes < 1:
            raise ConfigError("ACCESS_TOKEN_EXPIRE_MINUTES must be positive")
