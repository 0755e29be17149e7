"""
Housie Live - Application Settings

Loads configuration from environment variables using Pydantic Settings.
On Streamlit Cloud, bridges st.secrets into env vars so Pydantic can read them.
"""

import logging
import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

_SECRET_KEYS = (
    "HOUSIE_SERVER_URL",
    "HOUSIE_SOCKETIO_PATH",
    "HOUSIE_DEBUG",
    "HOUSIE_LOG_LEVEL",
)

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _load_streamlit_secrets() -> None:
    """Bridge Streamlit Cloud secrets into environment variables."""
    try:
        import streamlit as st

        for key in _SECRET_KEYS:
            if key not in os.environ and key in st.secrets:
                os.environ[key] = str(st.secrets[key])
    except Exception:
        # No secrets.toml outside Streamlit Cloud
        return


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Room engine endpoint
    server_url: str = "http://localhost:5000"
    socketio_path: str = "socket.io"
    connect_timeout: float = Field(default=5.0, gt=0)
    reconnection: bool = True

    # Gameplay
    win_prompt_delay: float = Field(default=5.0, ge=0)
    room_code_length: int = Field(default=6, ge=4, le=12)

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "HOUSIE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def effective_log_level(self) -> int:
        """Numeric log level; ``debug`` wins over ``log_level``."""
        if self.debug:
            return logging.DEBUG
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    _load_streamlit_secrets()
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Attach a stream handler to the root logger at the configured level.

    Safe to call on every Streamlit rerun; the handler is only added once.
    """
    settings = settings or get_settings()
    root = logging.getLogger()
    root.setLevel(settings.effective_log_level)
    if not any(getattr(h, "_housie", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._housie = True
        root.addHandler(handler)
    # python-socketio / engineio are chatty at INFO
    for name in ("socketio", "engineio"):
        logging.getLogger(name).setLevel(
            logging.DEBUG if settings.debug else logging.WARNING
        )
