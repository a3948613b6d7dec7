import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_IMAGE_DIR = "/mnt/All Disks/Files/cats"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    image_dir: str = DEFAULT_IMAGE_DIR
    host: str = "0.0.0.0"
    port: int = 3000
    threads: int = 4
    cache_ttl: float = 0.0
    log_level: str = "INFO"


def _env_number(environ, name, default, cast):
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def load_settings(environ=None, dotenv=True):
    """
    Reads the server settings from the environment.

    A ``.env`` file in the working directory is loaded first when ``dotenv``
    is set; values already in the environment win.
    """
    if environ is None:
        if dotenv:
            load_dotenv()
        environ = os.environ

    image_dir = environ.get("CAT_IMAGE_DIR") or DEFAULT_IMAGE_DIR
    settings = Settings(
        image_dir=os.path.abspath(os.path.expanduser(image_dir)),
        host=environ.get("CAT_HOST") or "0.0.0.0",
        port=_env_number(environ, "CAT_PORT", 3000, int),
        threads=_env_number(environ, "CAT_THREADS", 4, int),
        cache_ttl=_env_number(environ, "CAT_CACHE_TTL", 0.0, float),
        log_level=(environ.get("CAT_LOG_LEVEL") or "INFO").upper(),
    )
    if settings.cache_ttl < 0:
        raise ConfigError("CAT_CACHE_TTL must not be negative")
    if settings.log_level not in LOG_LEVELS:
        raise ConfigError(f"CAT_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {settings.log_level!r}")
    return settings


def configure_logging(level="INFO"):
    logging.basicConfig(level=level,
                        format='%(asctime)s - %(levelname)s - %(message)s')
