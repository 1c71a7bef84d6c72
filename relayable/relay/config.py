import logging
LOGGER = logging.getLogger(__name__)

from dotenv import load_dotenv
from dataclasses import dataclass, field
from typing import Dict, Any, List, Mapping, Optional
import os

DEFAULT_LOG_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "rest", "logging_config.yaml"
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _get_int(env: Mapping[str, str], name: str, default: int, minimum: int, maximum: Optional[int] = None) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise EnvironmentError(f"{name} must be an integer, got '{raw}'")
    if value < minimum or (maximum is not None and value > maximum):
        raise EnvironmentError(f"{name} is out of range: {value}")
    return value


def _get_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise EnvironmentError(f"{name} must be a number, got '{raw}'")
    if value <= 0:
        raise EnvironmentError(f"{name} must be greater than zero")
    return value


def _get_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise EnvironmentError(f"{name} must be a boolean, got '{raw}'")


@dataclass(frozen=True)
class Config:
    """
    Gateway settings, built once at start-up and passed to whatever needs them.
    """

    openai_api_key: str
    openai_organization: Optional[str] = None
    openai_project: Optional[str] = None
    openai_base_url: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 3000
    upload_path: str = "uploads"
    max_file_size: int = 10 * 1024 * 1024
    upstream_timeout: float = 60.0
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    strict_status_codes: bool = False
    compensate_orphaned_uploads: bool = False
    log_config_path: str = DEFAULT_LOG_CONFIG_PATH

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Config":
        if env is None:
            load_dotenv()
            env = os.environ

        api_key = env.get("OPENAI_API_KEY", "").strip()
        if not api_key:
            raise EnvironmentError("OPENAI_API_KEY environment variable not set.")

        upload_path = env.get("FILE_UPLOAD_PATH", "uploads").strip()
        if not upload_path:
            raise EnvironmentError("FILE_UPLOAD_PATH must not be empty")

        origins_str = env.get("CORS_ALLOWED_ORIGINS", "*")
        origins = [origin.strip() for origin in origins_str.split(",") if origin.strip()]

        config = cls(
            openai_api_key=api_key,
            openai_organization=env.get("OPENAI_ORGANIZATION") or None,
            openai_project=env.get("OPENAI_PROJECT") or None,
            openai_base_url=env.get("OPENAI_BASE_URL") or None,
            host=env.get("HOST", "0.0.0.0"),
            port=_get_int(env, "PORT", 3000, minimum=1, maximum=65535),
            upload_path=upload_path,
            max_file_size=_get_int(env, "MAX_FILE_SIZE", 10 * 1024 * 1024, minimum=1),
            upstream_timeout=_get_float(env, "UPSTREAM_TIMEOUT_SECONDS", 60.0),
            cors_origins=origins or ["*"],
            strict_status_codes=_get_bool(env, "STRICT_STATUS_CODES", False),
            compensate_orphaned_uploads=_get_bool(env, "COMPENSATE_ORPHANED_UPLOADS", False),
            log_config_path=env.get("LOG_CONFIG_PATH") or DEFAULT_LOG_CONFIG_PATH,
        )
        LOGGER.info(f"Loaded configuration: {config.describe()}")
        return config

    def describe(self) -> Dict[str, Any]:
        """Settings as a dict, with the API key masked so it can be logged."""
        return {
            "openai_api_key": f"...{self.openai_api_key[-4:]}" if len(self.openai_api_key) > 8 else "***",
            "openai_organization": self.openai_organization,
            "openai_project": self.openai_project,
            "openai_base_url": self.openai_base_url,
            "host": self.host,
            "port": self.port,
            "upload_path": self.upload_path,
            "max_file_size": self.max_file_size,
            "upstream_timeout": self.upstream_timeout,
            "cors_origins": self.cors_origins,
            "strict_status_codes": self.strict_status_codes,
            "compensate_orphaned_uploads": self.compensate_orphaned_uploads,
        }
