import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_PORT = 4000
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024


def _read_float(name: str, default: float | None) -> float | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid value for {name}: {raw!r} is not a number") from exc
    # 0 disables the timeout
    return value if value > 0 else None


def _read_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid value for {name}: {raw!r} is not an integer") from exc


@dataclass(frozen=True)
class Settings:
    google_api_key: str = ""
    model: str = DEFAULT_MODEL
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float | None = DEFAULT_TIMEOUT_SECONDS
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    static_dir: str = "."
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    log_level: str = "INFO"

    @property
    def has_api_key(self) -> bool:
        return bool(self.google_api_key)

    def model_url(self, action: str) -> str:
        return f"{self.api_base_url.rstrip('/')}/models/{self.model}:{action}"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        api_key = os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY") or ""
        return cls(
            google_api_key=api_key.strip(),
            model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL).strip() or DEFAULT_MODEL,
            api_base_url=os.getenv("GEMINI_API_BASE_URL", DEFAULT_API_BASE_URL).strip() or DEFAULT_API_BASE_URL,
            request_timeout=_read_float("GEMINI_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_read_int("PORT", DEFAULT_PORT),
            static_dir=os.getenv("STATIC_DIR") or os.getcwd(),
            max_body_bytes=_read_int("MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
