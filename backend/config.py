import os
from pathlib import Path

from pydantic_settings import BaseSettings

_DEFAULT_CATALOG_DIR = Path(__file__).resolve().parent / "data"


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    use_llm_rationale: bool = True  # only takes effect when a key is set
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False

    # Catalog JSON files (assessment, job paths, SHS tracks, colleges, scholarships)
    catalog_dir: str = str(_DEFAULT_CATALOG_DIR)

    # Recommendation limits enforced at the API boundary
    default_recommendations: int = 5
    max_recommendations: int = 20
    default_track_recommendations: int = 3

    rate_limit: str = "30/minute"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
