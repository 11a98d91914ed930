# File: vidcast/core/config/settings.py

import os
import shutil
from pathlib import Path


class Settings:
    # --- Paths ---
    # vidcast/core/config/settings.py -> vidcast/core/config -> vidcast/core -> vidcast -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    DATA_DIR: Path = Path(os.getenv("VIDCAST_DATA_DIR", str(BASE_DIR / "data")))
    # Shared scratch area for uploads, cloud downloads and publish-time trims
    UPLOADS_DIR: Path = DATA_DIR / "uploads"

    # --- Database ---
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "localhost")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "vidcast_db")

    @property
    def DATABASE_URL(self) -> str:
        # Only fall back to SQLite if explicitly requested.
        if os.getenv("USE_SQLITE", "false").lower() == "true":
            return os.getenv("SQLITE_URL", "sqlite:///./test_vidcast.db")

        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # --- External Tools ---
    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")
    FFPROBE_BINARY: str = os.getenv("FFPROBE_BINARY_PATH", shutil.which("ffprobe") or "ffprobe")

    # --- Public URLs ---
    # Scratch files are served under {PUBLIC_BASE_URL}/uploads/<name>
    PUBLIC_BASE_URL: str = os.getenv("PUBLIC_BASE_URL", "http://localhost:5000").rstrip("/")

    # --- Transcription Service ---
    TRANSCRIPTION_URL: str = os.getenv("TRANSCRIPTION_URL", "http://localhost:8001/transcribe")
    TRANSCRIPTION_LANGUAGE: str = os.getenv("TRANSCRIPTION_LANGUAGE", "en")
    TRANSCRIPTION_TIMEOUT_SECONDS: float = float(os.getenv("TRANSCRIPTION_TIMEOUT_SECONDS", "300"))

    # --- LLM Completion Service (OpenAI-compatible) ---
    LLM_BASE_URL: str = os.getenv("LLM_BASE_URL", "https://api.openai.com/v1").rstrip("/")
    LLM_API_KEY: str = os.getenv("LLM_API_KEY", "")
    LLM_MODEL: str = os.getenv("LLM_MODEL", "gpt-4o-mini")
    LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "120"))

    # --- Publishing Platform ---
    PUBLISH_URL: str = os.getenv("PUBLISH_URL", "http://localhost:8002/upload")
    PUBLISH_TIMEOUT_SECONDS: float = float(os.getenv("PUBLISH_TIMEOUT_SECONDS", "600"))
    PUBLISH_DEFAULT_PRIVACY: str = os.getenv("PUBLISH_DEFAULT_PRIVACY", "public")
    THUMBNAIL_FETCH_TIMEOUT_SECONDS: float = float(os.getenv("THUMBNAIL_FETCH_TIMEOUT_SECONDS", "60"))

    # --- Cloud Storage ---
    DROPBOX_ACCESS_TOKEN: str = os.getenv("DROPBOX_ACCESS_TOKEN", "")
    DROPBOX_API_URL: str = os.getenv("DROPBOX_API_URL", "https://api.dropboxapi.com/2")
    CLOUD_DOWNLOAD_TIMEOUT_SECONDS: float = float(os.getenv("CLOUD_DOWNLOAD_TIMEOUT_SECONDS", "600"))

    # --- Background Work ---
    INGEST_POLL_INTERVAL_SECONDS: float = float(os.getenv("INGEST_POLL_INTERVAL_SECONDS", "5"))
    TASK_WORKERS: int = int(os.getenv("TASK_WORKERS", "4"))

    def ensure_dirs(self):
        """Creates necessary data directories if they don't exist."""
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)
        self.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
