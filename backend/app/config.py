# app/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "Birthday Interview API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # CORS origins for the mobile/web client
    CORS_ORIGINS: list[str] = [
        "http://localhost:8081",
        "http://127.0.0.1:8081",
        "http://localhost:19006",
    ]

    # OpenAI Whisper API Settings (for ASR)
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    whisper_api_url: str = os.getenv("WHISPER_API_URL", "https://api.openai.com/v1/audio/transcriptions")
    whisper_model: str = os.getenv("WHISPER_MODEL", "whisper-1")
    whisper_timeout_sec: float = float(os.getenv("WHISPER_TIMEOUT_SEC", "120"))

    # Whisper rejects uploads above 25 MiB
    max_video_bytes: int = 25 * 1024 * 1024

    # Spotify (song lookup for "favorite song" answers)
    spotify_client_id: str | None = os.getenv("SPOTIFY_CLIENT_ID")
    spotify_client_secret: str | None = os.getenv("SPOTIFY_CLIENT_SECRET")
    spotify_accounts_url: str = os.getenv("SPOTIFY_ACCOUNTS_URL", "https://accounts.spotify.com/api/token")
    spotify_api_base: str = os.getenv("SPOTIFY_API_URL", "https://api.spotify.com/v1")

settings = Settings()  # Instantiate configuration
