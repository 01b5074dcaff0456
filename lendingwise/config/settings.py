import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    BASE_DIR = Path(__file__).resolve().parent.parent

    APP_NAME = "LendingWise Audit API"
    VERSION = "1.0.0"

    # Any OpenAI-compatible chat completions endpoint; defaults to Gemini's.
    PROVIDER_BASE_URL = os.getenv(
        "PROVIDER_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai/"
    )
    PROVIDER_MODEL = os.getenv("PROVIDER_MODEL", "gemini-2.5-pro")
    REASONING_EFFORT = os.getenv("REASONING_EFFORT", "high")

    # Optional Unicode font; core Helvetica is used when the file is missing.
    FONT_PATH = Path(os.getenv("FONT_PATH", str(BASE_DIR / "fonts" / "DejaVuSans.ttf")))

    TEMPLATES_DIR = BASE_DIR / "templates"
    LOG_FILE = os.getenv("LOG_FILE", "lendingwise_api.log")

    CORS_ORIGINS = [
        o.strip()
        for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
        if o.strip()
    ]

    @property
    def api_key(self):
        # Read at call time so a key exported after startup is picked up.
        return os.getenv("API_KEY")


settings = Settings()
