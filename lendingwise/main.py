import argparse
import logging
import logging.config

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lendingwise.config.settings import settings
from lendingwise.routes import audits, dashboard, session

# ========================= CONFIG & LOGGING =========================

logging.config.dictConfig({
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"}
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "simple",
            "filename": settings.LOG_FILE,
            "maxBytes": 10_000_000,
            "backupCount": 5,
        },
    },
    "root": {"level": "INFO", "handlers": ["console", "file"]},
})

logger = logging.getLogger("lendingwise")

if not settings.api_key:
    logger.warning("API_KEY not set - analysis requests will fail until it is configured.")

# ========================= FASTAPI APP =========================

app = FastAPI(
    title=settings.APP_NAME,
    description="Bank statement and payslip audit backed by a hosted LLM, with PDF export",
    version=settings.VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(audits.router)
app.include_router(session.router)
app.include_router(dashboard.router)


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "model": settings.PROVIDER_MODEL,
    }


# ========================= ENTRY POINT =========================

def run():
    parser = argparse.ArgumentParser()
    parser.add_argument("--host", type=str, default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    uvicorn.run("lendingwise.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    run()
