# app/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.core.db import init_db, close_db

from app.api.v1.routers import interviews, questions, songs

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def on_startup():
    if not settings.openai_api_key:
        logger.warning("[startup] OPENAI_API_KEY not set; transcription requests must pass apiKey")
    await init_db()

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(questions.router, prefix="/api/v1")
app.include_router(interviews.router, prefix="/api/v1")
app.include_router(songs.router, prefix="/api/v1")

@app.get("/healthz")
def healthz():
    return {"ok": True}
