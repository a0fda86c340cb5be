# chatrelay/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chatrelay.config import settings
from chatrelay.core.db import init_db, close_db
from chatrelay.core.bootstrap import ensure_default_agent
from chatrelay.core.pubsub import hub

from chatrelay.api.v1.routers import auth, conversation, messages

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
    await init_db()
    # Make sure a fresh deployment has someone to answer
    await ensure_default_agent()
    # Process-wide notification hub; nothing publishes to it yet
    app.state.hub = hub
    logger.info("[startup] notification hub ready (capacity=%s)", hub.capacity)


@app.on_event("shutdown")
async def on_shutdown():
    await close_db()


# REST
app.include_router(auth.router, prefix="/api/v1")
app.include_router(conversation.router, prefix="/api/v1")
app.include_router(messages.router, prefix="/api/v1")


@app.get("/healthz")
def healthz():
    return {"ok": True}
