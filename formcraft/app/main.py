# app/main.py
import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.orm import Session

from formcraft.app.core.config import settings
from formcraft.app.core.errors import register_error_handlers
from formcraft.app.core.logging import get_logs_writer_logger
from formcraft.app.routers import forms, responses
from formcraft.db import Base
from formcraft.db.session import dispose_engine, engine, get_db, ping

logger = get_logs_writer_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("%s started", settings.APP_NAME)
    yield
    dispose_engine()
    logger.info("%s stopped", settings.APP_NAME)


app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

register_error_handlers(app)
app.include_router(forms.router)
app.include_router(responses.router)


@app.get("/api/health")
def health(db: Session = Depends(get_db)):
    connected = ping(db)
    return {
        "status": "OK",
        "message": f"{settings.APP_NAME} API is running",
        "db": {"connected": connected},
    }
