import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from config import STATIC_DIR, settings
from database import Base, engine

# --- IMPORT ROUTERS ---
from routers import admin, auth, pages, website

# --- IMPORT MODELS (create_all ke liye register hona zaroori hai) ---
from models.content import Event, ClubFile, GalleryImage, Coordinator, ClubInfo  # noqa: F401
from models.users import User, Profile  # noqa: F401

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# --- CREATE DATABASE TABLES ---
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Coding Club Portal")

# ==========================================
# SESSION (signed cookie -> AuthContext)
# ==========================================
app.add_middleware(SessionMiddleware, secret_key=settings.secret_key, same_site="lax")

# ==========================================
# CORS (public API for the website frontend)
# ==========================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- STATIC FILES ---
# Uploads ka mount pehle, warna "/static" unhe bhi pakad lega
os.makedirs(settings.upload_root, exist_ok=True)
app.mount(settings.public_url_prefix, StaticFiles(directory=settings.upload_root), name="uploads")
os.makedirs(STATIC_DIR, exist_ok=True)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

# --- REGISTER ROUTERS ---
app.include_router(pages.router)
app.include_router(website.router)
app.include_router(admin.router)
app.include_router(auth.router)

logger.info("Club portal ready (database: %s)", engine.url.render_as_string(hide_password=True))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), reload=False)
