from fastapi import Depends, HTTPException, Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from config import TEMPLATES_DIR, settings
from database import get_db
from services.auth import SESSION_KEY, context_for_user
from services.data_client import DataClient, Storage
from services.timeconv import format_local

templates = Jinja2Templates(directory=TEMPLATES_DIR)


def _local_time(value, fmt="%d %b %Y, %H:%M"):
    return format_local(value, settings.club_timezone, fmt)


# {{ event.event_date|local_time }} -> club timezone me
templates.env.filters["local_time"] = _local_time

NAV_ITEMS = [
    {"path": "/", "label": "Home"},
    {"path": "/events", "label": "Events"},
    {"path": "/resources", "label": "Resources"},
    {"path": "/gallery", "label": "Gallery"},
    {"path": "/team", "label": "Team"},
    {"path": "/about", "label": "About"},
]


def get_storage():
    return Storage(settings.upload_root, settings.public_url_prefix)


def get_data_client(db: Session = Depends(get_db), storage: Storage = Depends(get_storage)):
    return DataClient(db, storage)


def get_auth_context(request: Request, db: Session = Depends(get_db)):
    return context_for_user(db, request.session.get(SESSION_KEY))


def require_admin(auth=Depends(get_auth_context)):
    # Admin nahi hai to login page par bhejo
    if not auth.is_admin:
        raise HTTPException(status_code=303, detail="Admin access required", headers={"Location": "/auth/login"})
    return auth


# --- Flash messages (survive the redirect after a successful form post) ---
def flash(request: Request, notifications):
    queue = request.session.setdefault("flashes", [])
    for note in notifications:
        queue.append({"level": note.level, "message": note.message})
    request.session["flashes"] = queue


def pop_flashes(request: Request):
    return request.session.pop("flashes", [])


def render(request: Request, name, context, auth, status_code=200, notifications=()):
    messages = pop_flashes(request)
    messages.extend({"level": n.level, "message": n.message} for n in notifications)
    payload = {
        "auth": auth,
        "nav_items": NAV_ITEMS,
        "current_path": request.url.path,
        "messages": messages,
        "club_timezone": settings.club_timezone,
    }
    payload.update(context)
    return templates.TemplateResponse(request, name, payload, status_code=status_code)
