import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from database import get_db
from routers.deps import get_auth_context, render
from services.auth import ANONYMOUS, SESSION_KEY, authenticate
from services.management import Notification

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


# 1. Login Page Route (GET)
@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request, auth=Depends(get_auth_context)):
    return render(request, "login.html", {"email": ""}, auth)


# 2. Login Process Route (POST)
@router.post("/login")
def process_login(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db),
):
    user = authenticate(db, email, password)
    if user is None:
        logger.warning("Failed login for %s", email)
        return render(request, "login.html", {"email": email}, ANONYMOUS, status_code=400,
                      notifications=[Notification("error", "Invalid email or password")])

    request.session[SESSION_KEY] = user.id
    logger.info("User %s signed in", user.id)
    return RedirectResponse(url="/", status_code=303)


# 3. Logout Route (GET)
@router.get("/logout")
def logout(request: Request):
    """Session saaf karke login page par bhejta hai."""
    request.session.pop(SESSION_KEY, None)
    return RedirectResponse(url="/auth/login", status_code=303)
