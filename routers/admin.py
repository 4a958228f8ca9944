from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse

from config import settings
from routers.deps import flash, get_data_client, render, require_admin
from services.entities import SCREENS

router = APIRouter(prefix="/admin", tags=["Admin Panel"])

ADMIN_TABS = [
    {"id": "dashboard", "title": "Dashboard", "description": "Overview and quick stats"},
    {"id": "events", "title": "Manage Events", "description": "Create, edit, and manage upcoming events and workshops"},
    {"id": "resources", "title": "Resource Management", "description": "Upload and organize resources, documents, and materials"},
    {"id": "gallery", "title": "Gallery Management", "description": "Upload and manage photos of activities and events"},
    {"id": "team", "title": "Team Management", "description": "Update and manage team members information"},
    {"id": "about", "title": "About Section", "description": "Update club details, mission, and general information"},
]


def _screen(tab, client, auth):
    if tab not in SCREENS:
        raise HTTPException(status_code=404, detail=f"Unknown admin tab '{tab}'")
    return SCREENS[tab](client, auth, settings.club_timezone)


def _shell(request, auth, tab="dashboard", screen=None, status_code=200, pending_delete=None):
    notes = screen.notifications if screen is not None else []
    return render(request, "admin/shell.html", {
        "tabs": ADMIN_TABS,
        "active_tab": tab,
        "screen": screen,
        "pending_delete": pending_delete,
    }, auth, status_code=status_code, notifications=notes)


def _after_write(request, tab, screen, ok, auth):
    if ok:
        # Post-redirect-get: success message flash me, list dobara fetch hogi
        flash(request, screen.notifications)
        return RedirectResponse(url=f"/admin?tab={tab}", status_code=303)
    screen.refresh()
    return _shell(request, auth, tab, screen, status_code=400)


# ===============================
#  1. ADMIN SHELL (one screen at a time)
# ===============================
@router.get("", response_class=HTMLResponse)
def admin_panel(request: Request, tab: str = "dashboard", edit: Optional[int] = None,
                confirm_delete: Optional[int] = None,
                client=Depends(get_data_client), auth=Depends(require_admin)):
    if tab == "dashboard":
        return _shell(request, auth)
    screen = _screen(tab, client, auth)
    screen.refresh()
    if edit is not None:
        screen.begin_edit(edit)
    return _shell(request, auth, tab, screen, pending_delete=confirm_delete)


# ===============================
#  2. CREATE / UPDATE
# ===============================
@router.post("/events/save")
def save_event(
    request: Request,
    title: str = Form(...),
    description: str = Form(...),
    event_date: str = Form(...),
    location: str = Form(""),
    registration_link: str = Form(""),
    registration_open_date: str = Form(""),
    registration_close_date: str = Form(""),
    id: Optional[int] = Form(None),
    client=Depends(get_data_client),
    auth=Depends(require_admin),
):
    screen = _screen("events", client, auth)
    screen.editing_id = id
    ok = screen.submit({
        "title": title,
        "description": description,
        "event_date": event_date,
        "location": location,
        "registration_link": registration_link,
        "registration_open_date": registration_open_date,
        "registration_close_date": registration_close_date,
    })
    return _after_write(request, "events", screen, ok, auth)


@router.post("/team/save")
def save_team_member(
    request: Request,
    name: str = Form(...),
    role: str = Form(...),
    contact: str = Form(""),
    photo_url: str = Form(""),
    id: Optional[int] = Form(None),
    client=Depends(get_data_client),
    auth=Depends(require_admin),
):
    screen = _screen("team", client, auth)
    screen.editing_id = id
    ok = screen.submit({"name": name, "role": role, "contact": contact, "photo_url": photo_url})
    return _after_write(request, "team", screen, ok, auth)


@router.post("/about/save")
def save_club_info(
    request: Request,
    section: str = Form(...),
    title: str = Form(...),
    description: str = Form(...),
    id: Optional[int] = Form(None),
    client=Depends(get_data_client),
    auth=Depends(require_admin),
):
    screen = _screen("about", client, auth)
    screen.editing_id = id
    ok = screen.submit({"section": section, "title": title, "description": description})
    return _after_write(request, "about", screen, ok, auth)


# ===============================
#  3. UPLOADS (Resources + Gallery)
# ===============================
@router.post("/resources/upload")
def upload_resource(
    request: Request,
    title: str = Form(...),
    file: UploadFile = File(...),
    client=Depends(get_data_client),
    auth=Depends(require_admin),
):
    screen = _screen("resources", client, auth)
    ok = screen.submit_upload(file.file, file.filename or "", file.content_type, title)
    return _after_write(request, "resources", screen, ok, auth)


@router.post("/gallery/upload")
def upload_gallery_image(
    request: Request,
    title: str = Form(...),
    description: str = Form(""),
    image: UploadFile = File(...),
    client=Depends(get_data_client),
    auth=Depends(require_admin),
):
    screen = _screen("gallery", client, auth)
    ok = screen.submit_upload(image.file, image.filename or "", image.content_type, title, description)
    return _after_write(request, "gallery", screen, ok, auth)


# ===============================
#  4. DELETE (confirmation zaroori hai)
# ===============================
@router.post("/{tab}/delete/{item_id}")
def delete_item(
    request: Request,
    tab: str,
    item_id: int,
    confirm: str = Form(""),
    client=Depends(get_data_client),
    auth=Depends(require_admin),
):
    screen = _screen(tab, client, auth)
    ok = screen.confirm_delete(item_id, confirmed=confirm == "yes")
    return _after_write(request, tab, screen, ok, auth)
