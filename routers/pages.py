import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from routers.deps import get_auth_context, get_data_client, render
from services.about import render_sections
from services.display import filter_resources, registration_state, split_events
from services.entities import AboutScreen, EventScreen, GalleryScreen, ResourceScreen, TeamScreen
from services.management import Notification
from services.errors import FetchError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Public Pages"])

QUICK_ACTIONS = [
    {"title": "Events & Workshops", "description": "Discover upcoming coding events, hackathons, and workshops", "path": "/events"},
    {"title": "Resources", "description": "Access coding materials, tutorials, and documentation", "path": "/resources"},
    {"title": "Gallery", "description": "View photos from our events and activities", "path": "/gallery"},
    {"title": "Our Team", "description": "Meet our mentors and student coordinators", "path": "/team"},
]


def _load(screen_cls, client, auth):
    """Returns (rows, notifications). Display pages show an empty list on failure."""
    try:
        return screen_cls(client, auth).list(), []
    except FetchError as e:
        logger.error("Error fetching %s: %s", screen_cls.table, e.__cause__ or e)
        return [], [Notification("error", e.message)]


@router.get("/", response_class=HTMLResponse)
def home_page(request: Request, auth=Depends(get_auth_context)):
    return render(request, "index.html", {"quick_actions": QUICK_ACTIONS}, auth)


@router.get("/events", response_class=HTMLResponse)
def events_page(request: Request, client=Depends(get_data_client), auth=Depends(get_auth_context)):
    events, notes = _load(EventScreen, client, auth)
    for event in events:
        event["registration_state"] = registration_state(event)
    upcoming, past = split_events(events)
    return render(request, "events.html", {"upcoming": upcoming, "past": past}, auth, notifications=notes)


@router.get("/gallery", response_class=HTMLResponse)
def gallery_page(request: Request, client=Depends(get_data_client), auth=Depends(get_auth_context)):
    images, notes = _load(GalleryScreen, client, auth)
    return render(request, "gallery.html", {"images": images}, auth, notifications=notes)


@router.get("/resources", response_class=HTMLResponse)
def resources_page(request: Request, q: str = "", client=Depends(get_data_client), auth=Depends(get_auth_context)):
    resources, notes = _load(ResourceScreen, client, auth)
    return render(request, "resources.html", {
        "resources": filter_resources(resources, q),
        "search_term": q,
    }, auth, notifications=notes)


@router.get("/team", response_class=HTMLResponse)
def team_page(request: Request, client=Depends(get_data_client), auth=Depends(get_auth_context)):
    members, notes = _load(TeamScreen, client, auth)
    return render(request, "team.html", {"members": members}, auth, notifications=notes)


@router.get("/about", response_class=HTMLResponse)
def about_page(request: Request, client=Depends(get_data_client), auth=Depends(get_auth_context)):
    rows, notes = _load(AboutScreen, client, auth)
    return render(request, "about.html", {"sections": render_sections(rows)}, auth, notifications=notes)
