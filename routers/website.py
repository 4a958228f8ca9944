import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from routers.deps import get_auth_context, get_data_client
from schemas.website import (
    AboutSectionSchema,
    EventSchema,
    GalleryImageSchema,
    ResourceSchema,
    TeamMemberSchema,
)
from services.about import render_sections
from services.display import filter_resources, registration_state
from services.entities import AboutScreen, EventScreen, GalleryScreen, ResourceScreen, TeamScreen
from services.errors import FetchError

logger = logging.getLogger(__name__)

# React / mobile client yahan se public data lega
router = APIRouter(prefix="/api/v1/website", tags=["Website (Public API)"])


def _rows(screen_cls, client, auth):
    try:
        return screen_cls(client, auth).list()
    except FetchError as e:
        logger.error("Public API fetch of %s failed: %s", screen_cls.table, e.__cause__ or e)
        raise HTTPException(status_code=500, detail=e.message)


@router.get("/events", response_model=List[EventSchema])
def get_events(client=Depends(get_data_client), auth=Depends(get_auth_context)):
    events = _rows(EventScreen, client, auth)
    for event in events:
        event["registration_state"] = registration_state(event)
    return events


@router.get("/resources", response_model=List[ResourceSchema])
def get_resources(q: str = "", client=Depends(get_data_client), auth=Depends(get_auth_context)):
    return filter_resources(_rows(ResourceScreen, client, auth), q)


@router.get("/gallery", response_model=List[GalleryImageSchema])
def get_gallery(client=Depends(get_data_client), auth=Depends(get_auth_context)):
    return _rows(GalleryScreen, client, auth)


@router.get("/team", response_model=List[TeamMemberSchema])
def get_team(client=Depends(get_data_client), auth=Depends(get_auth_context)):
    return _rows(TeamScreen, client, auth)


@router.get("/about", response_model=List[AboutSectionSchema])
def get_about(client=Depends(get_data_client), auth=Depends(get_auth_context)):
    return [AboutSectionSchema.model_validate(section) for section in render_sections(_rows(AboutScreen, client, auth))]
