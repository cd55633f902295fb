# backend/app/routers/announcements.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth import Identity, get_identity, require_admin
from ..models import Announcement
from ..repositories import Repositories, get_repos
from ..schemas import AnnouncementCreate, AnnouncementOut, OpResult
from ..services import outcomes

router = APIRouter(prefix="/makeAnnouncements", tags=["announcements"])


@router.get("", response_model=list[AnnouncementOut])
def list_announcements(
    repos: Repositories = Depends(get_repos),
    _ident: Identity = Depends(get_identity),
):
    return repos.announcements.list_all()


@router.post("", response_model=OpResult)
def create_announcement(
    payload: AnnouncementCreate,
    repos: Repositories = Depends(get_repos),
    _admin: Identity = Depends(require_admin),
):
    row = repos.announcements.create(Announcement(**payload.model_dump()))
    repos.db.commit()
    return outcomes.inserted(row.id)
