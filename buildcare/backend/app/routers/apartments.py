# backend/app/routers/apartments.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..config import settings
from ..repositories import Repositories, get_repos
from ..schemas import ApartmentCountOut, ApartmentOut

router = APIRouter(tags=["apartments"])


@router.get("/apartments", response_model=list[ApartmentOut])
def list_apartments(
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
    repos: Repositories = Depends(get_repos),
):
    size = min(int(limit or settings.default_page_size), int(settings.max_page_size))
    return repos.apartments.page(page=page, limit=size)


@router.get("/apartmentsCount", response_model=ApartmentCountOut)
def count_apartments(repos: Repositories = Depends(get_repos)):
    return ApartmentCountOut(total=repos.apartments.count())


@router.get("/search", response_model=list[ApartmentOut])
def search_by_rent(
    search: float = Query(..., ge=0, description="rent ceiling"),
    repos: Repositories = Depends(get_repos),
):
    return repos.apartments.rent_at_most(search)
