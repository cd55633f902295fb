# backend/app/routers/health.py
from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from ..config import settings

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
def home():
    return "hello from home"


@router.get("/health", response_model=dict)
def health():
    return {"ok": True, "env": settings.app_env, "version": settings.app_version}
