from fastapi import APIRouter

from ..services.content import home_store


router = APIRouter(prefix="/api", tags=["home"])


def _ok(data, code: int = 0) -> dict:
    return {"code": code, "data": data, "msg": "ok"}


@router.get("/welcome")
def welcome() -> dict:
    return _ok(home_store.get_welcome())


@router.get("/devices")
def devices() -> dict:
    return _ok(home_store.list_devices())


@router.get("/health-status")
def health_status() -> dict:
    return _ok(home_store.get_health_status())


@router.get("/news")
def news() -> dict:
    return _ok(home_store.list_news(), code=200)
