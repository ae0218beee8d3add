from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..services.container import Services, get_services

router = APIRouter(tags=["health"])


@router.get("/health")
def health(services: Services = Depends(get_services)) -> dict:
    return {"ok": True, "version": services.settings.version}


@router.get("/health/ready")
def health_ready(services: Services = Depends(get_services)):
    if not services.db.ping():
        return JSONResponse(
            status_code=503,
            content={"ok": False, "version": services.settings.version, "database": "unreachable"},
        )
    return {"ok": True, "version": services.settings.version, "database": "ok"}
