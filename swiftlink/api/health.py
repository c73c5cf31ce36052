from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from swiftlink.api.dependencies import get_registry
from swiftlink.services.shortener import LinkRegistry

router = APIRouter(prefix="/api", tags=["health"])

# simple liveness
@router.get("/health")
def health():
    return {"status": "healthy", "service": "swiftlink"}

# readiness: check DB connectivity
@router.get("/ready")
def readiness(registry: LinkRegistry = Depends(get_registry)):
    db_ok = registry.store.ping()
    details = {"db": "ok" if db_ok else "error"}
    return JSONResponse(
        status_code=200 if db_ok else 503,
        content={"ready": db_ok, "details": details},
    )
