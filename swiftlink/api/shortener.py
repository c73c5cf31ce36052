from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
import logging

from swiftlink.api.dependencies import get_registry, require_bearer_token
from swiftlink.core.exceptions import InvalidURL, LinkCreationError
from swiftlink.schemas import CreateLinkRequest, CreateLinkResponse, InfoResponse, MessageResponse
from swiftlink.services.shortener import LinkRegistry

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/api/create", response_model=CreateLinkResponse, tags=["links"])
def create_link_endpoint(link_request: CreateLinkRequest, registry: LinkRegistry = Depends(get_registry)):
    try:
        link = registry.create(link_request.url)
    except InvalidURL as e:
        logger.info(f"Rejected URL {link_request.url[:50]}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LinkCreationError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return CreateLinkResponse(code=link.code, url=link.url)

@router.get("/api/info/{code}", response_model=InfoResponse, tags=["links"])
def get_link_info_endpoint(code: str, registry: LinkRegistry = Depends(get_registry)):
    """Retrieve the URL and creation time for a short code."""
    info = registry.lookup(code)
    if info is None:
        logger.warning(f"Info 404: Short code not found: {code}")
        raise HTTPException(status_code=404, detail="Link not found")
    return InfoResponse.model_validate(info)

@router.get("/{code}", tags=["redirect"])
def redirect_endpoint(code: str, registry: LinkRegistry = Depends(get_registry)):
    info = registry.lookup(code)
    if info is None:
        logger.warning(f"Redirect 404: Short code not found: {code}")
        raise HTTPException(status_code=404, detail="Link not found")
    return RedirectResponse(url=info.url, status_code=status.HTTP_302_FOUND)

@router.delete(
    "/{code}",
    response_model=MessageResponse,
    tags=["links"],
    dependencies=[Depends(require_bearer_token)],
)
def delete_link_endpoint(code: str, registry: LinkRegistry = Depends(get_registry)):
    if not registry.delete(code):
        raise HTTPException(status_code=404, detail="Link not found")
    return MessageResponse(ok=True, detail=f"Link '{code}' deleted")
