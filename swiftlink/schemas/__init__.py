# re-export common schemas for simpler imports
from .CreateLinkRequest import CreateLinkRequest
from .CreateLinkResponse import CreateLinkResponse
from .InfoResponse import InfoResponse
from .MessageResponse import MessageResponse

__all__ = [
    "CreateLinkRequest",
    "CreateLinkResponse",
    "InfoResponse",
    "MessageResponse",
]
