from pydantic import BaseModel

class MessageResponse(BaseModel):
    ok: bool
    detail: str
