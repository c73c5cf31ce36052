from pydantic import BaseModel

class InfoResponse(BaseModel):
    code: str
    url: str
    # Unix timestamp (seconds)
    created_at: int

    model_config = {"from_attributes": True}
