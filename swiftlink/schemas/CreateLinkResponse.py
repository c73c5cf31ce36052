from pydantic import BaseModel

class CreateLinkResponse(BaseModel):
    code: str
    url: str

    model_config = {"from_attributes": True}
