from pydantic import BaseModel

# Request DTOs
class CreateLinkRequest(BaseModel):
    # Validated by the registry so a bad URL is a 400, not a 422
    url: str
