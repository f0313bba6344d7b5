from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain ``{"message": ...}`` response body."""

    message: str
