from pydantic import BaseModel


class ImageBody(BaseModel):
    """Media-store asset reference as sent by the admin client."""
    url: str
    public_id: str


class OptionalImageBody(BaseModel):
    url: str | None = None
    public_id: str | None = None
