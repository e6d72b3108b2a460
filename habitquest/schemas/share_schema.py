# habitquest/schemas/share_schema.py
from typing import Optional

from pydantic import BaseModel


class ShareRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    points: Optional[int] = None


class ShareResponse(BaseModel):
    success: bool = True
    url: str    # data:image/png;base64,...
