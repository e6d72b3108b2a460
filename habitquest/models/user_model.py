# habitquest/models/user_model.py
from datetime import datetime
from typing import List, Optional

from bson import ObjectId
from pydantic import BaseModel, Field
from pydantic.functional_validators import BeforeValidator
from typing_extensions import Annotated

# ✅ Converts ObjectId to string before validation
PyObjectId = Annotated[str, BeforeValidator(lambda x: str(x))]


class UserModel(BaseModel):
    id: Optional[PyObjectId] = Field(alias="_id", default=None)
    telegram_id: str
    first_name: Optional[str] = None
    username: Optional[str] = None
    photo_url: Optional[str] = None
    pts: int = 0

    # None marks a registration that never finished (see reconcile_stale_registration)
    registered_at: Optional[datetime] = None

    # Day strings as sent by the client, append-only
    completed_dates: List[str] = []

    model_config = {
        "populate_by_name": True,
        "arbitrary_types_allowed": True,
        "json_encoders": {ObjectId: str},
        "extra": "ignore",
    }
