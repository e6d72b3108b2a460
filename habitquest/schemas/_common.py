from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic.functional_validators import BeforeValidator
from typing_extensions import Annotated


def _coerce_id(v: Any) -> Any:
    # Telegram and client goal ids arrive as JSON numbers or strings
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return v


StrId = Annotated[str, BeforeValidator(_coerce_id)]


class CamelModel(BaseModel):
    """Request/response model exposed to the mini-app with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
