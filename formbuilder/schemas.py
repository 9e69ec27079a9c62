from pydantic import BaseModel, StrictBool, StrictFloat, StrictInt, StrictStr
from typing import Any, Dict, Optional, Union
from datetime import datetime
from .enums import FormBlockType, FormBlockInteractionType

# no coercion: 10 stays an int, "10" stays a string
OptionScalar = Union[StrictBool, StrictInt, StrictFloat, StrictStr, None]


class FormCreate(BaseModel):
    name: str
    description: Optional[str] = None
    published_at: Optional[datetime] = None
    brand_color: Optional[str] = None
    privacy_link: Optional[str] = None
    legal_notice_link: Optional[str] = None


class BlockCreate(BaseModel):
    type: FormBlockType = FormBlockType.none
    title: Optional[str] = None
    message: Optional[str] = None
    sequence: Optional[int] = None


class InteractionCreate(BaseModel):
    type: FormBlockInteractionType


class InteractionUpdate(BaseModel):
    label: Optional[str] = None
    reply: Optional[str] = None
    uuid: Optional[str] = None
    options: Optional[Dict[str, OptionScalar]] = None


class ResponseSubmit(BaseModel):
    form_block_id: str
    form_block_interaction_id: Optional[str] = None
    payload: Any = None

