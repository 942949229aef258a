from pydantic import BaseModel
from typing import Optional, Dict
from uuid import UUID

# {"ko_KR": "...", "en_US": "..."}
LocalizedText = Dict[str, Optional[str]]


class UserBrief(BaseModel):
    """Minimal user info embedded in other responses"""

    id: UUID
    email: Optional[str] = None
    name: Optional[str] = None
    display_name: Optional[str] = None

    model_config = {"from_attributes": True}


class HospitalBrief(BaseModel):
    id: UUID
    name: LocalizedText

    model_config = {"from_attributes": True}


class DeleteResult(BaseModel):
    id: UUID
    deleted: bool = True
