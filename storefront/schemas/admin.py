"""
Pydantic schemas for admin verification
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class AdminTokenRequest(BaseModel):
    token: Optional[str] = None


class AdminVerification(BaseModel):
    """Outcome of the authoritative admin check"""
    is_valid: bool
    email: Optional[str] = None
    uid: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
