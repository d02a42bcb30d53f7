"""
Input validation schemas using Pydantic for API request bodies.

Whitespace is stripped here; the non-empty rule for names is enforced by the
core so that direct callers and HTTP callers get the same ValidationError.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional


class _Stripped(BaseModel):
    @field_validator('*', mode='before')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v


class TripInput(_Stripped):
    """Schema for trip creation."""
    name: str = Field(..., max_length=200)
    clone_from: Optional[str] = None


class TripRenameInput(_Stripped):
    name: str = Field(..., max_length=200)


class ItemInput(_Stripped):
    """Schema for item creation."""
    name: str = Field(..., max_length=200)
    category: str = Field(..., max_length=100)
    location: str = Field(..., max_length=100)
    group: str = Field("", max_length=100)
    container: str = Field("", max_length=200)
    is_optional: bool = False


class ItemUpdateInput(_Stripped):
    """Schema for partial item updates; omitted fields stay unchanged."""
    name: Optional[str] = Field(None, max_length=200)
    category: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=100)
    group: Optional[str] = Field(None, max_length=100)
    container: Optional[str] = Field(None, max_length=200)
    is_packed: Optional[bool] = None
    is_optional: Optional[bool] = None


class VocabularyInput(_Stripped):
    """Schema for adding or renaming a category/location/group."""
    name: str = Field(..., max_length=100)


class MoveInput(BaseModel):
    position: int = Field(..., ge=0)
