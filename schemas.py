# schemas.py

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# --- Roles ---

class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Role"]:
        """Resolve a raw claim. Absent or unknown values mean "no role"."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

# --- Categories and posts ---

class CategorySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str = Field(..., min_length=1)


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: Optional[str] = None
    category: str
    is_public: bool


# Category title -> posts of that category
CategoriesWithPosts = Dict[str, List[PostResponse]]

# --- Analytics ---

class AnalyticCreate(BaseModel):
    post_id: int
    views: int = Field(0, ge=0)
    likes: int = Field(0, ge=0)
    comments: int = Field(0, ge=0)
    shares: int = Field(0, ge=0)


class AnalyticUpdate(BaseModel):
    """Partial analytic. None means "leave unchanged"; 0 is a real value."""

    post_id: Optional[int] = None
    views: Optional[int] = Field(None, ge=0)
    likes: Optional[int] = Field(None, ge=0)
    comments: Optional[int] = Field(None, ge=0)
    shares: Optional[int] = Field(None, ge=0)

    def changes(self) -> Dict[str, int]:
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.changes()


class AnalyticResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    post_id: int
    views: int
    likes: int
    comments: int
    shares: int


class WordStat(BaseModel):
    word: str
    count: int


class AnalyticWithWords(AnalyticResponse):
    total_words: int
    unique_words: int
    words: List[WordStat]


class ErrorResponse(BaseModel):
    message: str
