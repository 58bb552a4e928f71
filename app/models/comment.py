"""
Pydantic models for resident comments.
These models handle validation for comment insertion and responses.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, Dict, Any
from enum import Enum


COMMENT_MAX_LENGTH = 2000
ZIP_CODE_PATTERN = r"^\d{5}$"


class Theme(str, Enum):
    """
    Closed set of civic themes a comment can be filed under.
    Assigned by the classifier, never chosen by the resident.
    """
    TRANSPORTATION_SAFETY = "Transportation Safety"
    GREEN_SPACE = "Green Space"
    HOUSING = "Housing"
    NOISE_AND_POLLUTION = "Noise & Pollution"
    PUBLIC_SAFETY = "Public Safety"
    COMMUNITY_SERVICES = "Community Services"
    INFRASTRUCTURE = "Infrastructure"
    OTHER = "Other"

    @classmethod
    def match(cls, label: Optional[str]) -> Optional["Theme"]:
        """Case-insensitive exact match against the canonical labels."""
        if not label:
            return None
        wanted = label.strip().lower()
        for theme in cls:
            if theme.value.lower() == wanted:
                return theme
        return None

    @classmethod
    def from_label(cls, label: Optional[str]) -> "Theme":
        """Like match(), but unknown or missing labels become OTHER."""
        return cls.match(label) or cls.OTHER


class CommentCreate(BaseModel):
    """
    Row inserted into the comments collection.
    id and created_at are assigned by the database.
    """
    comment_text: str = Field(..., min_length=1, max_length=COMMENT_MAX_LENGTH, description="What the resident observed")
    zip_code: str = Field(..., pattern=ZIP_CODE_PATTERN, description="5-digit ZIP code")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude of the dropped pin")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude of the dropped pin")
    theme: Theme = Field(..., description="Theme assigned by the classifier")
    upvotes: int = Field(default=0, ge=0, description="Upvote counter, starts at 0")

    class Config:
        str_strip_whitespace = True
        json_schema_extra = {
            "example": {
                "comment_text": "Pothole on Elm St",
                "zip_code": "94110",
                "latitude": 37.75,
                "longitude": -122.41,
                "theme": "Infrastructure",
                "upvotes": 0,
            }
        }

    def to_document(self) -> Dict[str, Any]:
        data = self.model_dump()
        data["theme"] = self.theme.value
        return data


class Comment(BaseModel):
    """
    A persisted comment, as returned by the store.
    """
    id: str = Field(..., description="Firestore document ID")
    created_at: Optional[datetime] = Field(default=None, description="Server-assigned creation time")
    comment_text: str
    theme: Theme = Theme.OTHER
    latitude: float
    longitude: float
    zip_code: str
    upvotes: int = Field(default=0, ge=0)

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "Comment":
        """Build a Comment from raw Firestore document data."""
        return cls(
            id=doc_id,
            created_at=data.get("created_at"),
            comment_text=data.get("comment_text", ""),
            theme=Theme.from_label(data.get("theme")),
            latitude=float(data.get("latitude", 0.0)),
            longitude=float(data.get("longitude", 0.0)),
            zip_code=str(data.get("zip_code", "")),
            upvotes=int(data.get("upvotes") or 0),
        )


class ClassifyResponse(BaseModel):
    """Successful response of POST /api/classify."""
    theme: Theme


class ErrorResponse(BaseModel):
    """Error body shared by the classify endpoint."""
    error: str
