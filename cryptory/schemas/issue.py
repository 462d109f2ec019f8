"""Pydantic schemas for issue requests and responses."""
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional


class IssueCreateRequest(BaseModel):
    """Schema for creating an issue."""
    date: date
    title: str = Field(..., min_length=1, max_length=255)
    content: Optional[str] = None
    news_title: Optional[str] = None
    source: Optional[str] = None


class IssueUpdateRequest(BaseModel):
    """Schema for a partial issue update. Omitted fields keep their value."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = None
    news_title: Optional[str] = None
    source: Optional[str] = None


class IssueSummary(BaseModel):
    """Row of the admin issue list."""
    issue_id: int
    date: date
    title: str
    created_by: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class IssueAdminDetail(BaseModel):
    """Full issue for administrators, including soft-deleted state."""
    issue_id: int
    date: date
    title: str
    content: Optional[str]
    created_by: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    news_title: Optional[str]
    source: Optional[str]
    type: str
    is_deleted: bool


class IssuePublicDetail(BaseModel):
    """Public issue body."""
    title: str
    content: Optional[str]
    news_title: Optional[str]
    source: Optional[str]
