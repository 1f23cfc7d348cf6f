from datetime import datetime
from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, computed_field, field_validator

from linkup.models.analysis import AnalysisResult, DuplicateAssessment
from linkup.models.bookmark import Bookmark

Category = Literal["resume", "job", "favorite", "work", "personal", "study", "other"]
ColorTag = Literal["red", "orange", "yellow", "green", "blue", "purple", "pink", "gray"]

CONTENT_TYPE_ICONS = {
    "news": "📰",
    "tutorial": "📚",
    "documentation": "📖",
    "blog": "✍️",
    "video": "🎥",
    "image": "🖼️",
    "product": "🛍️",
    "resume": "📄",
    "job": "💼",
    "general": "🔗",
    "unknown": "❓",
}


def read_time_display(minutes: int) -> str:
    if minutes < 1:
        return "Less than 1 min"
    if minutes == 1:
        return "1 min read"
    return f"{minutes} min read"


def complexity_display(score: float) -> str:
    if score < 0.3:
        return "Easy"
    if score < 0.7:
        return "Medium"
    return "Complex"


def content_type_icon(content_type: str) -> str:
    return CONTENT_TYPE_ICONS.get(content_type, CONTENT_TYPE_ICONS["unknown"])


def _require_http_url(v: str) -> str:
    v = v.strip()
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("url must be an absolute http(s) URL")
    return v


class BookmarkFields(BaseModel):
    name: str
    url: str
    description: str = ""
    category: Category = "other"
    color_tag: ColorTag = "blue"
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = False

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name must not be empty")
        return v.strip()

    @field_validator("url")
    @classmethod
    def url_must_be_http(cls, v: str) -> str:
        return _require_http_url(v)

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: list[str]) -> list[str]:
        return [tag.strip() for tag in v if tag.strip()]


class BookmarkCreate(BookmarkFields):
    owner_id: str
    allow_duplicate: bool = False

    @field_validator("owner_id")
    @classmethod
    def owner_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("owner_id must not be empty")
        return v


class BookmarkUpdate(BookmarkFields):
    pass


class DuplicateCheckRequest(BaseModel):
    owner_id: str
    url: str

    @field_validator("url")
    @classmethod
    def url_must_be_http(cls, v: str) -> str:
        return _require_http_url(v)


class HeadingResponse(BaseModel):
    level: int
    text: str


class AnalysisResponse(BaseModel):
    keywords: list[str]
    read_time_minutes: int
    complexity_score: float
    content_type: str
    summary: str
    sentiment: str
    word_count: int
    analysis_status: str
    last_analyzed_at: datetime
    extracted_title: str
    extracted_description: str
    extracted_image: str
    headings: list[HeadingResponse]

    @computed_field
    @property
    def read_time_display(self) -> str:
        return read_time_display(self.read_time_minutes)

    @computed_field
    @property
    def complexity_display(self) -> str:
        return complexity_display(self.complexity_score)

    @computed_field
    @property
    def content_type_icon(self) -> str:
        return content_type_icon(self.content_type)

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisResponse":
        return cls.model_validate(result.to_dict())


class DuplicateAssessmentResponse(BaseModel):
    is_duplicate: bool
    similarity_score: float
    matched_bookmark_id: int | None = None

    @classmethod
    def from_assessment(cls, assessment: DuplicateAssessment) -> "DuplicateAssessmentResponse":
        return cls.model_validate(assessment.to_dict())


class BookmarkResponse(BaseModel):
    id: int
    owner_id: str
    name: str
    url: str
    description: str
    category: str
    color_tag: str
    tags: list[str]
    is_favorite: bool
    analysis: AnalysisResponse
    duplicate_info: DuplicateAssessmentResponse
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_bookmark(cls, bookmark: Bookmark) -> "BookmarkResponse":
        return cls(
            id=bookmark.id,
            owner_id=bookmark.owner_id,
            name=bookmark.name,
            url=bookmark.url,
            description=bookmark.description,
            category=bookmark.category,
            color_tag=bookmark.color_tag,
            tags=bookmark.tags,
            is_favorite=bookmark.is_favorite,
            analysis=AnalysisResponse.from_result(bookmark.analysis),
            duplicate_info=DuplicateAssessmentResponse.from_assessment(bookmark.duplicate_info),
            created_at=bookmark.created_at,
            updated_at=bookmark.updated_at,
        )


class StatusResponse(BaseModel):
    status: str
    message: str
