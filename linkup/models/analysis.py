from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Heading:
    level: int
    text: str


@dataclass
class ExtractedContent:
    title: str = ""
    description: str = ""
    hero_image_url: str = ""
    main_text: str = ""
    headings: list[Heading] = field(default_factory=list)
    word_count: int = 0
    has_video: bool = False
    image_count: int = 0
    fetch_error: str | None = None


@dataclass
class AnalysisResult:
    keywords: list[str] = field(default_factory=list)
    read_time_minutes: int = 1
    complexity_score: float = 0.0
    content_type: str = "unknown"
    summary: str = ""
    sentiment: str = "neutral"
    word_count: int = 0
    analysis_status: str = "pending"
    last_analyzed_at: datetime = field(default_factory=utcnow)
    extracted_title: str = ""
    extracted_description: str = ""
    extracted_image: str = ""
    headings: list[Heading] = field(default_factory=list)

    @classmethod
    def pending(cls) -> "AnalysisResult":
        return cls(analysis_status="pending", last_analyzed_at=utcnow())

    def to_dict(self) -> dict:
        data = asdict(self)
        data["last_analyzed_at"] = self.last_analyzed_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict | None) -> "AnalysisResult":
        """Rebuild from stored JSON. Unknown keys are ignored, missing ones defaulted."""
        if not data:
            return cls.pending()
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        known["headings"] = [Heading(**h) for h in known.get("headings") or []]
        if isinstance(known.get("last_analyzed_at"), str):
            known["last_analyzed_at"] = datetime.fromisoformat(known["last_analyzed_at"])
        return cls(**known)


@dataclass
class DuplicateAssessment:
    is_duplicate: bool = False
    similarity_score: float = 0.0
    matched_bookmark_id: int | None = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict | None) -> "DuplicateAssessment":
        if not data:
            return cls()
        return cls(
            is_duplicate=bool(data.get("is_duplicate", False)),
            similarity_score=float(data.get("similarity_score", 0.0)),
            matched_bookmark_id=data.get("matched_bookmark_id"),
        )
