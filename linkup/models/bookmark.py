from dataclasses import dataclass, field
from datetime import datetime

from linkup.models.analysis import AnalysisResult, DuplicateAssessment, utcnow


@dataclass
class Bookmark:
    owner_id: str
    name: str
    url: str
    description: str = ""
    category: str = "other"
    color_tag: str = "blue"
    tags: list[str] = field(default_factory=list)
    is_favorite: bool = False
    analysis: AnalysisResult = field(default_factory=AnalysisResult.pending)
    duplicate_info: DuplicateAssessment = field(default_factory=DuplicateAssessment)
    id: int | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
