import math
from typing import List, Optional, Set, Dict, Any
from pydantic import BaseModel, Field, field_validator

from app.constants import ROADMAP_LEVELS


class CamelModel(BaseModel):
    class Config:
        populate_by_name = True  # Accept both snake_case and the camelCase aliases


# === Companion ===
class CompanionRequest(CamelModel):
    message: Optional[str] = None
    conversation_type: Optional[str] = Field(alias="conversationType", default=None)


class CompanionResponse(CamelModel):
    response: str
    conversation_type: str = Field(alias="conversationType")
    timestamp: str


# === Summarizer ===
class SummarizeRequest(CamelModel):
    text: Optional[str] = None


class SummarizeResponse(CamelModel):
    summary: str
    original_length: int = Field(alias="originalLength")
    summary_length: int = Field(alias="summaryLength")
    compression_ratio: int = Field(alias="compressionRatio")


# === Roadmap ===
class Topic(CamelModel):
    name: str
    subtopics: List[str] = []
    resources: List[str] = []
    estimated_hours: int = Field(alias="estimatedHours", gt=0)

    @field_validator("estimated_hours", mode="before")
    @classmethod
    def round_up_fractional_hours(cls, value: Any) -> Any:
        if isinstance(value, float) and not value.is_integer():
            return math.ceil(value)
        return value


class RoadmapStep(CamelModel):
    level: str
    title: str
    description: str = ""
    skills: List[str] = []
    topics: List[Topic] = []
    duration: str = ""

    @field_validator("level")
    @classmethod
    def level_must_be_known(cls, value: str) -> str:
        if value not in ROADMAP_LEVELS:
            raise ValueError(f"Unknown roadmap level: {value}")
        return value


class RoadmapRequest(CamelModel):
    technology: Optional[str] = None
    current_knowledge: Optional[str] = Field(alias="currentKnowledge", default=None)


class RoadmapResponse(CamelModel):
    roadmap: List[RoadmapStep]
    technology: str
    current_knowledge: str = Field(alias="currentKnowledge")
    fallback: Optional[bool] = None
    message: Optional[str] = None


# === Progress tracking ===
class ProgressData(CamelModel):
    completed_skills: Set[str] = Field(alias="completedSkills", default_factory=set)
    completed_subtopics: Set[str] = Field(alias="completedSubtopics", default_factory=set)
    completed_resources: Set[str] = Field(alias="completedResources", default_factory=set)
    daily_streak: int = Field(alias="dailyStreak", default=0, ge=0)
    last_active_date: str = Field(alias="lastActiveDate", default="")
    total_study_hours: int = Field(alias="totalStudyHours", default=0, ge=0)

    @classmethod
    def from_storage(cls, raw: Optional[Dict[str, Any]]) -> "ProgressData":
        """Rebuild progress from its stored form, tolerating missing or null fields."""
        raw = raw or {}
        return cls(
            completed_skills=set(raw.get("completedSkills") or []),
            completed_subtopics=set(raw.get("completedSubtopics") or []),
            completed_resources=set(raw.get("completedResources") or []),
            daily_streak=raw.get("dailyStreak") or 0,
            last_active_date=raw.get("lastActiveDate") or "",
            total_study_hours=raw.get("totalStudyHours") or 0,
        )

    def to_storage(self) -> Dict[str, Any]:
        """Sets are written as sorted arrays."""
        return {
            "completedSkills": sorted(self.completed_skills),
            "completedSubtopics": sorted(self.completed_subtopics),
            "completedResources": sorted(self.completed_resources),
            "dailyStreak": self.daily_streak,
            "lastActiveDate": self.last_active_date,
            "totalStudyHours": self.total_study_hours,
        }


class ProgressResponse(CamelModel):
    technology: str
    completed_skills: List[str] = Field(alias="completedSkills")
    completed_subtopics: List[str] = Field(alias="completedSubtopics")
    completed_resources: List[str] = Field(alias="completedResources")
    daily_streak: int = Field(alias="dailyStreak")
    last_active_date: str = Field(alias="lastActiveDate")
    total_study_hours: int = Field(alias="totalStudyHours")


class ToggleItemRequest(CamelModel):
    item: Optional[str] = None


class ToggleSubtopicRequest(ToggleItemRequest):
    estimated_hours: int = Field(alias="estimatedHours", gt=0)
    subtopic_count: int = Field(alias="subtopicCount", ge=1)


class ProgressStatsRequest(CamelModel):
    roadmap: List[RoadmapStep]


class ProgressStats(CamelModel):
    total_skills: int = Field(alias="totalSkills")
    total_subtopics: int = Field(alias="totalSubtopics")
    total_resources: int = Field(alias="totalResources")
    completed_skills: int = Field(alias="completedSkills")
    completed_subtopics: int = Field(alias="completedSubtopics")
    completed_resources: int = Field(alias="completedResources")
    skills_progress: float = Field(alias="skillsProgress")
    subtopics_progress: float = Field(alias="subtopicsProgress")
    resources_progress: float = Field(alias="resourcesProgress")
    overall_progress: float = Field(alias="overallProgress")
    daily_streak: int = Field(alias="dailyStreak")
    total_study_hours: int = Field(alias="totalStudyHours")


# === Events ===
class TechEvent(CamelModel):
    id: str
    title: str
    date: str  # ISO date, e.g. "2026-10-22"
    location: str
    city: str
    organizer: str
    type: str
    description: str
    registration_link: str = Field(alias="registrationLink")
    days_until: Optional[int] = Field(alias="daysUntil", default=None)
    display_date: Optional[str] = Field(alias="displayDate", default=None)


class EventsResponse(BaseModel):
    city: str
    events: List[TechEvent]
