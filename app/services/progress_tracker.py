"""
Per-technology learning progress.

Each toggle first updates the daily streak, then flips the item's membership,
and is saved immediately. Study hours move only with subtopics, by the
subtopic's share of its topic's estimated hours (rounded up), and never go
below zero.
"""
import math
from datetime import date, timedelta
from typing import Callable, Iterable, List, Set

from app.models import ProgressData, ProgressStats, RoadmapStep
from app.services.progress_store import ProgressStore


def subtopic_hours(estimated_hours: int, subtopic_count: int) -> int:
    return math.ceil(estimated_hours / max(subtopic_count, 1))


def update_streak(progress: ProgressData, today: date) -> ProgressData:
    today_str = today.isoformat()
    yesterday_str = (today - timedelta(days=1)).isoformat()

    if progress.last_active_date == today_str:
        return progress
    if progress.last_active_date == yesterday_str:
        streak = progress.daily_streak + 1
    else:
        streak = 1

    return progress.model_copy(update={"daily_streak": streak, "last_active_date": today_str})


def _flipped(items: Set[str], item: str) -> Set[str]:
    return items - {item} if item in items else items | {item}


def _percent(done: int, total: int) -> float:
    return (done / total) * 100 if total > 0 else 0.0


def _count_completed(completed: Set[str], items: Iterable[str]) -> int:
    return len(completed & set(items))


def compute_stats(progress: ProgressData, roadmap: List[RoadmapStep]) -> ProgressStats:
    skills = [skill for step in roadmap for skill in step.skills]
    subtopics = [sub for step in roadmap for topic in step.topics for sub in topic.subtopics]
    resources = [res for step in roadmap for topic in step.topics for res in topic.resources]

    done_skills = _count_completed(progress.completed_skills, skills)
    done_subtopics = _count_completed(progress.completed_subtopics, subtopics)
    done_resources = _count_completed(progress.completed_resources, resources)

    skills_progress = _percent(done_skills, len(set(skills)))
    subtopics_progress = _percent(done_subtopics, len(set(subtopics)))
    resources_progress = _percent(done_resources, len(set(resources)))

    return ProgressStats(
        total_skills=len(set(skills)),
        total_subtopics=len(set(subtopics)),
        total_resources=len(set(resources)),
        completed_skills=done_skills,
        completed_subtopics=done_subtopics,
        completed_resources=done_resources,
        skills_progress=skills_progress,
        subtopics_progress=subtopics_progress,
        resources_progress=resources_progress,
        overall_progress=(skills_progress + subtopics_progress + resources_progress) / 3,
        daily_streak=progress.daily_streak,
        total_study_hours=progress.total_study_hours,
    )


class ProgressTracker:
    def __init__(self, store: ProgressStore, today: Callable[[], date] = date.today):
        self.store = store
        self.today = today

    def load(self, technology: str) -> ProgressData:
        return self.store.load(technology)

    def _commit(self, technology: str, progress: ProgressData) -> ProgressData:
        self.store.save(technology, progress)
        return progress

    def toggle_skill(self, technology: str, skill: str) -> ProgressData:
        progress = update_streak(self.load(technology), self.today())
        progress = progress.model_copy(
            update={"completed_skills": _flipped(progress.completed_skills, skill)}
        )
        return self._commit(technology, progress)

    def toggle_subtopic(
        self, technology: str, subtopic: str, estimated_hours: int, subtopic_count: int
    ) -> ProgressData:
        progress = update_streak(self.load(technology), self.today())
        hours = subtopic_hours(estimated_hours, subtopic_count)

        if subtopic in progress.completed_subtopics:
            total = max(0, progress.total_study_hours - hours)
        else:
            total = progress.total_study_hours + hours

        progress = progress.model_copy(
            update={
                "completed_subtopics": _flipped(progress.completed_subtopics, subtopic),
                "total_study_hours": total,
            }
        )
        return self._commit(technology, progress)

    def toggle_resource(self, technology: str, resource: str) -> ProgressData:
        progress = update_streak(self.load(technology), self.today())
        progress = progress.model_copy(
            update={"completed_resources": _flipped(progress.completed_resources, resource)}
        )
        return self._commit(technology, progress)

    def reset(self, technology: str) -> ProgressData:
        self.store.clear(technology)
        return ProgressData()

    def stats(self, technology: str, roadmap: List[RoadmapStep]) -> ProgressStats:
        return compute_stats(self.load(technology), roadmap)
