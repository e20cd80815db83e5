from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class IterationScope(str, Enum):
    DONE = "done"
    CURRENT = "current"
    BACKLOG = "backlog"
    CURRENT_BACKLOG = "current_backlog"
    DONE_CURRENT = "done_current"


class StoryState(str, Enum):
    UNSCHEDULED = "unscheduled"
    UNSTARTED = "unstarted"
    PLANNED = "planned"
    STARTED = "started"
    FINISHED = "finished"
    DELIVERED = "delivered"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class StoryType(str, Enum):
    FEATURE = "feature"
    BUG = "bug"
    CHORE = "chore"
    RELEASE = "release"


class TrackerModel(BaseModel):
    """
    Base for every resource record.
    Every field is optional: the service assigns ids and timestamps, and
    request bodies are encoded with None fields left out so updates stay
    partial.
    """

    model_config = ConfigDict(extra="ignore")

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


class Person(TrackerModel):
    id: Optional[int] = None
    name: Optional[str] = None
    email: Optional[str] = None
    initials: Optional[str] = None
    username: Optional[str] = None
    kind: Optional[str] = None


class Label(TrackerModel):
    id: Optional[int] = None
    project_id: Optional[int] = None
    name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    kind: Optional[str] = None


# --- Story and its children ---


class Story(TrackerModel):
    id: Optional[int] = None
    project_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    story_type: Optional[StoryType] = None
    current_state: Optional[StoryState] = None
    estimate: Optional[float] = None
    labels: Optional[List[Label]] = None
    owner_ids: Optional[List[int]] = None
    requested_by_id: Optional[int] = None
    url: Optional[str] = None
    deadline: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    kind: Optional[str] = None


class Task(TrackerModel):
    id: Optional[int] = None
    story_id: Optional[int] = None
    description: Optional[str] = None
    complete: Optional[bool] = None
    position: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    kind: Optional[str] = None


class Comment(TrackerModel):
    id: Optional[int] = None
    story_id: Optional[int] = None
    epic_id: Optional[int] = None
    person_id: Optional[int] = None
    text: Optional[str] = None
    file_attachment_ids: Optional[List[int]] = None
    google_attachment_ids: Optional[List[int]] = None
    commit_identifier: Optional[str] = None
    commit_type: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    kind: Optional[str] = None


class Blocker(TrackerModel):
    id: Optional[int] = None
    story_id: Optional[int] = None
    person_id: Optional[int] = None
    description: Optional[str] = None
    resolved: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    kind: Optional[str] = None


class Activity(TrackerModel):
    kind: Optional[str] = None
    guid: Optional[str] = None
    project_version: Optional[int] = None
    message: Optional[str] = None
    highlight: Optional[str] = None
    changes: Optional[List[Dict[str, Any]]] = None
    primary_resources: Optional[List[Dict[str, Any]]] = None
    project: Optional[Dict[str, Any]] = None
    performed_by: Optional[Person] = None
    occurred_at: Optional[datetime] = None


# --- Project level ---


class Iteration(TrackerModel):
    # Iterations are addressed by number, not id.
    number: Optional[int] = None
    project_id: Optional[int] = None
    length: Optional[int] = None
    team_strength: Optional[float] = None
    stories: Optional[List[Story]] = None
    start: Optional[datetime] = None
    finish: Optional[datetime] = None
    velocity: Optional[float] = None
    points: Optional[int] = None
    accepted_points: Optional[int] = None
    effective_points: Optional[float] = None
    accepted: Optional[Any] = None
    created: Optional[Any] = None
    analytics: Optional[Any] = None
    kind: Optional[str] = None


class ProjectMembership(TrackerModel):
    id: Optional[int] = None
    project_id: Optional[int] = None
    person: Optional[Person] = None
    role: Optional[str] = None
    project_color: Optional[str] = None
    last_viewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    kind: Optional[str] = None


class Project(TrackerModel):
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    version: Optional[int] = None
    iteration_length: Optional[int] = None
    week_start_day: Optional[str] = None
    point_scale: Optional[str] = None
    public: Optional[bool] = None
    current_iteration_number: Optional[int] = None
    account_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    kind: Optional[str] = None


class MembershipSummary(TrackerModel):
    id: Optional[int] = None
    project_id: Optional[int] = None
    project_name: Optional[str] = None
    project_color: Optional[str] = None
    role: Optional[str] = None
    last_viewed_at: Optional[datetime] = None
    kind: Optional[str] = None


class Me(TrackerModel):
    id: Optional[int] = None
    name: Optional[str] = None
    initials: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    time_zone: Optional[Dict[str, Any]] = None
    projects: Optional[List[MembershipSummary]] = None
    kind: Optional[str] = None


__all__ = [
    "IterationScope",
    "StoryState",
    "StoryType",
    "TrackerModel",
    "Person",
    "Label",
    "Story",
    "Task",
    "Comment",
    "Blocker",
    "Activity",
    "Iteration",
    "ProjectMembership",
    "Project",
    "MembershipSummary",
    "Me",
]
