from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Tuple, Type, TypeVar

from pydantic import BaseModel, TypeAdapter

from .core.client import TrackerRequest
from .core.pagination import Pagination
from .models import (
    Activity,
    Blocker,
    Comment,
    Iteration,
    ProjectMembership,
    Story,
    StoryState,
    Task,
)
from .queries import (
    ActivityQuery,
    CommentsQuery,
    IterationsQuery,
    StoriesQuery,
    TaskQuery,
)

T = TypeVar("T")

JSON_CONTENT_TYPE = "application/json"

_ANY_JSON = TypeAdapter(Any)


class Transport(Protocol):
    """What a ProjectClient needs from its connection. Connection implements it."""

    def create_request(
        self, method: str, path: str, params: Optional[Dict[str, str]] = None
    ) -> TrackerRequest: ...

    async def do(
        self, request: TrackerRequest, result_type: Optional[Type[T]] = None
    ) -> Tuple[Optional[T], Pagination]: ...


class ProjectClient:
    """
    Client for the resources of a single project.
    - Every path is nested under /projects/{project_id}
    - Holds no state besides the project id and the transport
    - Errors from the transport are raised unchanged; nothing is retried
    """

    __slots__ = ("_project_id", "_conn")

    def __init__(self, project_id: int, conn: Transport):
        self._project_id = int(project_id)
        self._conn = conn

    @property
    def project_id(self) -> int:
        return self._project_id

    def __repr__(self) -> str:
        return f"ProjectClient(project_id={self._project_id})"

    # --- Iterations and stories ---

    async def iterations(
        self, query: Optional[IterationsQuery] = None
    ) -> Tuple[List[Iteration], Pagination]:
        request = self._create_request("GET", "/iterations", _params(query))
        iterations, pagination = await self._conn.do(request, List[Iteration])
        return iterations or [], pagination

    async def stories(
        self, query: Optional[StoriesQuery] = None
    ) -> Tuple[List[Story], Pagination]:
        request = self._create_request("GET", "/stories", _params(query))
        stories, pagination = await self._conn.do(request, List[Story])
        return stories or [], pagination

    async def story(self, story_id: int) -> Story:
        request = self._create_request("GET", f"/stories/{story_id}")
        story, _ = await self._conn.do(request, Story)
        return story

    async def story_activity(
        self, story_id: int, query: Optional[ActivityQuery] = None
    ) -> List[Activity]:
        request = self._create_request(
            "GET", f"/stories/{story_id}/activity", _params(query)
        )
        activities, _ = await self._conn.do(request, List[Activity])
        return activities or []

    async def story_tasks(
        self, story_id: int, query: Optional[TaskQuery] = None
    ) -> List[Task]:
        request = self._create_request(
            "GET", f"/stories/{story_id}/tasks", _params(query)
        )
        tasks, _ = await self._conn.do(request, List[Task])
        return tasks or []

    async def story_comments(
        self, story_id: int, query: Optional[CommentsQuery] = None
    ) -> List[Comment]:
        request = self._create_request(
            "GET", f"/stories/{story_id}/comments", _params(query)
        )
        comments, _ = await self._conn.do(request, List[Comment])
        return comments or []

    # --- Story mutations ---

    async def create_story(self, story: Story) -> Story:
        request = self._create_request("POST", "/stories")
        self._add_json_body(request, story)
        created, _ = await self._conn.do(request, Story)
        return created

    async def update_story(self, story: Story) -> Story:
        if story.id is None:
            raise ValueError("Story.id is required to update a story.")
        request = self._create_request("PUT", f"/stories/{story.id}")
        self._add_json_body(request, story)
        updated, _ = await self._conn.do(request, Story)
        return updated

    async def delete_story(self, story_id: int) -> None:
        request = self._create_request("DELETE", f"/stories/{story_id}")
        await self._conn.do(request)

    async def deliver_story(self, story_id: int) -> None:
        request = self._create_request("PUT", f"/stories/{story_id}")
        self._add_json_body(request, Story(current_state=StoryState.DELIVERED))
        await self._conn.do(request)

    async def deliver_story_with_comment(self, story_id: int, comment: str) -> None:
        """
        Deliver the story, then post the comment on it.
        The comment is only attempted once delivery succeeded. A failure
        while posting leaves the story delivered.
        """
        await self.deliver_story(story_id)

        request = self._create_request("POST", f"/stories/{story_id}/comments")
        self._add_json_body(request, Comment(text=comment))
        await self._conn.do(request)

    # --- Story children ---

    async def create_task(self, story_id: int, task: Task) -> Task:
        request = self._create_request("POST", f"/stories/{story_id}/tasks")
        self._add_json_body(request, task)
        created, _ = await self._conn.do(request, Task)
        return created

    async def create_comment(self, story_id: int, comment: Comment) -> Comment:
        request = self._create_request("POST", f"/stories/{story_id}/comments")
        self._add_json_body(request, comment)
        created, _ = await self._conn.do(request, Comment)
        return created

    async def create_blocker(self, story_id: int, blocker: Blocker) -> Blocker:
        request = self._create_request("POST", f"/stories/{story_id}/blockers")
        self._add_json_body(request, blocker)
        created, _ = await self._conn.do(request, Blocker)
        return created

    # --- Project ---

    async def project_memberships(self) -> List[ProjectMembership]:
        request = self._create_request("GET", "/memberships")
        memberships, _ = await self._conn.do(request, List[ProjectMembership])
        return memberships or []

    # --- Request assembly ---

    def _create_request(
        self, method: str, path: str, params: Optional[Dict[str, str]] = None
    ) -> TrackerRequest:
        project_path = f"/projects/{self._project_id}{path}"
        return self._conn.create_request(method, project_path, params)

    @staticmethod
    def _add_json_body(request: TrackerRequest, body: Any) -> None:
        """
        Serialize body onto request and mark it as JSON.
        Models drop None fields; str and bytes are taken as already-encoded
        JSON; file-like objects are read once. Anything else goes through
        pydantic, so datetimes and lists of models encode like models do.
        """
        if isinstance(body, BaseModel):
            data = body.model_dump_json(exclude_none=True).encode("utf-8")
        elif isinstance(body, (bytes, bytearray)):
            data = bytes(body)
        elif isinstance(body, str):
            data = body.encode("utf-8")
        elif hasattr(body, "read"):
            raw = body.read()
            data = raw.encode("utf-8") if isinstance(raw, str) else bytes(raw)
        else:
            data = _ANY_JSON.dump_json(body)

        request.headers["Content-Type"] = JSON_CONTENT_TYPE
        request.body = data


def _params(query: Any) -> Optional[Dict[str, str]]:
    return query.query() if query is not None else None


__all__ = ["ProjectClient", "Transport", "JSON_CONTENT_TYPE"]
