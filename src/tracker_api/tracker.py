from __future__ import annotations

from typing import List, Optional

from .core.client import Connection
from .core.config import create_connection_from_env
from .models import Me, Project
from .project import ProjectClient


class TrackerClient:
    """
    Entry point for the API: account-level calls plus project scoping.
    Owns the Connection it is given and closes it on aclose().
    """

    def __init__(self, conn: Connection):
        self.conn = conn

    @classmethod
    def from_token(cls, token: str, **kwargs) -> "TrackerClient":
        return cls(Connection(token=token, **kwargs))

    @classmethod
    def from_env(cls, **kwargs) -> "TrackerClient":
        return cls(create_connection_from_env(**kwargs))

    async def aclose(self) -> None:
        await self.conn.aclose()

    async def __aenter__(self) -> "TrackerClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def me(self) -> Me:
        request = self.conn.create_request("GET", "/me")
        me, _ = await self.conn.do(request, Me)
        return me

    async def projects(self, *, fields: Optional[str] = None) -> List[Project]:
        params = {"fields": fields} if fields else None
        request = self.conn.create_request("GET", "/projects", params)
        projects, _ = await self.conn.do(request, List[Project])
        return projects or []

    def in_project(self, project_id: int) -> ProjectClient:
        return ProjectClient(project_id, self.conn)


def create_client_from_env(**kwargs) -> TrackerClient:
    """Create a TrackerClient from TRACKER_API_TOKEN / TRACKER_BASE_URL."""
    return TrackerClient.from_env(**kwargs)


__all__ = ["TrackerClient", "create_client_from_env"]
