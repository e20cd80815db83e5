"""tracker_api package exports."""

from .core import (
    DEFAULT_BASE_URL,
    Connection,
    LogfmtFormatter,
    Pagination,
    TrackerClientError,
    TrackerDecodeError,
    TrackerHTTPError,
    TrackerModelValidationError,
    TrackerParseError,
    TrackerRequest,
    TrackerRequestError,
    TrackerTransportError,
    create_connection_from_env,
    load_env_config,
    setup_logging,
)
from .models import (
    Activity,
    Blocker,
    Comment,
    Iteration,
    IterationScope,
    Label,
    Me,
    MembershipSummary,
    Person,
    Project,
    ProjectMembership,
    Story,
    StoryState,
    StoryType,
    Task,
)
from .project import ProjectClient, Transport
from .queries import (
    ActivityQuery,
    CommentsQuery,
    IterationsQuery,
    StoriesQuery,
    TaskQuery,
)
from .tracker import TrackerClient, create_client_from_env

__all__ = [
    # Clients
    "TrackerClient",
    "ProjectClient",
    "Connection",
    "Transport",
    "TrackerRequest",
    "Pagination",
    "DEFAULT_BASE_URL",
    # Exceptions
    "TrackerClientError",
    "TrackerRequestError",
    "TrackerTransportError",
    "TrackerDecodeError",
    "TrackerParseError",
    "TrackerModelValidationError",
    "TrackerHTTPError",
    # Queries
    "IterationsQuery",
    "StoriesQuery",
    "ActivityQuery",
    "TaskQuery",
    "CommentsQuery",
    # Models
    "IterationScope",
    "StoryState",
    "StoryType",
    "Story",
    "Task",
    "Comment",
    "Blocker",
    "Activity",
    "Iteration",
    "ProjectMembership",
    "Person",
    "Label",
    "Project",
    "MembershipSummary",
    "Me",
    # Config and logging
    "create_client_from_env",
    "create_connection_from_env",
    "load_env_config",
    "setup_logging",
    "LogfmtFormatter",
]
