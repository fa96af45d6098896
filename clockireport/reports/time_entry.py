"""Data classes representing hydrated Clockify time entries."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a Clockify ISO timestamp into an aware datetime.

    Args:
        value: ISO 8601 string ending in ``Z`` or an offset, or None

    Returns:
        Aware datetime, or None when no value was given. Naive values are UTC.
    """
    if not value:
        return None
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Format an aware datetime the way the Clockify API does (UTC, ``Z``)."""
    if value is None:
        return None
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class Tag:
    id: str = ""
    name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tag":
        return cls(id=data.get("id") or "", name=data.get("name") or "")

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


@dataclass
class Task:
    id: str = ""
    name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        return cls(id=data.get("id") or "", name=data.get("name") or "")

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass
class User:
    id: str = ""
    email: str = ""
    name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=data.get("id") or "",
            email=data.get("email") or "",
            name=data.get("name") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "email": self.email, "name": self.name}


@dataclass
class Project:
    """A project as embedded in a hydrated time entry."""

    id: str = ""
    name: str = ""
    color: str = ""
    client_id: str = ""
    client_name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            color=data.get("color") or "",
            client_id=data.get("clientId") or "",
            client_name=data.get("clientName") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "clientId": self.client_id,
            "clientName": self.client_name,
        }


@dataclass
class TimeInterval:
    """Start and optional end of a time entry; ``end is None`` means running."""

    start: datetime
    end: Optional[datetime] = None

    @property
    def is_running(self) -> bool:
        return self.end is None

    def to_dict(self) -> Dict[str, Any]:
        return {"start": format_timestamp(self.start), "end": format_timestamp(self.end)}


@dataclass
class TimeEntry:
    """Class representing a Clockify time entry."""

    id: str
    time_interval: TimeInterval
    description: str = ""
    billable: bool = False
    project: Optional[Project] = None
    task: Optional[Task] = None
    user: Optional[User] = None
    tags: List[Tag] = field(default_factory=list)
    project_id: Optional[str] = None
    task_id: Optional[str] = None
    user_id: Optional[str] = None
    workspace_id: Optional[str] = None

    def __post_init__(self):
        interval = self.time_interval
        if interval.end is not None and interval.end < interval.start:
            raise ValueError(
                f"time entry {self.id} ends ({interval.end}) before it starts ({interval.start})"
            )

    @property
    def start(self) -> datetime:
        return self.time_interval.start

    @property
    def end(self) -> Optional[datetime]:
        return self.time_interval.end

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimeEntry":
        """Build a TimeEntry from the JSON returned by the Clockify API.

        Args:
            data: Raw (hydrated) entry data

        Returns:
            Parsed TimeEntry

        Raises:
            KeyError: If the entry has no time interval start
            ValueError: If a timestamp is malformed or the entry ends before it starts
        """
        interval = data["timeInterval"]
        project = data.get("project")
        task = data.get("task")
        user = data.get("user")
        return cls(
            id=data.get("id") or "",
            description=data.get("description") or "",
            billable=bool(data.get("billable", False)),
            time_interval=TimeInterval(
                start=parse_timestamp(interval["start"]),
                end=parse_timestamp(interval.get("end")),
            ),
            project=Project.from_dict(project) if project else None,
            task=Task.from_dict(task) if task else None,
            user=User.from_dict(user) if user else None,
            tags=[Tag.from_dict(t) for t in data.get("tags") or []],
            project_id=data.get("projectId"),
            task_id=data.get("taskId"),
            user_id=data.get("userId"),
            workspace_id=data.get("workspaceId"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back into the Clockify JSON shape."""
        return {
            "id": self.id,
            "description": self.description,
            "billable": self.billable,
            "timeInterval": self.time_interval.to_dict(),
            "project": self.project.to_dict() if self.project else None,
            "task": self.task.to_dict() if self.task else None,
            "user": self.user.to_dict() if self.user else None,
            "tags": [t.to_dict() for t in self.tags],
            "projectId": self.project_id,
            "taskId": self.task_id,
            "userId": self.user_id,
            "workspaceId": self.workspace_id,
        }

    def template_view(self) -> Dict[str, Any]:
        """Public attributes exposed to report templates."""
        return {
            "id": self.id,
            "description": self.description,
            "billable": self.billable,
            "time_interval": self.time_interval,
            "project": self.project,
            "task": self.task,
            "user": self.user,
            "tags": self.tags,
            "project_id": self.project_id,
            "task_id": self.task_id,
            "user_id": self.user_id,
            "workspace_id": self.workspace_id,
        }
