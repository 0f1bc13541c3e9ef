from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from uuid import uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorkflowStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class WorkflowStepStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class WorkflowType(str, Enum):
    CROP_RECOMMENDATION = "crop_recommendation"
    AGRONOMY_CHAT = "agronomy_chat"


class WorkflowStep(BaseModel):
    name: str
    status: WorkflowStepStatus = WorkflowStepStatus.IN_PROGRESS
    started_at: datetime = Field(default_factory=_utcnow)
    finished_at: Optional[datetime] = None
    error: Optional[str] = None


class AIWorkflowRun(BaseModel):
    """In-memory record of one multi-step AI request (never persisted)."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    action: str
    workflow_type: WorkflowType
    status: WorkflowStatus = WorkflowStatus.PENDING
    request_id: Optional[str] = None
    chat_id: Optional[str] = None
    current_step: Optional[str] = None
    steps: Dict[str, WorkflowStep] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    started_at: datetime = Field(default_factory=_utcnow)


class AIWorkflowEvent(BaseModel):
    """Envelope streamed to WebSocket clients for every workflow transition."""

    action: str
    event: str
    workflow_id: str
    workflow_status: WorkflowStatus
    step: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)
    ts: datetime = Field(default_factory=_utcnow)
