from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Awaitable, Callable, Optional

from app.core.exceptions import ExtractionError
from app.models.ai_workflow import (
    AIWorkflowEvent,
    AIWorkflowRun,
    WorkflowStatus,
    WorkflowStep,
    WorkflowStepStatus,
    WorkflowType,
)

logger = logging.getLogger(__name__)

StreamEmitter = Callable[[dict[str, Any]], Awaitable[None]]


class WorkflowRuntime:
    """Tracks one AI workflow run and streams its transitions to an emitter.

    Without an emitter the run is only logged, so services can use the same
    code path for REST and WebSocket callers.
    """

    def __init__(
        self,
        *,
        action: str,
        workflow_type: WorkflowType,
        emitter: Optional[StreamEmitter] = None,
        request_id: Optional[str] = None,
        chat_id: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> None:
        self.emitter = emitter
        self.workflow = AIWorkflowRun(
            action=action,
            workflow_type=workflow_type,
            request_id=request_id,
            chat_id=chat_id,
            metadata=metadata or {},
        )

    @property
    def id(self) -> str:
        return self.workflow.id

    @property
    def current_step(self) -> Optional[str]:
        return self.workflow.current_step

    async def start(self) -> None:
        self.workflow.status = WorkflowStatus.RUNNING
        await self._emit("workflow_started", {"status": self.workflow.status.value})

    @asynccontextmanager
    async def step(self, name: str) -> AsyncIterator[WorkflowStep]:
        """Runs the body as a named step.

        The step is completed when the body returns. If it raises, the whole
        run is failed and the exception propagates unchanged.
        """
        step_state = WorkflowStep(name=name)
        self.workflow.steps[name] = step_state
        self.workflow.current_step = name
        await self._emit("step_started", step=name)

        try:
            yield step_state
        except Exception as exc:
            payload = {}
            if isinstance(exc, ExtractionError):
                payload["kind"] = exc.kind.value
            await self.fail(getattr(exc, "message", str(exc)), payload)
            raise

        self._finish_step(step_state, WorkflowStepStatus.COMPLETED)
        await self._emit("step_completed", step=name)

    async def emit_chunk(self, chunk_type: str, data: dict[str, Any]) -> None:
        await self._emit(
            "chunk",
            {"chunk_type": chunk_type, "data": data},
            step=self.workflow.current_step,
        )

    async def finish(
        self, result: dict[str, Any], summary: Optional[dict[str, Any]] = None
    ) -> None:
        """Emits the final result, then marks the run completed."""
        await self._emit("result", result, step=self.workflow.current_step)
        self.workflow.status = WorkflowStatus.COMPLETED
        await self._emit(
            "workflow_completed",
            summary or {"status": self.workflow.status.value},
            step=self.workflow.current_step,
        )

    async def fail(
        self, error_message: str, payload: Optional[dict[str, Any]] = None
    ) -> None:
        step_name = self.workflow.current_step
        if step_name is not None and step_name in self.workflow.steps:
            step_state = self.workflow.steps[step_name]
            step_state.error = error_message
            self._finish_step(step_state, WorkflowStepStatus.FAILED)

        self.workflow.status = WorkflowStatus.FAILED
        await self._emit(
            "workflow_failed",
            {"error": error_message, **(payload or {})},
            step=step_name,
        )

    @staticmethod
    def _finish_step(step_state: WorkflowStep, status: WorkflowStepStatus) -> None:
        step_state.status = status
        step_state.finished_at = datetime.now(timezone.utc)

    async def _emit(
        self,
        event: str,
        data: Optional[dict[str, Any]] = None,
        *,
        step: Optional[str] = None,
    ) -> None:
        envelope = AIWorkflowEvent(
            action=self.workflow.action,
            event=event,
            workflow_id=self.workflow.id,
            workflow_status=self.workflow.status,
            step=step,
            data=data or {},
        )
        logger.debug(
            "workflow %s (%s): %s step=%s",
            envelope.workflow_id,
            envelope.action,
            envelope.event,
            envelope.step,
        )

        if self.emitter is None:
            return
        try:
            await self.emitter(envelope.model_dump(mode="json"))
        except Exception:
            logger.exception(
                "Failed to emit %s event for workflow %s", event, self.workflow.id
            )
