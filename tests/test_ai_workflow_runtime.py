import pytest

from app.core.exceptions import ExtractionError, ExtractionErrorKind
from app.models.ai_workflow import WorkflowStatus, WorkflowStepStatus, WorkflowType
from app.services.ai_workflow_runtime import WorkflowRuntime


def _runtime(events):
    async def emitter(payload):
        events.append(payload)

    return WorkflowRuntime(
        action="crop_recommendation",
        workflow_type=WorkflowType.CROP_RECOMMENDATION,
        emitter=emitter,
        request_id="req-7",
    )


async def test_completed_run_emits_envelopes_in_order():
    events = []
    workflow = _runtime(events)

    await workflow.start()
    async with workflow.step("predict_crop"):
        await workflow.emit_chunk("crop_prediction", {"cropName": "Rice"})
    await workflow.finish({"cropName": "Rice"})

    assert [event["event"] for event in events] == [
        "workflow_started",
        "step_started",
        "chunk",
        "step_completed",
        "result",
        "workflow_completed",
    ]
    assert {event["workflow_id"] for event in events} == {workflow.id}
    assert events[2]["step"] == "predict_crop"
    assert events[2]["data"] == {
        "chunk_type": "crop_prediction",
        "data": {"cropName": "Rice"},
    }
    assert events[-1]["workflow_status"] == "completed"
    assert workflow.workflow.steps["predict_crop"].status == WorkflowStepStatus.COMPLETED


async def test_failing_step_fails_run_and_reraises():
    events = []
    workflow = _runtime(events)
    error = ExtractionError("bad payload", kind=ExtractionErrorKind.SCHEMA_VIOLATION)

    await workflow.start()
    with pytest.raises(ExtractionError) as exc_info:
        async with workflow.step("predict_crop"):
            raise error

    assert exc_info.value is error
    assert events[-1]["event"] == "workflow_failed"
    assert events[-1]["data"] == {"error": "bad payload", "kind": "schema_violation"}
    assert workflow.workflow.status == WorkflowStatus.FAILED
    step = workflow.workflow.steps["predict_crop"]
    assert step.status == WorkflowStepStatus.FAILED
    assert step.error == "bad payload"


async def test_emitter_errors_do_not_break_the_run():
    async def broken_emitter(payload):
        raise ConnectionError("socket closed")

    workflow = WorkflowRuntime(
        action="chat_message",
        workflow_type=WorkflowType.AGRONOMY_CHAT,
        emitter=broken_emitter,
    )

    await workflow.start()
    async with workflow.step("stream_reply"):
        pass
    await workflow.finish({})

    assert workflow.workflow.status == WorkflowStatus.COMPLETED
