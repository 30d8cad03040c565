"""
Execution monitoring endpoints.

Provides endpoints to query workflow execution records and follow them live.
"""
import json
from typing import AsyncIterator, List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from api.dependencies import get_workflow_engine
from core.application.dtos.execution_dto import ExecutionDTO, PurgeResultDTO
from orchestration.engine import WorkflowEngine
from orchestration.watcher import ExecutionWatcher


router = APIRouter()


@router.get(
    "",
    response_model=List[ExecutionDTO],
    status_code=status.HTTP_200_OK,
    summary="List executions",
)
async def list_executions(engine: WorkflowEngine = Depends(get_workflow_engine)):
    """All known executions, oldest first."""
    executions = await engine.list_executions()
    return [ExecutionDTO.from_entity(e) for e in executions]


@router.delete(
    "",
    response_model=PurgeResultDTO,
    status_code=status.HTTP_200_OK,
    summary="Purge finished executions",
    description="Delete every completed or failed execution. Running executions are kept.",
)
async def purge_executions(engine: WorkflowEngine = Depends(get_workflow_engine)):
    purged = await engine.purge_terminal_executions()
    return PurgeResultDTO(purged=purged)


@router.get(
    "/{execution_id}",
    response_model=ExecutionDTO,
    status_code=status.HTTP_200_OK,
    summary="Get execution",
)
async def get_execution(
    execution_id: str,
    engine: WorkflowEngine = Depends(get_workflow_engine),
):
    """
    Get execution by ID.

    **Returns:**
    - Status, recorded steps, and result or error
    """
    execution = await engine.get_execution(execution_id)
    if execution is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Execution {execution_id} not found"
        )
    return ExecutionDTO.from_entity(execution)


@router.get(
    "/{execution_id}/stream",
    status_code=status.HTTP_200_OK,
    summary="Stream execution updates",
    description="""
    Server-Sent Events stream of execution snapshots.

    One `execution` event per update; the stream ends after the
    completed or failed snapshot.
    """
)
async def stream_execution(
    execution_id: str,
    engine: WorkflowEngine = Depends(get_workflow_engine),
):
    watcher = await engine.watch(execution_id)
    if watcher is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Execution {execution_id} not found"
        )

    return StreamingResponse(
        _sse_events(watcher),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )


async def _sse_events(watcher: ExecutionWatcher) -> AsyncIterator[str]:
    try:
        async for snapshot in watcher:
            yield f"event: execution\ndata: {json.dumps(snapshot)}\n\n"
    finally:
        watcher.close()
