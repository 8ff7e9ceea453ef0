"""API endpoints for conversation commands on running instances."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from instance_api.commands.dispatcher import CommandDispatcher
from instance_api.commands.results import (
    CommandResult,
    DispatchFailed,
    InstanceNotFound,
    Ok,
    ValidationFailed,
)
from instance_api.config import get_settings
from instance_api.services.instance_service import InstanceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/instance/{instance_id}", tags=["conversations"])

# Global instance service
_instance_service: InstanceService | None = None


def get_instance_service() -> InstanceService:
    """Get or create the global instance service."""
    global _instance_service
    if _instance_service is None:
        _instance_service = InstanceService()
    return _instance_service


def get_dispatcher(
    service: InstanceService = Depends(get_instance_service),
) -> CommandDispatcher:
    return CommandDispatcher(service)


def render_result(result: CommandResult, include_error_stack: bool = True) -> JSONResponse:
    """Shape a command result into the response envelope.

    Args:
        result: Outcome of CommandDispatcher.dispatch
        include_error_stack: Whether 500 responses carry the traceback

    Returns:
        JSONResponse with the status code matching the result
    """
    if isinstance(result, Ok):
        return JSONResponse(content=result.value)

    if isinstance(result, ValidationFailed):
        return JSONResponse(
            status_code=422, content={"error": f"Validation error: {result.message}"}
        )

    if isinstance(result, InstanceNotFound):
        return JSONResponse(
            status_code=400, content={"error": f'Instance "{result.instance_id}" not found.'}
        )

    if isinstance(result, DispatchFailed):
        content = {"error": result.message}
        if include_error_stack:
            content["stack"] = result.stack
        return JSONResponse(status_code=500, content=content)

    raise TypeError(f"Unhandled command result: {result!r}")


async def _read_body(request: Request) -> Any:
    """Parse the JSON body; an empty body counts as an empty object."""
    raw = await request.body()
    if not raw.strip():
        return {}
    return await request.json()


async def _run_command(
    command: str,
    instance_id: str,
    request: Request,
    dispatcher: CommandDispatcher,
) -> JSONResponse:
    settings = get_settings()

    try:
        body = await _read_body(request)
    except ValueError as e:
        logger.debug(f"{command}: unreadable body: {e}")
        result: CommandResult = ValidationFailed(f'"value" must be valid JSON ({e})')
    else:
        result = await dispatcher.dispatch(command, instance_id, body)

    return render_result(result, include_error_stack=settings.include_error_stack)


@router.post("/archive")
async def archive(
    instance_id: str,
    request: Request,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Archive or unarchive a conversation."""
    return await _run_command("archive", instance_id, request, dispatcher)


@router.post("/mute")
async def mute(
    instance_id: str,
    request: Request,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Mute or unmute a conversation."""
    return await _run_command("mute", instance_id, request, dispatcher)


@router.post("/clear")
async def clear(
    instance_id: str,
    request: Request,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Clear the local history of a conversation."""
    return await _run_command("clear", instance_id, request, dispatcher)


@router.post("/delete")
async def delete_message(
    instance_id: str,
    request: Request,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Delete a message from this device only."""
    return await _run_command("delete", instance_id, request, dispatcher)


@router.post("/deleteEverywhere")
async def delete_message_everywhere(
    instance_id: str,
    request: Request,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Delete a message for all participants."""
    return await _run_command("deleteEverywhere", instance_id, request, dispatcher)


@router.post("/getMessages")
async def get_messages(
    instance_id: str,
    request: Request,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """List the messages the instance holds for a conversation."""
    return await _run_command("getMessages", instance_id, request, dispatcher)


@router.post("/sendLocation")
async def send_location(
    instance_id: str,
    request: Request,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Send a location message."""
    return await _run_command("sendLocation", instance_id, request, dispatcher)


@router.post("/sendText")
async def send_text(
    instance_id: str,
    request: Request,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Send a text message with optional link preview, mentions and quote."""
    return await _run_command("sendText", instance_id, request, dispatcher)


@router.post("/sendPing")
async def send_ping(
    instance_id: str,
    request: Request,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Send a ping."""
    return await _run_command("sendPing", instance_id, request, dispatcher)


@router.post("/sendReaction")
async def send_reaction(
    instance_id: str,
    request: Request,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """React to a message."""
    return await _run_command("sendReaction", instance_id, request, dispatcher)


@router.post("/updateText")
async def update_text(
    instance_id: str,
    request: Request,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Edit an earlier text message."""
    return await _run_command("updateText", instance_id, request, dispatcher)
