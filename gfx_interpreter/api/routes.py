from fastapi import APIRouter, HTTPException

from gfx_interpreter.models.schemas import (
    InterpretRequest,
    InterpretResponse,
    ProgressEvent,
    ResolveRequest,
    ResolveResponse,
)
from gfx_interpreter.services.interpreter import is_drastic_change, scene_interpreter
from gfx_interpreter.services.placeholders import placeholder_resolver

router = APIRouter()


@router.post("/api/interpret", response_model=InterpretResponse)
async def interpret_reply(request: InterpretRequest) -> InterpretResponse:
    """
    Interpret an AI reply into a scene ChangeSet.

    ``changes`` is null when the reply carries no change.
    """
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Empty AI response text")

    changes = scene_interpreter.interpret(
        request.text,
        known_elements=request.known_elements,
        expand_dynamic=request.expand_dynamic,
    )
    return InterpretResponse(changes=changes, drastic=is_drastic_change(changes))


@router.post("/api/resolve", response_model=ResolveResponse)
async def resolve_placeholders(request: ResolveRequest) -> ResolveResponse:
    """
    Replace LOGO, PEXELS and GENERATE image placeholders in text.

    Unresolvable images become the fallback placeholder URL.
    """
    if not request.text:
        raise HTTPException(status_code=400, detail="Empty text")

    progress: list[ProgressEvent] = []

    def on_progress(message: str, current: int, total: int) -> None:
        progress.append(ProgressEvent(message=message, current=current, total=total))

    text = await placeholder_resolver.resolve(
        request.text,
        request.organization_id,
        request.user_id,
        access_token=request.access_token,
        on_progress=on_progress,
        parallel=request.parallel,
    )
    return ResolveResponse(text=text, progress=progress)
