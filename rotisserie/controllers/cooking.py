"""
Cooking Controller

Manages guided cooking sessions: a recipe's instructions are split into
steps and the cook moves through them one at a time, ticking steps off.

Session Lifecycle:
1. User starts a session with a recipe_id
2. Instructions are segmented into steps
3. User navigates (next / previous / jump) and toggles steps complete
4. User ends the session when done

Why In-Memory Sessions?
- Sessions are ephemeral (one cooking run)
- No need for persistence across restarts
- Navigation state is a UI concern, never written to the database
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException

from rotisserie.controllers.recipes import get_recipe_repository, to_line_response
from rotisserie.models import CookingSessionStart, CookingSessionResponse
from rotisserie.models.repositories import RecipeRepository
from rotisserie.services.cooking import CookingSession

router = APIRouter(prefix="/cooking", tags=["cooking"])

# In-memory session storage
# Key: session_id, Value: (CookingSession, ingredient lines snapshot)
active_sessions: dict[str, tuple[CookingSession, list]] = {}


def _get_session(session_id: str) -> tuple[CookingSession, list]:
    if session_id not in active_sessions:
        raise HTTPException(status_code=404, detail="Session not found")
    return active_sessions[session_id]


def _session_response(session_id: str) -> CookingSessionResponse:
    session, ingredients = active_sessions[session_id]
    return CookingSessionResponse(
        session_id=session_id,
        recipe_id=session.recipe_id,
        recipe_name=session.recipe_name,
        total_steps=session.total_steps,
        current_step=session.current_step,
        current_instruction=session.current_instruction,
        completed_steps=sorted(session.completed_steps),
        progress=session.progress,
        steps=session.steps,
        ingredients=ingredients
    )


@router.post("/sessions", response_model=CookingSessionResponse, status_code=201)
def start_cooking_session(
    request: CookingSessionStart,
    repo: RecipeRepository = Depends(get_recipe_repository)
):
    """
    Start a new cooking session for a recipe.

    Returns the session state including the session_id needed for
    subsequent navigation requests. A recipe whose instructions contain
    no steps still gets a session, with zero steps and zero progress.
    """
    recipe = repo.get_recipe_by_id(request.recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")

    session_id = str(uuid.uuid4())
    session = CookingSession(
        recipe_id=recipe.RecipeId,
        recipe_name=recipe.Name,
        instructions=recipe.Instructions
    )
    ingredients = [to_line_response(line) for line in recipe.ingredients]
    active_sessions[session_id] = (session, ingredients)

    return _session_response(session_id)


@router.get("/sessions/{session_id}", response_model=CookingSessionResponse)
def get_session_info(session_id: str):
    """Get the current state of a cooking session."""
    _get_session(session_id)
    return _session_response(session_id)


@router.post("/sessions/{session_id}/next", response_model=CookingSessionResponse)
def next_step(session_id: str):
    """Advance to the next step (no-op on the last step)."""
    session, _ = _get_session(session_id)
    session.next_step()
    return _session_response(session_id)


@router.post("/sessions/{session_id}/previous", response_model=CookingSessionResponse)
def previous_step(session_id: str):
    """Go back to the previous step (no-op on the first step)."""
    session, _ = _get_session(session_id)
    session.previous_step()
    return _session_response(session_id)


@router.post("/sessions/{session_id}/steps/{index}", response_model=CookingSessionResponse)
def go_to_step(session_id: str, index: int):
    """Jump to a step by its zero-based index."""
    session, _ = _get_session(session_id)
    session.go_to_step(index)
    return _session_response(session_id)


@router.post("/sessions/{session_id}/steps/{index}/toggle", response_model=CookingSessionResponse)
def toggle_step(session_id: str, index: int):
    """Mark a step complete, or incomplete if it already was."""
    session, _ = _get_session(session_id)
    session.toggle_step(index)
    return _session_response(session_id)


@router.delete("/sessions/{session_id}", status_code=204)
def end_cooking_session(session_id: str):
    """
    End a cooking session and clean up resources.

    Ending an unknown or already-ended session is not an error.
    """
    active_sessions.pop(session_id, None)
