"""
FastAPI dependencies. Use Depends(get_state) in route handlers to receive AppState.
"""
from fastapi import Request

from app_state import AppState


class ModelNotReadyError(RuntimeError):
	"""The pose model has not been loaded (startup failed or still in progress)."""


def get_state(request: Request) -> AppState:
	"""Return the app state instance attached in lifespan."""
	return request.app.state.state


def require_ready(request: Request) -> AppState:
	"""Readiness gate for inference routes; raises ModelNotReadyError until the model is loaded."""
	state = get_state(request)
	if not state.ready:
		raise ModelNotReadyError(state.load_error or "model not loaded")
	return state
