"""Pydantic response models for API docs."""
from typing import Literal, Optional

from pydantic import BaseModel, Field


class ApiInfoResponse(BaseModel):
	"""Response from GET /."""

	message: str
	endpoint: str


class JudgmentResponse(BaseModel):
	"""Response from POST /pose."""

	closestHand: Literal["leftWrist", "rightWrist"] = Field(..., description="Wrist closest to the nose")
	distance: Optional[float] = Field(
		None, description="Nose-to-wrist distance in pixels, 2 decimals; null when no wrist was detected"
	)
	accepted: bool = Field(..., description="Whether the derived confidence reached the acceptance threshold")


class ErrorResponse(BaseModel):
	"""Error body for every non-2xx response."""

	error: str
