"""Pydantic response models for API validation and docs."""
from schemas.responses import (
	ApiInfoResponse,
	ErrorResponse,
	JudgmentResponse,
)

__all__ = [
	"ApiInfoResponse",
	"ErrorResponse",
	"JudgmentResponse",
]
