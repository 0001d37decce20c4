"""Pose API. Routes: / (API info), /pose (closest-hand judgment for an uploaded image)."""
import asyncio
import logging
import math

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from app_state import AppState
from deps import require_ready
from handreach.pipeline import judge_image
from handreach.pose.decision import MissingAnchorError
from schemas.responses import ApiInfoResponse, ErrorResponse, JudgmentResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["pose"])

IMAGE_FIELD = "image"


def _error(status_code: int, message: str) -> JSONResponse:
	return JSONResponse(status_code=status_code, content={"error": message})


@router.get("/", response_model=ApiInfoResponse)
async def api_info():
	return {"message": "PoseNet API ready", "endpoint": "/pose"}


@router.post(
	"/pose",
	response_model=JudgmentResponse,
	responses={
		400: {"model": ErrorResponse},
		500: {"model": ErrorResponse},
		503: {"model": ErrorResponse},
	},
)
async def estimate_pose(request: Request, state: AppState = Depends(require_ready)):
	"""
	Multipart upload, field "image". Returns which wrist is closest to the nose.
	"""
	try:
		form = await request.form()
	except Exception as e:
		logger.info("[Pose] Unreadable form body: %s", e)
		return _error(400, "No image uploaded")
	upload = form.get(IMAGE_FIELD)
	if not isinstance(upload, UploadFile):
		return _error(400, "No image uploaded")

	try:
		data = await upload.read()
		judgment = await asyncio.to_thread(judge_image, data, state.estimator, state.cfg)
	except MissingAnchorError:
		return _error(400, "Nose not detected")
	except Exception:
		logger.exception("[Pose] Pose estimation error (file=%r)", upload.filename)
		return _error(500, "Pose estimation failed")
	finally:
		await upload.close()

	if not math.isfinite(judgment.distance):
		logger.warning("[Pose] No wrist detected; defaulting closestHand to %s", judgment.closest_hand)
	logger.debug(
		"[Pose] closest=%s distance=%s confidence=%.4f accepted=%s",
		judgment.closest_hand,
		judgment.distance,
		judgment.confidence,
		judgment.accepted,
	)
	return judgment.to_dict()
