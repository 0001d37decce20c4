from __future__ import annotations

import logging

from handreach.config import AppConfig
from handreach.imaging import decode_image
from handreach.pose.base import PoseEstimator
from handreach.pose.decision import Judgment, decide, select_keypoints

logger = logging.getLogger(__name__)


def judge_image(data: bytes, estimator: PoseEstimator, cfg: AppConfig) -> Judgment:
	"""
	Full per-image pipeline: decode -> estimate -> filter nose/wrists -> decide.

	Blocking (decode + inference); callers on the event loop should run it in a thread.
	Raises ImageDecodeError, MissingAnchorError, or whatever the estimator raises.
	"""
	rgb = decode_image(data)
	estimate = estimator.estimate(rgb)
	logger.debug("%s found %d keypoints: %s", estimate.backend, len(estimate.keypoints), estimate.as_dicts())
	keypoints = select_keypoints(estimate, min_score=cfg.pose.min_keypoint_score)
	return decide(
		keypoints,
		threshold_distance=cfg.decision.threshold_distance,
		acceptance_threshold=cfg.decision.acceptance_threshold,
	)
