from __future__ import annotations

import logging

from handreach.config import PoseConfig
from handreach.pose.base import PoseEstimator

logger = logging.getLogger(__name__)

BACKENDS = ("mediapipe",)


def load_estimator(cfg: PoseConfig) -> PoseEstimator:
	"""
	Build the configured estimator. Loading weights is slow; call once per process.
	"""
	backend = (cfg.backend or "").strip().lower()
	if backend not in BACKENDS:
		raise ValueError(f"Unknown pose backend {cfg.backend!r}; expected one of {', '.join(BACKENDS)}")

	logger.info("Loading pose model (backend=%s, complexity=%d)...", backend, cfg.model_complexity)
	from handreach.pose.mediapipe_provider import MediaPipePoseEstimator

	estimator = MediaPipePoseEstimator(
		model_complexity=cfg.model_complexity,
		min_detection_confidence=cfg.min_detection_confidence,
		flip_horizontal=cfg.flip_horizontal,
	)
	logger.info("Pose model loaded: %s", estimator.name())
	return estimator
