from typing import List, Optional

import cv2
import numpy as np
import pytest
from fastapi.testclient import TestClient

from handreach.config import AppConfig
from handreach.pose.base import PoseEstimator
from handreach.pose.types import Keypoint, PoseEstimate
from server import create_app


class FakeEstimator(PoseEstimator):
	"""Returns a fixed keypoint list (or raises) instead of running a model."""

	def __init__(self, keypoints: Optional[List[Keypoint]] = None, error: Optional[Exception] = None) -> None:
		self.keypoints = list(keypoints or [])
		self.error = error
		self.calls = 0
		self.closed = False

	def name(self) -> str:
		return "fake"

	def estimate(self, rgb) -> PoseEstimate:
		self.calls += 1
		if self.error is not None:
			raise self.error
		return PoseEstimate(
			backend=self.name(),
			width=int(rgb.shape[1]),
			height=int(rgb.shape[0]),
			keypoints=list(self.keypoints),
		)

	def close(self) -> None:
		self.closed = True


def kp(part: str, x: float, y: float, score: float = 0.9) -> Keypoint:
	return Keypoint(part=part, x=x, y=y, score=score)


@pytest.fixture
def png_bytes() -> bytes:
	img = np.zeros((20, 30, 3), dtype=np.uint8)
	img[:, :, 2] = 255
	ok, buf = cv2.imencode(".png", img)
	assert ok
	return buf.tobytes()


@pytest.fixture
def make_client():
	"""Build a TestClient around create_app with a fake estimator; lifespan runs on enter."""
	clients = []

	def _make(estimator: Optional[PoseEstimator] = None, cfg: Optional[AppConfig] = None, load_error: Optional[Exception] = None):
		def factory(_pose_cfg):
			if load_error is not None:
				raise load_error
			return estimator if estimator is not None else FakeEstimator()

		client = TestClient(create_app(cfg or AppConfig(), estimator_factory=factory))
		client.__enter__()
		clients.append(client)
		return client

	yield _make
	for c in clients:
		c.__exit__(None, None, None)
