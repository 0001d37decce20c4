from __future__ import annotations

import threading

from handreach.pose.base import PoseEstimator
from handreach.pose.types import Keypoint, PoseEstimate


POSENET_PARTS = [
	"nose",
	"leftEye",
	"rightEye",
	"leftEar",
	"rightEar",
	"leftShoulder",
	"rightShoulder",
	"leftElbow",
	"rightElbow",
	"leftWrist",
	"rightWrist",
	"leftHip",
	"rightHip",
	"leftKnee",
	"rightKnee",
	"leftAnkle",
	"rightAnkle",
]


class MediaPipePoseEstimator(PoseEstimator):
	"""
	MediaPipe Pose estimator that outputs the 17 PoseNet keypoints.

	Notes:
	- MediaPipe uses normalized coordinates; we convert to pixel space.
	- `visibility` is used as score (best-effort).
	- Runs in static image mode: every upload is an unrelated photo.
	"""

	def __init__(
		self,
		model_complexity: int = 1,
		min_detection_confidence: float = 0.5,
		flip_horizontal: bool = False,
	) -> None:
		try:
			import mediapipe as mp  # type: ignore
		except ImportError as e:
			raise RuntimeError(
				"MediaPipe is not installed. Install pose deps with: pip install -e .[pose]"
			) from e

		self._mp = mp
		self._flip = bool(flip_horizontal)
		self._lock = threading.Lock()
		self._pose = mp.solutions.pose.Pose(
			static_image_mode=True,
			model_complexity=int(model_complexity),
			enable_segmentation=False,
			min_detection_confidence=float(min_detection_confidence),
		)

	def name(self) -> str:
		return "mediapipe_pose"

	def estimate(self, rgb) -> PoseEstimate:
		# rgb: HxWx3
		h, w = int(rgb.shape[0]), int(rgb.shape[1])
		# The underlying graph is not reentrant.
		with self._lock:
			res = self._pose.process(rgb)
		out = PoseEstimate(backend=self.name(), width=w, height=h)
		if not res or not getattr(res, "pose_landmarks", None):
			return out

		lm = res.pose_landmarks.landmark
		PL = self._mp.solutions.pose.PoseLandmark
		mapping = {
			"nose": PL.NOSE,
			"leftEye": PL.LEFT_EYE,
			"rightEye": PL.RIGHT_EYE,
			"leftEar": PL.LEFT_EAR,
			"rightEar": PL.RIGHT_EAR,
			"leftShoulder": PL.LEFT_SHOULDER,
			"rightShoulder": PL.RIGHT_SHOULDER,
			"leftElbow": PL.LEFT_ELBOW,
			"rightElbow": PL.RIGHT_ELBOW,
			"leftWrist": PL.LEFT_WRIST,
			"rightWrist": PL.RIGHT_WRIST,
			"leftHip": PL.LEFT_HIP,
			"rightHip": PL.RIGHT_HIP,
			"leftKnee": PL.LEFT_KNEE,
			"rightKnee": PL.RIGHT_KNEE,
			"leftAnkle": PL.LEFT_ANKLE,
			"rightAnkle": PL.RIGHT_ANKLE,
		}
		for part in POSENET_PARTS:
			idx = int(mapping[part])
			if idx >= len(lm):
				continue
			p = lm[idx]
			x = float(p.x) * float(w)
			if self._flip:
				x = float(w) - x
			out.keypoints.append(
				Keypoint(
					part=part,
					x=x,
					y=float(p.y) * float(h),
					score=float(getattr(p, "visibility", 0.0) or 0.0),
				)
			)
		return out

	def close(self) -> None:
		with self._lock:
			if self._pose is not None:
				self._pose.close()
				self._pose = None
