from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class Keypoint:
	"""
	A single 2D keypoint in pixel coordinates.
	"""

	part: str
	x: float
	y: float
	score: float = 1.0  # detection confidence [0..1] best-effort

	def as_dict(self) -> Dict[str, Any]:
		return {"part": self.part, "position": {"x": self.x, "y": self.y}, "score": self.score}


@dataclass(frozen=True)
class PoseEstimate:
	"""
	Single-person pose output for one image.

	- Coordinates are in pixel space of the decoded image.
	- `keypoints` is empty when the model found nobody.
	"""

	backend: str
	width: int
	height: int
	keypoints: List[Keypoint] = field(default_factory=list)

	def as_dicts(self) -> List[Dict[str, Any]]:
		return [kp.as_dict() for kp in self.keypoints]
