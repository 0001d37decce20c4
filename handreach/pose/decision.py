"""
Keypoint-to-decision pipeline.

Turns the nose/wrist keypoints of one pose into a closest-hand judgment. Pure
functions only: no logging, no I/O, nothing shared between calls.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from handreach.pose.types import Keypoint, PoseEstimate

NOSE = "nose"
LEFT_WRIST = "leftWrist"
RIGHT_WRIST = "rightWrist"
PARTS_OF_INTEREST = (NOSE, LEFT_WRIST, RIGHT_WRIST)

THRESHOLD_DISTANCE = 550.0
ACCEPTANCE_THRESHOLD = 0.1

KeypointSet = Dict[str, Keypoint]


class MissingAnchorError(ValueError):
	"""Raised when the nose keypoint is absent, so no distance can be measured."""

	def __init__(self, message: str = "Nose not detected") -> None:
		super().__init__(message)


@dataclass(frozen=True)
class Judgment:
	closest_hand: str
	distance: float  # rounded to 2 decimals; inf when neither wrist was detected
	accepted: bool
	confidence: float  # unrounded, kept for logs

	def to_dict(self) -> Dict[str, Any]:
		# JSON has no Infinity; the both-wrists-missing case goes out as null.
		distance: Optional[float] = self.distance if math.isfinite(self.distance) else None
		return {"closestHand": self.closest_hand, "distance": distance, "accepted": self.accepted}


def euclidean_distance(a: Keypoint, b: Keypoint) -> float:
	return math.sqrt((a.x - b.x) ** 2 + (a.y - b.y) ** 2)


def select_keypoints(
	source: Union[PoseEstimate, Iterable[Keypoint]],
	min_score: float = 0.0,
) -> KeypointSet:
	"""
	Keep only nose/leftWrist/rightWrist, dropping keypoints scored below `min_score`.
	Later duplicates of a part overwrite earlier ones.
	"""
	keypoints = source.keypoints if isinstance(source, PoseEstimate) else source
	out: KeypointSet = {}
	for kp in keypoints:
		if kp.part not in PARTS_OF_INTEREST:
			continue
		if float(kp.score) < float(min_score):
			continue
		out[kp.part] = kp
	return out


def _round_half_up(value: float) -> float:
	# Two decimals, ties away from zero on the exact binary value (round() ties to even).
	return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _meets_threshold(min_dist: float, threshold_distance: float, acceptance_threshold: float) -> bool:
	"""
	Exact form of max(0, 1 - min_dist / threshold_distance) >= acceptance_threshold.

	Thresholds are read as the decimals they are written as, so 495 px against
	550 / 0.1 lands exactly on the inclusive boundary.
	"""
	acceptance = Fraction(repr(float(acceptance_threshold)))
	if not math.isfinite(min_dist):
		return acceptance <= 0
	confidence = 1 - Fraction(min_dist) / Fraction(repr(float(threshold_distance)))
	return max(Fraction(0), confidence) >= acceptance


def decide(
	keypoints: Mapping[str, Keypoint],
	threshold_distance: float = THRESHOLD_DISTANCE,
	acceptance_threshold: float = ACCEPTANCE_THRESHOLD,
) -> Judgment:
	"""
	Pick the wrist closest to the nose and decide whether it is close enough.

	confidence = max(0, 1 - min_dist / threshold_distance); accepted when
	confidence >= acceptance_threshold. Acceptance uses the unrounded distance;
	only the reported distance is rounded. Equal distances (including two missing
	wrists) resolve to the left wrist.
	"""
	nose = keypoints.get(NOSE)
	if nose is None:
		raise MissingAnchorError()

	left = keypoints.get(LEFT_WRIST)
	right = keypoints.get(RIGHT_WRIST)
	dist_left = euclidean_distance(left, nose) if left is not None else math.inf
	dist_right = euclidean_distance(right, nose) if right is not None else math.inf

	min_dist = min(dist_left, dist_right)
	closest_hand = LEFT_WRIST if min_dist == dist_left else RIGHT_WRIST

	confidence = max(0.0, 1.0 - min_dist / float(threshold_distance))
	accepted = _meets_threshold(min_dist, threshold_distance, acceptance_threshold)

	distance = _round_half_up(min_dist) if math.isfinite(min_dist) else min_dist
	return Judgment(closest_hand=closest_hand, distance=distance, accepted=accepted, confidence=confidence)
