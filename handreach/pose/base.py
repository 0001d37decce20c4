from __future__ import annotations

from abc import ABC, abstractmethod

from handreach.pose.types import PoseEstimate


class PoseEstimator(ABC):
	"""
	Model adapter interface.

	Implementations take an RGB image (H,W,3 uint8) and return a PoseEstimate with
	PoseNet part names ("nose", "leftWrist", ...). A single instance is loaded at
	startup and shared by all requests, so `estimate` must be safe to call from
	several worker threads.
	"""

	@abstractmethod
	def name(self) -> str: ...

	@abstractmethod
	def estimate(self, rgb) -> PoseEstimate: ...

	@abstractmethod
	def close(self) -> None: ...
