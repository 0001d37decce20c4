"""
Explicit app state – single source of truth for runtime lifecycle.
Created in lifespan, attached to app.state.state; injected into routes via Depends(get_state).
"""
from typing import Optional

from handreach.config import AppConfig
from handreach.pose.base import PoseEstimator


class AppState:
	"""
	Holds the config and the model handle shared by all requests.
	The estimator stays None until the lifespan has loaded it (or if loading failed).
	"""

	cfg: AppConfig
	estimator: Optional[PoseEstimator] = None
	load_error: Optional[str] = None

	def __init__(self, cfg: AppConfig) -> None:
		self.cfg = cfg
		self.estimator = None
		self.load_error = None

	@property
	def ready(self) -> bool:
		return self.estimator is not None
