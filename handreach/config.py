from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServerConfig:
	host: str = "0.0.0.0"
	port: int = 8000
	cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class PoseConfig:
	# Estimator backend; only "mediapipe" ships today.
	backend: str = "mediapipe"
	model_complexity: int = 1  # 0, 1 or 2
	min_detection_confidence: float = 0.5
	# Keypoints scoring below this are treated as not detected. 0.0 keeps all.
	min_keypoint_score: float = 0.0
	# Mirror x coordinates (selfie-style input).
	flip_horizontal: bool = False


@dataclass(frozen=True)
class DecisionConfig:
	# Pixel distance at which confidence decays to 0. Tuned for ~257x200 model input;
	# recalibrate if the keypoint coordinate scale changes.
	threshold_distance: float = 550.0
	# Minimum confidence (inclusive) for a judgment to be accepted.
	acceptance_threshold: float = 0.1


@dataclass(frozen=True)
class LoggingConfig:
	level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
	server: ServerConfig = field(default_factory=ServerConfig)
	pose: PoseConfig = field(default_factory=PoseConfig)
	decision: DecisionConfig = field(default_factory=DecisionConfig)
	logging: LoggingConfig = field(default_factory=LoggingConfig)


_CONFIG_PATH: Optional[Path] = None
_CONFIG_CACHE: Optional[AppConfig] = None


def _repo_root() -> Path:
	# handreach/config.py -> repo root is one level up.
	return Path(__file__).resolve().parents[1]


def get_default_config_path() -> Path:
	return _repo_root() / "config.json"


def set_config_path(path: str | Path) -> None:
	"""
	Override the config path (must be called before first get_config()).
	Used by the CLI entry points; the server otherwise reads the default path.
	"""
	global _CONFIG_PATH
	global _CONFIG_CACHE
	_CONFIG_PATH = Path(path).expanduser().resolve()
	_CONFIG_CACHE = None


def _deep_get(d: Dict[str, Any], keys: list[str], default: Any = None) -> Any:
	cur: Any = d
	for k in keys:
		if not isinstance(cur, dict):
			return default
		cur = cur.get(k)
	return cur if cur is not None else default


def _as_int(v: Any, default: int) -> int:
	try:
		return int(v)
	except (TypeError, ValueError):
		return int(default)


def _as_float(v: Any, default: float) -> float:
	try:
		return float(v)
	except (TypeError, ValueError):
		return float(default)


def _as_bool(v: Any, default: bool) -> bool:
	if isinstance(v, bool):
		return v
	if isinstance(v, (int, float)):
		return bool(v)
	if isinstance(v, str):
		return v.strip().lower() in ("1", "true", "yes", "on")
	return bool(default)


def _as_str(v: Any, default: str = "") -> str:
	return str(v) if v is not None else str(default)


def _as_str_list(v: Any, default: List[str]) -> List[str]:
	if isinstance(v, str):
		return [v]
	if not isinstance(v, list):
		return list(default)
	return [str(x) for x in v if x is not None]


def load_config(path: Optional[str | Path] = None) -> AppConfig:
	p = Path(path).expanduser().resolve() if path else (_CONFIG_PATH or get_default_config_path())
	if not p.exists():
		# Defaults-only config; app can still run.
		return AppConfig()
	try:
		raw = json.loads(p.read_text(encoding="utf-8"))
	except (OSError, ValueError) as e:
		# If config is malformed, fail safe to defaults (but keep app running).
		logger.warning("Ignoring unreadable config %s: %s", p, e)
		return AppConfig()

	if not isinstance(raw, dict):
		return AppConfig()

	host = _as_str(_deep_get(raw, ["server", "host"], "0.0.0.0"), "0.0.0.0").strip() or "0.0.0.0"
	port = _as_int(_deep_get(raw, ["server", "port"], 8000), 8000)
	origins = _as_str_list(_deep_get(raw, ["server", "cors_allow_origins"], ["*"]), ["*"])

	backend = _as_str(_deep_get(raw, ["pose", "backend"], "mediapipe"), "mediapipe").strip().lower()
	complexity = _as_int(_deep_get(raw, ["pose", "model_complexity"], 1), 1)
	min_det = _as_float(_deep_get(raw, ["pose", "min_detection_confidence"], 0.5), 0.5)
	min_kp = _as_float(_deep_get(raw, ["pose", "min_keypoint_score"], 0.0), 0.0)
	flip = _as_bool(_deep_get(raw, ["pose", "flip_horizontal"], False), False)

	threshold = _as_float(_deep_get(raw, ["decision", "threshold_distance"], 550.0), 550.0)
	acceptance = _as_float(_deep_get(raw, ["decision", "acceptance_threshold"], 0.1), 0.1)

	level = _as_str(_deep_get(raw, ["logging", "level"], "INFO"), "INFO").strip().upper() or "INFO"

	return AppConfig(
		server=ServerConfig(
			host=host,
			port=int(port) if 0 < int(port) < 65536 else 8000,
			cors_allow_origins=origins,
		),
		pose=PoseConfig(
			backend=backend or "mediapipe",
			model_complexity=int(complexity) if int(complexity) in (0, 1, 2) else 1,
			min_detection_confidence=float(min_det) if 0.0 <= float(min_det) <= 1.0 else 0.5,
			min_keypoint_score=float(min_kp) if 0.0 <= float(min_kp) <= 1.0 else 0.0,
			flip_horizontal=flip,
		),
		decision=DecisionConfig(
			threshold_distance=float(threshold) if math.isfinite(threshold) and threshold > 0.0 else 550.0,
			acceptance_threshold=float(acceptance) if math.isfinite(acceptance) and acceptance >= 0.0 else 0.1,
		),
		logging=LoggingConfig(level=level),
	)


def get_config() -> AppConfig:
	global _CONFIG_CACHE
	if _CONFIG_CACHE is None:
		_CONFIG_CACHE = load_config()
	return _CONFIG_CACHE
