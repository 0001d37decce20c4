import json

import pytest

from handreach import config as config_mod
from handreach.config import AppConfig, load_config


def _write(tmp_path, obj) -> str:
	p = tmp_path / "config.json"
	p.write_text(json.dumps(obj) if not isinstance(obj, str) else obj, encoding="utf-8")
	return str(p)


def test_missing_file_gives_defaults(tmp_path):
	cfg = load_config(tmp_path / "nope.json")
	assert cfg == AppConfig()
	assert cfg.decision.threshold_distance == 550.0
	assert cfg.decision.acceptance_threshold == 0.1
	assert cfg.pose.backend == "mediapipe"
	assert cfg.server.cors_allow_origins == ["*"]


def test_malformed_file_gives_defaults(tmp_path):
	assert load_config(_write(tmp_path, "{not json")) == AppConfig()
	assert load_config(_write(tmp_path, "[1, 2]")) == AppConfig()


def test_overrides(tmp_path):
	cfg = load_config(
		_write(
			tmp_path,
			{
				"server": {"host": "127.0.0.1", "port": "9001", "cors_allow_origins": "http://localhost:3000"},
				"pose": {
					"backend": "MediaPipe",
					"model_complexity": 2,
					"min_detection_confidence": 0.3,
					"min_keypoint_score": 0.25,
					"flip_horizontal": "yes",
				},
				"decision": {"threshold_distance": 1100, "acceptance_threshold": 0.2},
				"logging": {"level": "debug"},
			},
		)
	)
	assert cfg.server.host == "127.0.0.1"
	assert cfg.server.port == 9001
	assert cfg.server.cors_allow_origins == ["http://localhost:3000"]
	assert cfg.pose.backend == "mediapipe"
	assert cfg.pose.model_complexity == 2
	assert cfg.pose.min_detection_confidence == pytest.approx(0.3)
	assert cfg.pose.min_keypoint_score == pytest.approx(0.25)
	assert cfg.pose.flip_horizontal is True
	assert cfg.decision.threshold_distance == 1100.0
	assert cfg.decision.acceptance_threshold == pytest.approx(0.2)
	assert cfg.logging.level == "DEBUG"


def test_invalid_values_fall_back(tmp_path):
	cfg = load_config(
		_write(
			tmp_path,
			{
				"server": {"port": -1},
				"pose": {"model_complexity": 7, "min_detection_confidence": 3, "min_keypoint_score": "x"},
				"decision": {"threshold_distance": 0, "acceptance_threshold": -0.5},
			},
		)
	)
	assert cfg.server.port == 8000
	assert cfg.pose.model_complexity == 1
	assert cfg.pose.min_detection_confidence == 0.5
	assert cfg.pose.min_keypoint_score == 0.0
	assert cfg.decision.threshold_distance == 550.0
	assert cfg.decision.acceptance_threshold == 0.1


def test_set_config_path_resets_cache(tmp_path, monkeypatch):
	monkeypatch.setattr(config_mod, "_CONFIG_PATH", None)
	monkeypatch.setattr(config_mod, "_CONFIG_CACHE", None)
	config_mod.set_config_path(_write(tmp_path, {"decision": {"threshold_distance": 300}}))
	assert config_mod.get_config().decision.threshold_distance == 300.0
	assert config_mod.get_config() is config_mod.get_config()


def test_non_finite_thresholds_fall_back(tmp_path):
	cfg = load_config(
		_write(tmp_path, {"decision": {"threshold_distance": float("inf"), "acceptance_threshold": float("nan")}})
	)
	assert cfg.decision.threshold_distance == 550.0
	assert cfg.decision.acceptance_threshold == 0.1
