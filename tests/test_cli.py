import json

import pytest

from conftest import FakeEstimator, kp
from handreach import cli
from handreach.config import AppConfig, PoseConfig
from handreach.pose.loader import load_estimator


def test_judge_file_success(tmp_path, png_bytes):
	p = tmp_path / "a.png"
	p.write_bytes(png_bytes)
	est = FakeEstimator([kp("nose", 0, 0), kp("rightWrist", 3, 4)])
	out = cli.judge_file(p, est, AppConfig())
	assert out == {"file": str(p), "closestHand": "rightWrist", "distance": 5.0, "accepted": True}


def test_judge_file_errors(tmp_path, png_bytes):
	est = FakeEstimator([kp("leftWrist", 1, 1)])
	missing = cli.judge_file(tmp_path / "missing.png", est, AppConfig())
	assert missing["error"].startswith("Cannot read file")

	p = tmp_path / "a.png"
	p.write_bytes(png_bytes)
	assert cli.judge_file(p, est, AppConfig())["error"] == "Nose not detected"

	bad = tmp_path / "bad.png"
	bad.write_bytes(b"nope")
	assert cli.judge_file(bad, est, AppConfig())["error"].startswith("Pose estimation failed")


def test_run_prints_json_lines_and_exit_code(tmp_path, png_bytes, capsys):
	good = tmp_path / "good.png"
	good.write_bytes(png_bytes)
	est = FakeEstimator([kp("nose", 0, 0), kp("leftWrist", 0, 20)])

	assert cli.run([good], est, AppConfig()) == 0
	lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
	assert lines == [{"file": str(good), "closestHand": "leftWrist", "distance": 20.0, "accepted": True}]

	assert cli.run([good, tmp_path / "missing.png"], est, AppConfig()) == 1
	assert len(capsys.readouterr().out.splitlines()) == 2


def test_unknown_backend_rejected():
	with pytest.raises(ValueError, match="Unknown pose backend"):
		load_estimator(PoseConfig(backend="openpose"))
