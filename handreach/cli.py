"""
Offline runner: same pipeline as POST /pose, applied to local image files.

	python -m handreach.cli photo.jpg other.png --config config.json
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from handreach.config import AppConfig, get_config, set_config_path
from handreach.imaging import ImageDecodeError
from handreach.pipeline import judge_image
from handreach.pose.base import PoseEstimator
from handreach.pose.decision import MissingAnchorError
from handreach.pose.loader import load_estimator

logger = logging.getLogger(__name__)


def judge_file(path: Path, estimator: PoseEstimator, cfg: AppConfig) -> Dict[str, Any]:
	"""Return the judgment dict for one file, or {"error": ...} like the HTTP API."""
	try:
		data = path.read_bytes()
	except OSError as e:
		return {"file": str(path), "error": f"Cannot read file: {e.strerror or e}"}
	try:
		judgment = judge_image(data, estimator, cfg)
	except MissingAnchorError:
		return {"file": str(path), "error": "Nose not detected"}
	except ImageDecodeError as e:
		return {"file": str(path), "error": f"Pose estimation failed: {e}"}
	return {"file": str(path), **judgment.to_dict()}


def run(paths: List[Path], estimator: PoseEstimator, cfg: AppConfig) -> int:
	"""Print one JSON line per file; exit status 1 if any file failed."""
	failed = 0
	for p in paths:
		out = judge_file(p, estimator, cfg)
		if "error" in out:
			failed += 1
		print(json.dumps(out))
	return 1 if failed else 0


def main(argv: Optional[List[str]] = None) -> None:
	import argparse

	parser = argparse.ArgumentParser(description="Judge which wrist is closest to the nose in image files.")
	parser.add_argument("images", nargs="+", help="Image files (JPEG, PNG, ...).")
	parser.add_argument("--config", help="Path to config.json (default: repo root).")
	parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
	args = parser.parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.debug else logging.INFO,
		format="%(levelname)s:%(name)s:%(message)s",
	)
	if args.config:
		set_config_path(args.config)
	cfg = get_config()

	try:
		estimator = load_estimator(cfg.pose)
	except Exception as e:
		logging.exception("Fatal error: %s", e)
		sys.exit(1)
	try:
		code = run([Path(p) for p in args.images], estimator, cfg)
	finally:
		estimator.close()
	sys.exit(code)


if __name__ == "__main__":
	main()
