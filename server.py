import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app_state import AppState
from deps import ModelNotReadyError
from handreach import __version__
from handreach.config import AppConfig, PoseConfig, get_config, set_config_path
from handreach.pose.base import PoseEstimator
from handreach.pose.loader import load_estimator
from routers import pose as pose_router

logger = logging.getLogger(__name__)

EstimatorFactory = Callable[[PoseConfig], PoseEstimator]


def create_app(
	cfg: Optional[AppConfig] = None,
	estimator_factory: EstimatorFactory = load_estimator,
) -> FastAPI:
	"""
	Build the API. The pose model is loaded once in the lifespan, before the first
	request is served, and handed to routes through AppState.
	"""
	cfg = cfg or get_config()

	@asynccontextmanager
	async def lifespan(app: FastAPI):
		state = AppState(cfg)
		app.state.state = state
		try:
			try:
				state.estimator = await asyncio.to_thread(estimator_factory, cfg.pose)
			except Exception as e:
				# Keep serving / so health checks work; /pose answers 503 until restart.
				state.load_error = f"{type(e).__name__}: {e}"
				logger.exception("[Pose] Model load failed")
			yield
		finally:
			estimator = state.estimator
			state.estimator = None
			if estimator is not None:
				try:
					estimator.close()
				except Exception:
					logger.exception("[Pose] Error closing model")

	app = FastAPI(title="handreach", version=__version__, lifespan=lifespan)
	app.add_middleware(
		CORSMiddleware,
		allow_origins=list(cfg.server.cors_allow_origins),
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)

	@app.exception_handler(ModelNotReadyError)
	async def _model_not_ready(request: Request, exc: ModelNotReadyError):
		logger.warning("[Pose] Rejecting %s: model not ready (%s)", request.url.path, exc)
		return JSONResponse(status_code=503, content={"error": "Pose model not ready"})

	app.include_router(pose_router.router)
	return app


app = create_app()


def uvicorn_log_level(level: int) -> str:
	"""Map a logging level onto one of the names uvicorn accepts (NOTSET and custom levels included)."""
	for name in ("critical", "error", "warning", "info"):
		if level >= getattr(logging, name.upper()):
			return name
	return "debug"


def main() -> None:
	import argparse

	import uvicorn

	parser = argparse.ArgumentParser(description="Closest-hand pose API server.")
	parser.add_argument("--config", help="Path to config.json (default: repo root).")
	parser.add_argument("--host", help="Bind address (overrides config).")
	parser.add_argument("--port", type=int, help="Bind port (overrides config).")
	parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
	args = parser.parse_args()

	if args.config:
		set_config_path(args.config)
	cfg = get_config()

	level = logging.getLevelName(cfg.logging.level)
	if args.debug:
		level = logging.DEBUG
	elif not isinstance(level, int):
		level = logging.INFO
	logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")

	try:
		uvicorn.run(
			create_app(cfg),
			host=args.host or cfg.server.host,
			port=int(args.port or cfg.server.port),
			log_level=uvicorn_log_level(level),
		)
	except KeyboardInterrupt:
		print("\nInterrupted by user.")
	except Exception as e:
		logging.exception("Fatal error: %s", e)
		sys.exit(1)


if __name__ == "__main__":
	main()
