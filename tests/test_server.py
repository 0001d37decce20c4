import logging

import pytest

import handreach
from server import create_app, uvicorn_log_level


@pytest.mark.parametrize(
	"level, expected",
	[
		(logging.NOTSET, "debug"),
		(5, "debug"),
		(logging.DEBUG, "debug"),
		(15, "debug"),
		(logging.INFO, "info"),
		(logging.WARNING, "warning"),
		(35, "warning"),
		(logging.ERROR, "error"),
		(logging.CRITICAL, "critical"),
	],
)
def test_uvicorn_log_level(level, expected):
	assert uvicorn_log_level(level) == expected


def test_app_version_comes_from_package():
	assert isinstance(handreach.__version__, str) and handreach.__version__
	assert create_app().version == handreach.__version__
