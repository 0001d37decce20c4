"""
handreach application package.

Pose-based hand proximity service: decode an image, estimate the pose, and judge
which wrist is closest to the nose.
"""

from importlib.metadata import PackageNotFoundError, version

try:
	__version__ = version("handreach")
except PackageNotFoundError:
	# Running from a source checkout without `pip install -e .`.
	__version__ = "0+unknown"
