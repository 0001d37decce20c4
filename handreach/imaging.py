from __future__ import annotations

import cv2
import numpy as np


class ImageDecodeError(ValueError):
	"""Uploaded bytes are empty or not a decodable image."""


def decode_image(data: bytes):
	"""
	Decode encoded image bytes (JPEG/PNG/...) into an RGB uint8 array (H,W,3).
	"""
	if not data:
		raise ImageDecodeError("empty image payload")
	arr = np.frombuffer(data, dtype=np.uint8)
	bgr = cv2.imdecode(arr, cv2.IMREAD_COLOR)
	if bgr is None or bgr.size == 0:
		raise ImageDecodeError("could not decode image")
	return cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
