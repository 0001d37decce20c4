"""
Pose estimation utilities.

This package defines a model-agnostic PoseEstimator interface, a MediaPipe adapter
that emits PoseNet part names, and the nose/wrist decision logic built on top.
"""
