"""
Interface of the visual SLAM engine the bridge reads from.

Engine bindings implement PoseEstimator; the bridge never configures or
drives the engine beyond handing it images.
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np

from orb_slam_bridge.core.types import MapPoint


class PoseEstimator(ABC):
    """Black-box visual SLAM engine.

    Every track_* call returns the camera-from-world pose of the frame as a
    4x4 float32 matrix, or an empty array when tracking is lost. Bindings
    implement the modes their engine was built for.
    """

    def __init__(self, vocabulary_file_path: str, settings_file_path: str):
        self.vocabulary_file_path = vocabulary_file_path
        self.settings_file_path = settings_file_path

    def track_monocular(self, image: np.ndarray, timestamp: float) -> np.ndarray:
        raise NotImplementedError(f"{type(self).__name__} does not support monocular tracking")

    def track_stereo(self, left: np.ndarray, right: np.ndarray, timestamp: float) -> np.ndarray:
        raise NotImplementedError(f"{type(self).__name__} does not support stereo tracking")

    def track_rgbd(self, rgb: np.ndarray, depth: np.ndarray, timestamp: float) -> np.ndarray:
        raise NotImplementedError(f"{type(self).__name__} does not support RGB-D tracking")

    @abstractmethod
    def tracked_map_points(self) -> Sequence[Optional[MapPoint]]:
        """Landmarks matched in the last tracked frame"""

    def shutdown(self) -> None:
        pass
