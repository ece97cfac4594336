"""
Ingestion path: raw SLAM output -> converted pose -> publishers + PoseCell.
"""
import logging
from typing import Iterable, Optional

from orb_slam_bridge.core.landmarks import filter_map_points
from orb_slam_bridge.core.pose_cell import PoseCell
from orb_slam_bridge.core.transforms import convert_orb_slam_pose, is_tracking_lost
from orb_slam_bridge.core.types import MapPoint


class SlamBridge:
    """Turns each tracked frame into transform, pose and keypoint messages.

    Calls are expected to be serialized by the caller (one tracking callback
    at a time); the only state shared with the TF timer is pose_cell.
    """

    def __init__(self, publisher, pose_cell: Optional[PoseCell] = None,
                 logger=None, verbose: bool = False):
        self.publisher = publisher
        self.pose_cell = pose_cell if pose_cell is not None else PoseCell()
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.verbose = verbose

        self.frames_tracked = 0
        self.frames_lost = 0

    def track(self, T_C_W, map_points: Iterable[Optional[MapPoint]], header) -> bool:
        """Publish one estimator result.

        Args:
            T_C_W: 4x4 camera-from-world pose from the engine, empty if lost
            map_points: landmarks of the frame, entries may be None
            header: std_msgs/Header of the source image

        Returns:
            True if a pose was published, False if tracking was lost

        Raises:
            ValueError: T_C_W is neither empty nor 4x4
        """
        if is_tracking_lost(T_C_W):
            self.frames_lost += 1
            if self.verbose:
                self.logger.warning(f"Tracking lost ({self.frames_lost} frames so far)")
            return False

        T_W_C = convert_orb_slam_pose(T_C_W).inverse()

        self.publisher.publish_transform(T_W_C, header)
        self.publisher.publish_pose(T_W_C, header)

        points = filter_map_points(map_points)
        self.publisher.publish_point_cloud(points, header)

        self.pose_cell.update(T_W_C)
        self.frames_tracked += 1

        if self.verbose:
            t = T_W_C.translation
            self.logger.info(
                f"Frame {self.frames_tracked}: t=({t[0]:.3f}, {t[1]:.3f}, {t[2]:.3f}), "
                f"{len(points)} keypoints"
            )

        return True

    def track_from(self, estimator, T_C_W, header) -> bool:
        """track() with the landmarks of the estimator's last frame"""
        if is_tracking_lost(T_C_W):
            return self.track(T_C_W, [], header)
        return self.track(T_C_W, estimator.tracked_map_points(), header)
