"""
Thread-safe holder for the latest camera pose.
"""
from threading import Lock
from typing import Optional

from orb_slam_bridge.core.types import RigidTransform


class PoseCell:
    """Latest world-from-camera pose shared by the tracking and TF timer callbacks.

    RigidTransform is immutable, so swapping the reference under the lock is
    enough to rule out torn reads.
    """

    def __init__(self, initial: Optional[RigidTransform] = None):
        self._lock = Lock()
        self._pose = initial if initial is not None else RigidTransform.identity()
        self._update_count = 0

    def update(self, pose: RigidTransform) -> None:
        if not isinstance(pose, RigidTransform):
            raise TypeError(f"Expected RigidTransform, got {type(pose).__name__}")

        with self._lock:
            self._pose = pose
            self._update_count += 1

    def read(self) -> RigidTransform:
        with self._lock:
            return self._pose

    @property
    def update_count(self) -> int:
        with self._lock:
            return self._update_count
