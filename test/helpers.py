import numpy as np


def make_raw_transform(R, t, dtype=np.float32):
    T = np.eye(4)
    T[:3, :3] = R
    T[:3, 3] = t
    return T.astype(dtype)


class FakeHeader:
    def __init__(self, frame_id='camera', stamp=0.0):
        self.frame_id = frame_id
        self.stamp = stamp


class RecordingPublisher:
    """Stands in for PosePublisher, records every call"""

    def __init__(self):
        self.transforms = []
        self.poses = []
        self.clouds = []
        self.broadcasts = []

    def publish_transform(self, T, header):
        self.transforms.append((T, header))

    def publish_pose(self, T, header):
        self.poses.append((T, header))

    def publish_point_cloud(self, points, header):
        self.clouds.append((points, header))

    def broadcast_transform(self, T, stamp):
        self.broadcasts.append((T, stamp))
