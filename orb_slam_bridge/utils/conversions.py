"""
RigidTransform / CloudPoint <-> ROS2 message conversions.
"""
from typing import List, Optional

from builtin_interfaces.msg import Time
from geometry_msgs.msg import Pose, Transform, TransformStamped
from sensor_msgs.msg import PointCloud2, PointField
from std_msgs.msg import Header

from orb_slam_bridge.core.landmarks import POINT_STEP, pack_cloud_points
from orb_slam_bridge.core.types import CloudPoint, RigidTransform


def copy_header(header: Header, frame_id: Optional[str] = None) -> Header:
    """Copy a header so the caller's message is never modified"""
    out = Header()
    out.stamp = Time(sec=header.stamp.sec, nanosec=header.stamp.nanosec)
    out.frame_id = header.frame_id if frame_id is None else frame_id
    return out


def rigid_to_transform_msg(T: RigidTransform) -> Transform:
    msg = Transform()
    msg.translation.x = float(T.translation[0])
    msg.translation.y = float(T.translation[1])
    msg.translation.z = float(T.translation[2])
    msg.rotation.x = float(T.rotation[0])
    msg.rotation.y = float(T.rotation[1])
    msg.rotation.z = float(T.rotation[2])
    msg.rotation.w = float(T.rotation[3])
    return msg


def rigid_to_pose_msg(T: RigidTransform) -> Pose:
    msg = Pose()
    msg.position.x = float(T.translation[0])
    msg.position.y = float(T.translation[1])
    msg.position.z = float(T.translation[2])
    msg.orientation.x = float(T.rotation[0])
    msg.orientation.y = float(T.rotation[1])
    msg.orientation.z = float(T.rotation[2])
    msg.orientation.w = float(T.rotation[3])
    return msg


def rigid_to_transform_stamped(T: RigidTransform, stamp: Time, frame_id: str,
                               child_frame_id: str) -> TransformStamped:
    t = TransformStamped()
    t.header.stamp = stamp
    t.header.frame_id = frame_id
    t.child_frame_id = child_frame_id
    t.transform = rigid_to_transform_msg(T)
    return t


def points_to_cloud_msg(points: List[CloudPoint], header: Header) -> PointCloud2:
    """
    Build an unorganized XYZRGB PointCloud2

    Args:
        points: filtered landmarks
        header: header to stamp the cloud with (used as is)

    Returns:
        sensor_msgs/PointCloud2 message
    """
    msg = PointCloud2()
    msg.header = header

    # rgb is declared FLOAT32 holding the packed integer, as PCL does
    msg.fields = [
        PointField(name='x', offset=0, datatype=PointField.FLOAT32, count=1),
        PointField(name='y', offset=4, datatype=PointField.FLOAT32, count=1),
        PointField(name='z', offset=8, datatype=PointField.FLOAT32, count=1),
        PointField(name='rgb', offset=12, datatype=PointField.FLOAT32, count=1),
    ]

    msg.is_bigendian = False
    msg.point_step = POINT_STEP
    msg.row_step = msg.point_step * len(points)
    msg.is_dense = True
    msg.height = 1
    msg.width = len(points)
    msg.data = pack_cloud_points(points)

    return msg
