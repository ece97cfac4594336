"""
Outbound side of the bridge: formats poses and keypoints and pushes them
onto ROS2 publishers and the TF broadcaster.
"""
from typing import List

from builtin_interfaces.msg import Time
from geometry_msgs.msg import PoseStamped, TransformStamped
from std_msgs.msg import Header

from orb_slam_bridge.core.types import CloudPoint, RigidTransform
from orb_slam_bridge.utils.conversions import (
    copy_header,
    points_to_cloud_msg,
    rigid_to_pose_msg,
    rigid_to_transform_msg,
    rigid_to_transform_stamped,
)
from orb_slam_bridge.utils.topics import WORLD_FRAME_ID


class PosePublisher:
    """Stateless apart from the channel handles it is bound to.

    Publish failures are left to the transport; nothing here retries.
    """

    def __init__(self, transform_pub, pose_pub, cloud_pub, tf_broadcaster,
                 frame_id: str, child_frame_id: str):
        self.transform_pub = transform_pub
        self.pose_pub = pose_pub
        self.cloud_pub = cloud_pub
        self.tf_broadcaster = tf_broadcaster
        self.frame_id = frame_id
        self.child_frame_id = child_frame_id

    def publish_transform(self, T: RigidTransform, header: Header) -> None:
        msg = TransformStamped()
        msg.header = copy_header(header)
        msg.child_frame_id = self.child_frame_id
        msg.transform = rigid_to_transform_msg(T)
        self.transform_pub.publish(msg)

    def publish_pose(self, T: RigidTransform, header: Header) -> None:
        msg = PoseStamped()
        msg.header = copy_header(header, frame_id=WORLD_FRAME_ID)
        msg.pose = rigid_to_pose_msg(T)
        self.pose_pub.publish(msg)

    def publish_point_cloud(self, points: List[CloudPoint], header: Header) -> None:
        msg = points_to_cloud_msg(points, copy_header(header, frame_id=WORLD_FRAME_ID))
        self.cloud_pub.publish(msg)

    def broadcast_transform(self, T: RigidTransform, stamp: Time) -> None:
        """Send T on /tf as frame_id -> child_frame_id"""
        self.tf_broadcaster.sendTransform(
            rigid_to_transform_stamped(T, stamp, self.frame_id, self.child_frame_id))
