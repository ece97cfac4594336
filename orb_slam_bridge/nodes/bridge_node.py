"""
ROS2 front-ends of the ORB-SLAM bridge.

SlamBridgeNode owns the publishers, the pose cell and the TF timer; the
Monocular / Stereo / Rgbd subclasses feed camera images to the engine and
hand its output to the bridge.

Engine bindings start a node with:

    from orb_slam_bridge.nodes.bridge_node import main
    main(MyOrbSlamBinding, mode='stereo')
"""

# python imports
import rclpy
from rclpy.node import Node
from rclpy.callback_groups import MutuallyExclusiveCallbackGroup
from rclpy.executors import MultiThreadedExecutor
from tf2_ros import TransformBroadcaster
import cv_bridge
from message_filters import Subscriber, ApproximateTimeSynchronizer
from geometry_msgs.msg import PoseStamped, TransformStamped
from sensor_msgs.msg import Image, PointCloud2

# orb_slam_bridge imports
from orb_slam_bridge.core.bridge import SlamBridge
from orb_slam_bridge.core.broadcaster import TFBroadcastScheduler
from orb_slam_bridge.core.config import load_config
from orb_slam_bridge.core.pose_cell import PoseCell
from orb_slam_bridge.core.publisher import PosePublisher
from orb_slam_bridge.utils.topics import *


def stamp_to_sec(stamp) -> float:
    return stamp.sec + stamp.nanosec / 1e9


class SlamBridgeNode(Node):
    """Publishes engine poses and keypoints, and broadcasts the latest pose on /tf.

    Tracking callbacks and the TF timer live in separate mutually exclusive
    callback groups: each is serialized with itself, the two may run
    concurrently under a MultiThreadedExecutor.
    """

    def __init__(self, estimator_factory, node_name='orb_slam_bridge', **kwargs):
        """
        Args:
            estimator_factory: callable (vocabulary_file_path, settings_file_path)
                -> PoseEstimator, typically the binding class itself
            node_name: ROS2 node name
        """
        super().__init__(node_name, **kwargs)
        self.get_logger().info("ORB-SLAM bridge initializing...")

        self.estimator = None
        self.tf_scheduler = None

        self.tracking_group = MutuallyExclusiveCallbackGroup()
        self.tf_group = MutuallyExclusiveCallbackGroup()
        self.cv_bridge = cv_bridge.CvBridge()

        try:
            # Getting data and params
            self.config = load_config(self)
            self.verbose = self.config.verbose

            self.advertise_topics()

            # Last, so a failed setup never leaves a running engine behind
            self.estimator = estimator_factory(
                self.config.vocabulary_file_path, self.config.settings_file_path)
        except Exception:
            self.destroy_node()
            raise

        self.get_logger().info(
            f"ORB-SLAM bridge initialized: broadcasting {self.config.frame_id} -> "
            f"{self.config.child_frame_id} at {1.0 / self.config.tf_period:.0f} Hz"
        )

    def advertise_topics(self) -> None:
        """Create publishers, the TF broadcaster and the broadcast timer"""
        self.transform_pub = self.create_publisher(
            TransformStamped, TRANSFORM_TOPIC, PUBLISHER_QUEUE_SIZE)
        self.pose_pub = self.create_publisher(
            PoseStamped, POSE_TOPIC, PUBLISHER_QUEUE_SIZE)
        self.cloud_pub = self.create_publisher(
            PointCloud2, KEYPOINTS_CLOUD_TOPIC, PUBLISHER_QUEUE_SIZE)

        self.tf_broadcaster = TransformBroadcaster(self)

        self.publisher = PosePublisher(
            self.transform_pub,
            self.pose_pub,
            self.cloud_pub,
            self.tf_broadcaster,
            frame_id=self.config.frame_id,
            child_frame_id=self.config.child_frame_id,
        )

        self.pose_cell = PoseCell()
        self.bridge = SlamBridge(
            self.publisher, self.pose_cell, logger=self.get_logger(), verbose=self.verbose)

        # Creating a callback timer for TF publisher
        self.tf_scheduler = TFBroadcastScheduler(
            self.pose_cell,
            self.publisher,
            clock=lambda: self.get_clock().now().to_msg(),
            period=self.config.tf_period,
        )
        self.tf_scheduler.start(self, callback_group=self.tf_group)

    def to_cv_image(self, msg: Image):
        return self.cv_bridge.imgmsg_to_cv2(msg, desired_encoding='passthrough')

    def destroy_node(self):
        if self.tf_scheduler is not None:
            self.tf_scheduler.stop()
        if self.estimator is not None:
            self.estimator.shutdown()
        super().destroy_node()


class MonocularBridgeNode(SlamBridgeNode):
    """Single camera front-end"""

    def __init__(self, estimator_factory, node_name='orb_slam_bridge_mono', **kwargs):
        super().__init__(estimator_factory, node_name, **kwargs)

        self.image_sub = self.create_subscription(
            Image,
            MONO_IMAGE_TOPIC,
            self.image_callback,
            10,
            callback_group=self.tracking_group,
        )
        self.get_logger().info(f"Subscribing to: {MONO_IMAGE_TOPIC}")

    def image_callback(self, msg: Image) -> None:
        image = self.to_cv_image(msg)
        T_C_W = self.estimator.track_monocular(image, stamp_to_sec(msg.header.stamp))
        self.bridge.track_from(self.estimator, T_C_W, msg.header)


class StereoBridgeNode(SlamBridgeNode):
    """Rectified stereo pair front-end"""

    def __init__(self, estimator_factory, node_name='orb_slam_bridge_stereo', **kwargs):
        super().__init__(estimator_factory, node_name, **kwargs)

        self.left_sub = Subscriber(self, Image, LEFT_IMAGE_TOPIC,
                                   callback_group=self.tracking_group)
        self.right_sub = Subscriber(self, Image, RIGHT_IMAGE_TOPIC,
                                    callback_group=self.tracking_group)

        # Approximate time sync (10ms tolerance)
        self.ts = ApproximateTimeSynchronizer(
            [self.left_sub, self.right_sub],
            queue_size=10,
            slop=0.01
        )
        self.ts.registerCallback(self.stereo_callback)
        self.get_logger().info(f"Subscribing to: {LEFT_IMAGE_TOPIC}, {RIGHT_IMAGE_TOPIC}")

    def stereo_callback(self, left_msg: Image, right_msg: Image) -> None:
        left = self.to_cv_image(left_msg)
        right = self.to_cv_image(right_msg)
        T_C_W = self.estimator.track_stereo(left, right, stamp_to_sec(left_msg.header.stamp))
        self.bridge.track_from(self.estimator, T_C_W, left_msg.header)


class RgbdBridgeNode(SlamBridgeNode):
    """Colour + registered depth front-end"""

    def __init__(self, estimator_factory, node_name='orb_slam_bridge_rgbd', **kwargs):
        super().__init__(estimator_factory, node_name, **kwargs)

        self.rgb_sub = Subscriber(self, Image, RGB_IMAGE_TOPIC,
                                  callback_group=self.tracking_group)
        self.depth_sub = Subscriber(self, Image, DEPTH_IMAGE_TOPIC,
                                    callback_group=self.tracking_group)

        self.ts = ApproximateTimeSynchronizer(
            [self.rgb_sub, self.depth_sub],
            queue_size=10,
            slop=0.01
        )
        self.ts.registerCallback(self.rgbd_callback)
        self.get_logger().info(f"Subscribing to: {RGB_IMAGE_TOPIC}, {DEPTH_IMAGE_TOPIC}")

    def rgbd_callback(self, rgb_msg: Image, depth_msg: Image) -> None:
        rgb = self.to_cv_image(rgb_msg)
        depth = self.to_cv_image(depth_msg)
        T_C_W = self.estimator.track_rgbd(rgb, depth, stamp_to_sec(rgb_msg.header.stamp))
        self.bridge.track_from(self.estimator, T_C_W, rgb_msg.header)


NODE_TYPES = {
    'mono': MonocularBridgeNode,
    'stereo': StereoBridgeNode,
    'rgbd': RgbdBridgeNode,
}


def spin(node: SlamBridgeNode) -> None:
    """Run node until shutdown; tracking and TF callbacks get their own threads"""
    executor = MultiThreadedExecutor(num_threads=2)
    executor.add_node(node)

    try:
        executor.spin()
    except KeyboardInterrupt:
        pass
    finally:
        executor.shutdown()
        node.destroy_node()
        rclpy.shutdown()


def main(estimator_factory, mode='mono', args=None):
    if mode not in NODE_TYPES:
        raise ValueError(f"Unknown camera mode '{mode}', expected one of {sorted(NODE_TYPES)}")

    rclpy.init(args=args)
    node = NODE_TYPES[mode](estimator_factory)
    spin(node)
