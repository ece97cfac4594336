"""
Topics for the orb_slam_bridge project (ROS2)
"""

# Outputs, advertised in the node's private namespace
TRANSFORM_TOPIC = "~/transform_cam"
POSE_TOPIC = "~/pose_cam"
KEYPOINTS_CLOUD_TOPIC = "~/keypoints_cloud"

# Camera inputs
MONO_IMAGE_TOPIC = "camera/image_raw"
LEFT_IMAGE_TOPIC = "camera/left/image_raw"
RIGHT_IMAGE_TOPIC = "camera/right/image_raw"
RGB_IMAGE_TOPIC = "camera/rgb/image_raw"
DEPTH_IMAGE_TOPIC = "camera/depth_registered/image_raw"

# Pose and keypoint messages are always expressed in this frame
WORLD_FRAME_ID = "world"

# Only the latest pose matters
PUBLISHER_QUEUE_SIZE = 1
