from .types import RigidTransform, MapPoint, CloudPoint
from .transforms import convert_orb_slam_pose, is_tracking_lost
from .landmarks import filter_map_points
from .pose_cell import PoseCell
from .broadcaster import TFBroadcastScheduler
from .bridge import SlamBridge
from .config import BridgeConfig, load_config
from .estimator import PoseEstimator

__all__ = [
    'RigidTransform',
    'MapPoint',
    'CloudPoint',
    'convert_orb_slam_pose',
    'is_tracking_lost',
    'filter_map_points',
    'PoseCell',
    'TFBroadcastScheduler',
    'SlamBridge',
    'BridgeConfig',
    'load_config',
    'PoseEstimator',
]
