"""
Node parameters.
"""
from dataclasses import dataclass

DEFAULT_FRAME_ID = "world"
DEFAULT_CHILD_FRAME_ID = "cam0"
DEFAULT_TF_PERIOD = 0.01  # 100 Hz


@dataclass
class BridgeConfig:
    vocabulary_file_path: str
    settings_file_path: str
    verbose: bool = False
    frame_id: str = DEFAULT_FRAME_ID
    child_frame_id: str = DEFAULT_CHILD_FRAME_ID
    tf_period: float = DEFAULT_TF_PERIOD

    def validate(self) -> None:
        """Raise ValueError on settings the node cannot run with"""
        if not self.vocabulary_file_path:
            raise ValueError("Please provide the vocabulary_file_path as a ros param.")
        if not self.settings_file_path:
            raise ValueError("Please provide the settings_file_path as a ros param.")
        if self.tf_period <= 0.0:
            raise ValueError(f"tf_period must be positive, got {self.tf_period}")
        if not self.frame_id or not self.child_frame_id:
            raise ValueError("frame_id and child_frame_id must not be empty")


def load_config(node) -> BridgeConfig:
    """Declare the bridge parameters on node and read them back.

    Args:
        node: rclpy Node (anything with declare_parameter / get_parameter)

    Returns:
        validated BridgeConfig
    """
    # Required by the SLAM engine, no usable default
    node.declare_parameter('vocabulary_file_path', '')
    node.declare_parameter('settings_file_path', '')

    # Optional params
    node.declare_parameter('verbose', False)
    node.declare_parameter('frame_id', DEFAULT_FRAME_ID)
    node.declare_parameter('child_frame_id', DEFAULT_CHILD_FRAME_ID)
    node.declare_parameter('tf_period', DEFAULT_TF_PERIOD)

    config = BridgeConfig(
        vocabulary_file_path=node.get_parameter('vocabulary_file_path').value,
        settings_file_path=node.get_parameter('settings_file_path').value,
        verbose=bool(node.get_parameter('verbose').value),
        frame_id=node.get_parameter('frame_id').value,
        child_frame_id=node.get_parameter('child_frame_id').value,
        tf_period=float(node.get_parameter('tf_period').value),
    )
    config.validate()

    return config
