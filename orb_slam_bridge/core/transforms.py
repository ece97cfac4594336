"""
Conversion of raw SLAM poses into rigid-body transforms.

The estimator emits a single precision 4x4 homogeneous matrix whose rotation
block accumulates numerical drift (skew, scale). Downstream consumers assume
an exact rotation, so the block is projected back onto SO(3) before the
quaternion is built.
"""
import numpy as np
from scipy.spatial.transform import Rotation

from orb_slam_bridge.core.types import RigidTransform


def is_tracking_lost(T) -> bool:
    """The engine hands back an empty pose while it is not tracking"""
    return T is None or np.size(T) == 0


def orthonormalize_rotation(R_unnormalized: np.ndarray) -> np.ndarray:
    """Project a drifted 3x3 rotation onto the nearest proper rotation.

    The matrix is decomposed into an axis-angle (rotation vector) value and
    rebuilt from it, which discards any skew or scale in the input.

    Args:
        R_unnormalized: (3, 3) candidate rotation, float64

    Returns:
        (3, 3) orthonormal rotation matrix with det = +1

    Raises:
        ValueError: the block is singular or a reflection (det <= 0)
    """
    det = np.linalg.det(R_unnormalized)
    if not det > 0.0:
        raise ValueError(f"Rotation block is not a proper rotation (det = {det})")

    aa = Rotation.from_matrix(R_unnormalized).as_rotvec()
    return Rotation.from_rotvec(aa).as_matrix()


def convert_orb_slam_pose(T) -> RigidTransform:
    """Convert a raw 4x4 SLAM pose into a RigidTransform.

    Args:
        T: (4, 4) homogeneous transform, typically float32

    Returns:
        RigidTransform with unit quaternion and the untouched translation

    Raises:
        ValueError: T is not 4x4, or its rotation block has det <= 0
    """
    T = np.asarray(T)
    if T.ndim != 2 or T.shape[0] != 4 or T.shape[1] != 4:
        raise ValueError(f"SLAM pose must be a 4x4 matrix, got shape {T.shape}")

    # float -> double before any arithmetic
    T = T.astype(np.float64)

    # Extracting and orthonormalizing the rotation matrix
    R = orthonormalize_rotation(T[:3, :3])

    q = Rotation.from_matrix(R).as_quat()
    t = T[:3, 3].copy()

    return RigidTransform(q, t)
