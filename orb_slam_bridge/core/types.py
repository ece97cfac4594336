"""
Value types shared by the ingestion and broadcast paths.
"""
from dataclasses import dataclass
from typing import NamedTuple, Optional

import numpy as np
from scipy.spatial.transform import Rotation


def _frozen(array: np.ndarray) -> np.ndarray:
    array = np.array(array, dtype=np.float64)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class RigidTransform:
    """Rigid-body transform: unit quaternion [x, y, z, w] plus translation.

    Instances are immutable, so a reference can be handed between threads
    without copying.
    """
    rotation: np.ndarray
    translation: np.ndarray

    def __post_init__(self):
        q = np.asarray(self.rotation, dtype=np.float64).reshape(-1)
        t = np.asarray(self.translation, dtype=np.float64).reshape(-1)
        if q.shape != (4,):
            raise ValueError(f"Quaternion must have 4 components, got {q.shape}")
        if t.shape != (3,):
            raise ValueError(f"Translation must have 3 components, got {t.shape}")

        norm = np.linalg.norm(q)
        if not np.isfinite(norm) or norm < 1e-12:
            raise ValueError(f"Quaternion norm is degenerate: {norm}")

        object.__setattr__(self, 'rotation', _frozen(q / norm))
        object.__setattr__(self, 'translation', _frozen(t))

    @classmethod
    def identity(cls) -> 'RigidTransform':
        return cls(np.array([0.0, 0.0, 0.0, 1.0]), np.zeros(3))

    def rotation_matrix(self) -> np.ndarray:
        return Rotation.from_quat(np.array(self.rotation)).as_matrix()

    def as_matrix(self) -> np.ndarray:
        """Homogeneous 4x4 representation"""
        T = np.eye(4)
        T[:3, :3] = self.rotation_matrix()
        T[:3, 3] = self.translation
        return T

    def inverse(self) -> 'RigidTransform':
        # Rotation.apply needs writable input
        R_inv = Rotation.from_quat(np.array(self.rotation)).inv()
        return RigidTransform(R_inv.as_quat(), -R_inv.apply(np.array(self.translation)))

    def compose(self, other: 'RigidTransform') -> 'RigidTransform':
        """Return self * other"""
        R = Rotation.from_quat(np.array(self.rotation))
        rotation = (R * Rotation.from_quat(np.array(other.rotation))).as_quat()
        translation = R.apply(np.array(other.translation)) + self.translation
        return RigidTransform(rotation, translation)

    def __eq__(self, other):
        if not isinstance(other, RigidTransform):
            return NotImplemented
        return (np.array_equal(self.rotation, other.rotation) and
                np.array_equal(self.translation, other.translation))


@dataclass(frozen=True, eq=False)
class MapPoint:
    """A landmark reference handed out by the SLAM engine.

    world_position is None, empty or short of x, y, z while the landmark
    is uninitialized.
    """
    world_position: Optional[np.ndarray] = None

    def is_empty(self) -> bool:
        return self.world_position is None or np.size(self.world_position) < 3


class CloudPoint(NamedTuple):
    x: float
    y: float
    z: float
    r: int = 255
    g: int = 255
    b: int = 255
