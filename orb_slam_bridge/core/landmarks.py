"""
Landmark filtering for the keypoint cloud.
"""
import struct
from typing import Iterable, List, Optional

import numpy as np

from orb_slam_bridge.core.types import CloudPoint, MapPoint

# Visualization only, RViz renders the cloud white
DEFAULT_COLOR = (255, 255, 255)

# x, y, z as float32 followed by the PCL packed rgb word
POINT_STEP = 16


def filter_map_points(map_points: Iterable[Optional[MapPoint]]) -> List[CloudPoint]:
    """Drop absent and uninitialized landmarks.

    Args:
        map_points: landmarks from the engine, entries may be None

    Returns:
        list of CloudPoint in input order, one per valid landmark
    """
    points = []
    r, g, b = DEFAULT_COLOR

    for mp in map_points:
        if mp is None:
            continue
        if mp.is_empty():
            continue

        world_pos = np.asarray(mp.world_position, dtype=np.float32).reshape(-1)
        points.append(CloudPoint(
            float(world_pos[0]), float(world_pos[1]), float(world_pos[2]), r, g, b))

    return points


def pack_rgb(r: int, g: int, b: int) -> int:
    return (int(r) << 16) | (int(g) << 8) | int(b)


def pack_cloud_points(points: List[CloudPoint]) -> bytes:
    """Serialize points as little-endian x, y, z float32 plus rgb uint32"""
    data = []
    for p in points:
        data.append(struct.pack('<fffI', p.x, p.y, p.z, pack_rgb(p.r, p.g, p.b)))

    return b''.join(data)
