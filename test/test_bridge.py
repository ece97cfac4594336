import logging

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from orb_slam_bridge.core.bridge import SlamBridge
from orb_slam_bridge.core.pose_cell import PoseCell
from orb_slam_bridge.core.types import MapPoint, RigidTransform

from helpers import FakeHeader, make_raw_transform


class FakeEstimator:
    def __init__(self, map_points):
        self.map_points = map_points
        self.calls = 0

    def tracked_map_points(self):
        self.calls += 1
        return self.map_points


@pytest.fixture
def T_C_W():
    R = Rotation.from_euler('z', 90, degrees=True).as_matrix()
    return make_raw_transform(R, [1.0, 2.0, 3.0])


def test_publishes_world_from_camera(recorder, T_C_W):
    cell = PoseCell()
    bridge = SlamBridge(recorder, cell)
    header = FakeHeader()

    assert bridge.track(T_C_W, [], header)

    T_W_C = cell.read()
    np.testing.assert_allclose(T_W_C.as_matrix() @ T_C_W, np.eye(4), atol=1e-6)
    np.testing.assert_allclose(T_W_C.translation, [-2.0, 1.0, -3.0], atol=1e-6)

    assert recorder.transforms == [(T_W_C, header)]
    assert recorder.poses == [(T_W_C, header)]
    assert len(recorder.clouds) == 1
    assert cell.update_count == 1


def test_point_cloud_is_filtered(recorder, T_C_W):
    bridge = SlamBridge(recorder)
    map_points = [None, MapPoint(np.ones(3)), MapPoint(np.empty(0)), MapPoint(np.ones(3) * 2)]

    bridge.track(T_C_W, map_points, FakeHeader())

    points, _ = recorder.clouds[0]
    assert [(p.x, p.y, p.z) for p in points] == [(1.0, 1.0, 1.0), (2.0, 2.0, 2.0)]


@pytest.mark.parametrize("lost", [None, np.empty((0, 0), dtype=np.float32)])
def test_lost_tracking_publishes_nothing(recorder, lost):
    previous = RigidTransform([0.0, 0.0, 0.0, 1.0], [7.0, 7.0, 7.0])
    cell = PoseCell(previous)
    bridge = SlamBridge(recorder, cell, verbose=True)

    assert not bridge.track(lost, [MapPoint(np.ones(3))], FakeHeader())

    assert cell.read() is previous
    assert recorder.transforms == recorder.poses == recorder.clouds == []
    assert bridge.frames_lost == 1


def test_malformed_pose_raises(recorder):
    cell = PoseCell()
    bridge = SlamBridge(recorder, cell)

    with pytest.raises(ValueError):
        bridge.track(np.eye(3, dtype=np.float32), [], FakeHeader())

    assert cell.update_count == 0
    assert recorder.transforms == []


def test_track_from_pulls_landmarks(recorder, T_C_W):
    estimator = FakeEstimator([MapPoint(np.array([3.0, 2.0, 1.0]))])
    bridge = SlamBridge(recorder)

    assert bridge.track_from(estimator, T_C_W, FakeHeader())

    assert estimator.calls == 1
    points, _ = recorder.clouds[0]
    assert [(p.x, p.y, p.z) for p in points] == [(3.0, 2.0, 1.0)]


def test_track_from_skips_landmarks_when_lost(recorder):
    estimator = FakeEstimator([MapPoint(np.ones(3))])
    bridge = SlamBridge(recorder)

    assert not bridge.track_from(estimator, np.empty(0), FakeHeader())
    assert estimator.calls == 0


def test_verbose_logging(recorder, T_C_W, caplog):
    bridge = SlamBridge(recorder, verbose=True)

    with caplog.at_level(logging.INFO, logger='orb_slam_bridge.core.bridge'):
        bridge.track(T_C_W, [MapPoint(np.ones(3))], FakeHeader())

    assert "1 keypoints" in caplog.text


def test_quiet_by_default(recorder, T_C_W, caplog):
    bridge = SlamBridge(recorder)

    with caplog.at_level(logging.DEBUG, logger='orb_slam_bridge.core.bridge'):
        bridge.track(T_C_W, [], FakeHeader())
        bridge.track(None, [], FakeHeader())

    assert caplog.text == ""


def test_identity_pose_end_to_end(recorder):
    cell = PoseCell(RigidTransform([0.0, 0.0, 1.0, 0.0], [9.0, 9.0, 9.0]))
    bridge = SlamBridge(recorder, cell)

    assert bridge.track(np.eye(4, dtype=np.float32), [MapPoint(np.ones(3))], FakeHeader())

    assert cell.read() == RigidTransform.identity()
    assert recorder.transforms[0][0] == RigidTransform.identity()
    assert recorder.poses[0][0] == RigidTransform.identity()
    assert len(recorder.clouds[0][0]) == 1


def test_improper_pose_is_fatal(recorder):
    cell = PoseCell()
    bridge = SlamBridge(recorder, cell)
    T = np.eye(4, dtype=np.float32)
    T[2, 2] = -1.0

    with pytest.raises(ValueError):
        bridge.track(T, [], FakeHeader())

    assert cell.update_count == 0
    assert recorder.transforms == recorder.poses == recorder.clouds == []
