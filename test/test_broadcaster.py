import itertools

import pytest

from orb_slam_bridge.core.broadcaster import TFBroadcastScheduler
from orb_slam_bridge.core.pose_cell import PoseCell
from orb_slam_bridge.core.types import RigidTransform


class FakeTimer:
    def __init__(self, period, callback, callback_group):
        self.period = period
        self.callback = callback
        self.callback_group = callback_group
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeNode:
    def __init__(self):
        self.timers = []
        self.destroyed = []

    def create_timer(self, period, callback, callback_group=None):
        timer = FakeTimer(period, callback, callback_group)
        self.timers.append(timer)
        return timer

    def destroy_timer(self, timer):
        self.destroyed.append(timer)
        return True


def counting_clock():
    counter = itertools.count()
    return lambda: next(counter)


def test_start_creates_timer(recorder):
    node = FakeNode()
    group = object()
    scheduler = TFBroadcastScheduler(PoseCell(), recorder, counting_clock(), period=0.02)

    timer = scheduler.start(node, callback_group=group)

    assert scheduler.running
    assert node.timers == [timer]
    assert timer.period == 0.02
    assert timer.callback_group is group


def test_default_period_is_100hz(recorder):
    scheduler = TFBroadcastScheduler(PoseCell(), recorder, counting_clock())
    assert scheduler.period == pytest.approx(0.01)


def test_start_twice_raises(recorder):
    node = FakeNode()
    scheduler = TFBroadcastScheduler(PoseCell(), recorder, counting_clock())
    scheduler.start(node)
    with pytest.raises(RuntimeError):
        scheduler.start(node)


@pytest.mark.parametrize("period", [0.0, -0.01])
def test_invalid_period(recorder, period):
    with pytest.raises(ValueError):
        TFBroadcastScheduler(PoseCell(), recorder, counting_clock(), period=period)


def test_tick_broadcasts_current_pose(recorder):
    cell = PoseCell()
    pose = RigidTransform([0.0, 0.0, 0.0, 1.0], [1.0, 2.0, 3.0])
    cell.update(pose)
    scheduler = TFBroadcastScheduler(cell, recorder, counting_clock())

    scheduler.tick()

    assert recorder.broadcasts == [(pose, 0)]


def test_stale_pose_is_rebroadcast_with_fresh_stamps(recorder):
    cell = PoseCell()
    pose = RigidTransform([0.0, 0.0, 1.0, 1.0], [4.0, 5.0, 6.0])
    cell.update(pose)
    node = FakeNode()
    scheduler = TFBroadcastScheduler(cell, recorder, counting_clock())
    timer = scheduler.start(node)

    for _ in range(3):
        timer.callback()

    assert [T for T, _ in recorder.broadcasts] == [pose, pose, pose]
    assert all(T is pose for T, _ in recorder.broadcasts)
    assert [stamp for _, stamp in recorder.broadcasts] == [0, 1, 2]
    assert scheduler.tick_count == 3


def test_broadcasts_identity_before_first_pose(recorder):
    scheduler = TFBroadcastScheduler(PoseCell(), recorder, counting_clock())
    scheduler.tick()
    assert recorder.broadcasts[0][0] == RigidTransform.identity()


def test_stop_cancels_and_is_idempotent(recorder):
    node = FakeNode()
    scheduler = TFBroadcastScheduler(PoseCell(), recorder, counting_clock())
    timer = scheduler.start(node)

    scheduler.stop()
    scheduler.stop()

    assert timer.cancelled
    assert node.destroyed == [timer]
    assert not scheduler.running


def test_stop_before_start(recorder):
    scheduler = TFBroadcastScheduler(PoseCell(), recorder, counting_clock())
    scheduler.stop()
    assert not scheduler.running
