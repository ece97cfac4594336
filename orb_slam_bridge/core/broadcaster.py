"""
Periodic TF broadcast of the latest pose.
"""


class TFBroadcastScheduler:
    """Re-broadcasts the pose held by a PoseCell on a fixed period.

    The timer only reads the cell, so it never waits on the tracking path.
    A tick is expected to finish well within one period; overlapping ticks
    are serialized by the callback group the timer is created in.
    """

    def __init__(self, pose_cell, publisher, clock, period: float = 0.01):
        """
        Args:
            pose_cell: PoseCell to read from
            publisher: object with broadcast_transform(T, stamp)
            clock: callable returning the current time as a stamp
            period: timer period in seconds
        """
        if period <= 0.0:
            raise ValueError(f"Broadcast period must be positive, got {period}")

        self.pose_cell = pose_cell
        self.publisher = publisher
        self.clock = clock
        self.period = period

        self.node = None
        self.timer = None
        self.tick_count = 0

    def start(self, node, callback_group=None):
        """Create the timer on node and return it as the cancellation handle"""
        if self.timer is not None:
            raise RuntimeError("TF broadcast already started")

        self.node = node
        self.timer = node.create_timer(self.period, self.tick, callback_group=callback_group)
        return self.timer

    def tick(self) -> None:
        pose = self.pose_cell.read()
        self.publisher.broadcast_transform(pose, self.clock())
        self.tick_count += 1

    def stop(self) -> None:
        if self.timer is None:
            return

        self.timer.cancel()
        self.node.destroy_timer(self.timer)
        self.timer = None
        self.node = None

    @property
    def running(self) -> bool:
        return self.timer is not None
