"""
Collision Detection
===================

Pluggable collision hooks polled by the motion profile executor once per
tick. A hook only flags a collision; deciding what to do about it
(usually interrupting the drive) belongs to the command layer.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Optional

from ..core.config import CollisionConfig
from .orientation import OrientationBase

logger = logging.getLogger(__name__)


class CollisionDetectorBase(ABC):
    """Collision hook contract."""

    def __init__(self):
        self._detected = False

    @property
    def collision_detected(self) -> bool:
        return self._detected

    @abstractmethod
    def check(self) -> bool:
        """Sample sensors once; return True if a collision is flagged."""

    def reinitialize_baseline(self) -> None:
        """Forget prior samples and clear the collision flag."""
        self._detected = False


class NullCollisionDetector(CollisionDetectorBase):
    """Never reports a collision."""

    def check(self) -> bool:
        return False


class JerkCollisionDetector(CollisionDetectorBase):
    """Flag a collision when linear jerk exceeds a threshold.

    Jerk is approximated as the change in world-frame linear acceleration
    between consecutive checks. The flag latches until
    reinitialize_baseline().

    Args:
        orientation: Source of world linear acceleration.
        jerk_threshold: Acceleration change (g per tick) that counts as impact.
    """

    def __init__(self, orientation: OrientationBase, jerk_threshold: float = 0.5):
        super().__init__()
        self._orientation = orientation
        self.jerk_threshold = jerk_threshold
        self._last_accel: Optional[tuple] = None

    def check(self) -> bool:
        ax, ay = self._orientation.world_linear_accel()
        if self._last_accel is not None:
            jerk = math.hypot(ax - self._last_accel[0], ay - self._last_accel[1])
            if jerk > self.jerk_threshold and not self._detected:
                logger.warning(f"Collision detected: jerk {jerk:.2f} > {self.jerk_threshold:.2f}")
                self._detected = True
        self._last_accel = (ax, ay)
        return self._detected

    def reinitialize_baseline(self) -> None:
        super().reinitialize_baseline()
        self._last_accel = None


def create_collision_detector(
    orientation: OrientationBase,
    config: Optional[CollisionConfig] = None,
) -> CollisionDetectorBase:
    """Create a collision detector from configuration.

    Args:
        orientation: Orientation source for acceleration-based detectors.
        config: CollisionConfig; defaults are used if omitted.
    """
    config = config or CollisionConfig()
    detector_type = config.detector_type.lower()
    if detector_type == 'jerk':
        return JerkCollisionDetector(orientation, jerk_threshold=config.jerk_threshold)
    if detector_type in ('none', 'null'):
        return NullCollisionDetector()
    raise ValueError(f"Unknown collision detector type: {config.detector_type}")
