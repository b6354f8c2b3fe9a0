"""
Pytest Configuration for dock_nav Tests
=======================================

Provides fixtures and configuration for the test suite.
"""

import logging
import pytest
import sys
import os

# Add package to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dock_nav.core.config import Config
from dock_nav.core.events import EventBus
from dock_nav.hardware import MockDrivetrain, MockGyro, MockVisionSensor, NullCollisionDetector
from dock_nav.nav import CalibrationModel, MotionProfileExecutor


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as exercising the full stack on mock hardware"
    )


@pytest.fixture(autouse=True)
def fresh_singletons():
    """Give every test its own event bus and config."""
    EventBus.reset()
    Config.reset()
    yield
    EventBus.reset()
    Config.reset()


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def calibration():
    """Example calibration used throughout the profile tests."""
    return CalibrationModel(
        max_velocity=6.0,
        velocity_per_step=0.5,
        sec_per_step=0.02,
        start_power=0.3,
        power_per_step=0.05,
    )


@pytest.fixture
def gyro():
    return MockGyro(yaw=0.0)


@pytest.fixture
def drivetrain(gyro):
    return MockDrivetrain(turn_ticks=1, distance_per_power=0.1, deadband_power=0.0, gyro=gyro)


@pytest.fixture
def vision():
    return MockVisionSensor()


@pytest.fixture
def executor(drivetrain, calibration):
    return MotionProfileExecutor(drivetrain, calibration, NullCollisionDetector())


@pytest.fixture
def run_until_done():
    """Tick an executor until it reports done; returns the tick count."""
    def _run(executor, max_ticks=2000):
        for tick in range(1, max_ticks + 1):
            executor.tick()
            if executor.is_done():
                return tick
        raise AssertionError(
            f"Executor still in {executor.phase.name} after {max_ticks} ticks"
        )
    return _run


@pytest.fixture
def root_logger():
    """Restore root logger handlers and level after the test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
