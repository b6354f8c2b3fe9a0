"""
dock_nav - Test Suite
=====================

Unit tests for the docking navigation stack, run against mock hardware.

Test Categories:
    - unit/test_vector.py        : Vector algebra
    - unit/test_docking.py       : Docking geometry and heading conversions
    - unit/test_route.py         : Route progression and route sources
    - unit/test_motion_profile.py: Ramp sizing
    - unit/test_executor.py      : Turn/accel/run/decel state machine
    - unit/test_acquisition.py   : Target acquisition orchestrator
    - unit/test_route_driver.py  : Route draining
    - unit/test_commands.py      : Command lifecycle and full docking runs
    - unit/test_hardware.py      : Mock hardware and vision distance model
    - unit/test_config.py        : Configuration loading
    - unit/test_events.py        : Event bus

Usage:
    pytest test/
    pytest test/unit/test_executor.py -v
"""
