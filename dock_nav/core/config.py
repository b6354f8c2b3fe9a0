"""
Configuration Management
========================

Provides a centralized configuration system with:
- YAML file loading
- Environment variable overrides
- Default values
- Singleton pattern for global access

Units follow the drivetrain calibration: distances in inches,
angles in degrees, velocities in inches per second.
"""

import os
import yaml
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class CalibrationConfig:
    """Drivetrain calibration constants for the open-loop motion profile."""
    max_velocity: float = 60.0
    velocity_per_step: float = 1.0
    sec_per_step: float = 0.02
    start_power: float = 0.3
    power_per_step: float = 0.01


@dataclass
class VisionConfig:
    """Vision sensor mounting and pipeline configuration."""
    mount_height: float = 10.5
    angle_from_horizontal: float = 20.0
    offset_from_center: float = -7.0
    horizontal_fov: float = 54.0
    vertical_fov: float = 41.0
    vision_pipeline: int = 0
    drive_pipeline: int = 1


@dataclass
class RouteConfig:
    """Docking route configuration."""
    target_height: float = 28.5
    standoff_distance: float = 12.0
    drive_velocity: float = 30.0
    search_timeout: float = 5.0
    target_face_yaws: List[float] = field(
        default_factory=lambda: [0.0, 28.75, 90.0, 151.25, 180.0, -151.25, -90.0, -28.75]
    )


@dataclass
class CollisionConfig:
    """Collision detection configuration."""
    detector_type: str = "jerk"
    jerk_threshold: float = 0.5


@dataclass
class SimulationConfig:
    """Mock hardware and fixed-period loop configuration."""
    tick_period: float = 0.02
    max_ticks: int = 3000
    turn_ticks: int = 10
    distance_per_power: float = 2.0
    deadband_power: float = 0.3


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    file_enabled: bool = False
    file_path: str = "dock_nav.log"
    max_file_size: int = 10485760
    backup_count: int = 3
    console_enabled: bool = True


class Config:
    """
    Central configuration manager.

    Loads configuration from YAML file with environment variable overrides.
    Uses singleton pattern for global access.

    Usage:
        config = Config.load("config/dock_nav.yaml")
        # or
        config = get_config()  # Gets existing instance

        vps = config.calibration.velocity_per_step
        standoff = config.route.standoff_distance
    """

    _instance: Optional['Config'] = None
    _initialized: bool = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config_path: Optional[str] = None):
        if Config._initialized and config_path is None:
            return

        self._raw: Dict[str, Any] = {}
        self._config_path: Optional[Path] = None

        # Initialize sub-configs with defaults
        self.calibration = CalibrationConfig()
        self.vision = VisionConfig()
        self.route = RouteConfig()
        self.collision = CollisionConfig()
        self.simulation = SimulationConfig()
        self.logging = LoggingConfig()

        if config_path:
            self._load_file(config_path)

        Config._initialized = True

    @classmethod
    def load(cls, config_path: str) -> 'Config':
        """Load configuration from YAML file."""
        return cls(config_path)

    @classmethod
    def reset(cls):
        """Reset singleton instance (for testing)."""
        cls._instance = None
        cls._initialized = False

    def _load_file(self, config_path: str) -> None:
        """Load and parse YAML configuration file."""
        path = Path(config_path)

        # Search for config file in common locations
        search_paths = [
            path,
            Path(__file__).parent.parent.parent / "config" / path.name,
            Path.home() / ".config" / "dock_nav" / path.name,
            Path("/etc/dock_nav") / path.name,
        ]

        for search_path in search_paths:
            if search_path.exists():
                self._config_path = search_path
                break

        if self._config_path is None or not self._config_path.exists():
            logger.warning(f"Config file not found: {config_path}, using defaults")
            return

        try:
            with open(self._config_path, 'r') as f:
                self._raw = yaml.safe_load(f) or {}
            logger.info(f"Loaded config from: {self._config_path}")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config: {e}")
            return

        self._parse_config()
        self._apply_env_overrides()

    def _parse_config(self) -> None:
        """Parse raw config into typed dataclasses."""
        # Calibration
        if 'calibration' in self._raw:
            c = self._raw['calibration']
            self.calibration = CalibrationConfig(
                max_velocity=c.get('max_velocity', 60.0),
                velocity_per_step=c.get('velocity_per_step', 1.0),
                sec_per_step=c.get('sec_per_step', 0.02),
                start_power=c.get('start_power', 0.3),
                power_per_step=c.get('power_per_step', 0.01),
            )

        # Vision
        if 'vision' in self._raw:
            v = self._raw['vision']
            pipelines = v.get('pipelines', {})
            self.vision = VisionConfig(
                mount_height=v.get('mount_height', 10.5),
                angle_from_horizontal=v.get('angle_from_horizontal', 20.0),
                offset_from_center=v.get('offset_from_center', -7.0),
                horizontal_fov=v.get('horizontal_fov', 54.0),
                vertical_fov=v.get('vertical_fov', 41.0),
                vision_pipeline=pipelines.get('vision', 0),
                drive_pipeline=pipelines.get('drive', 1),
            )

        # Route
        if 'route' in self._raw:
            r = self._raw['route']
            self.route = RouteConfig(
                target_height=r.get('target_height', 28.5),
                standoff_distance=r.get('standoff_distance', 12.0),
                drive_velocity=r.get('drive_velocity', 30.0),
                search_timeout=r.get('search_timeout', 5.0),
                target_face_yaws=r.get('target_face_yaws', RouteConfig().target_face_yaws),
            )

        # Collision
        if 'collision' in self._raw:
            col = self._raw['collision']
            self.collision = CollisionConfig(
                detector_type=col.get('detector_type', 'jerk'),
                jerk_threshold=col.get('jerk_threshold', 0.5),
            )

        # Simulation
        if 'simulation' in self._raw:
            s = self._raw['simulation']
            self.simulation = SimulationConfig(
                tick_period=s.get('tick_period', 0.02),
                max_ticks=s.get('max_ticks', 3000),
                turn_ticks=s.get('turn_ticks', 10),
                distance_per_power=s.get('distance_per_power', 2.0),
                deadband_power=s.get('deadband_power', 0.3),
            )

        # Logging
        if 'logging' in self._raw:
            log = self._raw['logging']
            self.logging = LoggingConfig(
                level=log.get('level', 'INFO'),
                file_enabled=log.get('file_enabled', False),
                file_path=log.get('file_path', 'dock_nav.log'),
                max_file_size=log.get('max_file_size', 10485760),
                backup_count=log.get('backup_count', 3),
                console_enabled=log.get('console_enabled', True),
            )

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        # Calibration
        if os.environ.get('DOCK_NAV_MAX_VELOCITY'):
            self.calibration.max_velocity = float(os.environ['DOCK_NAV_MAX_VELOCITY'])

        # Route
        if os.environ.get('DOCK_NAV_DRIVE_VELOCITY'):
            self.route.drive_velocity = float(os.environ['DOCK_NAV_DRIVE_VELOCITY'])
        if os.environ.get('DOCK_NAV_STANDOFF'):
            self.route.standoff_distance = float(os.environ['DOCK_NAV_STANDOFF'])
        if os.environ.get('DOCK_NAV_SEARCH_TIMEOUT'):
            self.route.search_timeout = float(os.environ['DOCK_NAV_SEARCH_TIMEOUT'])

        # Collision
        if os.environ.get('DOCK_NAV_COLLISION_DETECTOR'):
            self.collision.detector_type = os.environ['DOCK_NAV_COLLISION_DETECTOR']

        # Logging
        if os.environ.get('DOCK_NAV_LOG_LEVEL'):
            self.logging.level = os.environ['DOCK_NAV_LOG_LEVEL']

    def get(self, key: str, default: Any = None) -> Any:
        """Get raw config value by dot-notation key."""
        keys = key.split('.')
        value = self._raw
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def __repr__(self) -> str:
        return f"Config(path={self._config_path}, collision={self.collision.detector_type})"


# Global config accessor
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_config(config_path: str) -> Config:
    """Load configuration from file and set as global."""
    global _config
    _config = Config.load(config_path)
    return _config
