"""
telemetry-chain Configuration
=============================

This module handles configuration loading for the segment service.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    TELEMETRY_SEGMENT_DURATION    -> segment.duration_sec
    TELEMETRY_SIMULATION_SEED     -> simulation.seed
    TELEMETRY_MAX_SPEED           -> policy.max_speed
    TELEMETRY_MAX_ACCELERATION    -> policy.max_acceleration
    TELEMETRY_MAX_YAW_RATE        -> policy.max_yaw_rate
    TELEMETRY_MAX_STEERING_ANGLE  -> policy.max_steering_angle
    TELEMETRY_PORT                -> server.port
    TELEMETRY_LOG_LEVEL           -> logging.level
    PORT                          -> server.port (Cloud Run)

Example:
    from telemetry_chain.config import settings

    print(settings.segment.duration_sec)
    print(settings.policy.max_speed)
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from telemetry_chain.models.policy import Policy


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class ServiceConfig(BaseModel):
    """Service identification configuration."""

    name: str = Field(default="telemetry-chain", description="Service name")
    version: str = Field(default="v0.1.0", description="Service version")


class SegmentConfig(BaseModel):
    """Segment assembly configuration."""

    duration_sec: int = Field(
        default=60,
        ge=1,
        description="Samples per segment (one per second)",
    )
    sample_interval_ms: float = Field(
        default=1000.0,
        gt=0,
        description="Spacing of simulated samples in milliseconds",
    )
    log_every_n_segments: int = Field(
        default=10,
        ge=1,
        description="Progress logging interval of the streaming processor",
    )


def _default_policy() -> Policy:
    return Policy(
        max_speed=80.0,
        max_acceleration=3.0,
        max_yaw_rate=1.0,
        max_steering_angle=540.0,
    )


class SimulationConfig(BaseModel):
    """Synthetic sample source configuration."""

    seed: Optional[int] = Field(
        default=None,
        ge=0,
        description="RNG seed (None = nondeterministic)",
    )


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8002, ge=1, le=65535, description="Bind port")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="json", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for telemetry-chain.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    service: ServiceConfig = Field(default_factory=ServiceConfig)
    segment: SegmentConfig = Field(default_factory=SegmentConfig)
    policy: Policy = Field(default_factory=_default_policy)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values

    Args:
        config_path: Path to config.yaml. If None, searches common locations.

    Returns:
        Settings: Loaded configuration
    """
    # Find config file
    if config_path is None:
        search_paths = [
            Path("config.yaml"),
            Path("config.yml"),
            Path(__file__).parent.parent.parent / "config.yaml",
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    # Load from YAML if exists
    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.warning("No config file found, using defaults and environment variables")

    # Apply environment variable overrides
    _apply_env_overrides(config_data)

    # A partial policy section replaces the defaults wholesale; merge instead.
    if "policy" in config_data:
        policy_data = _default_policy().model_dump()
        policy_data.update(config_data["policy"] or {})
        config_data["policy"] = policy_data

    return Settings.model_validate(config_data)


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Segment settings
    if env_duration := os.environ.get("TELEMETRY_SEGMENT_DURATION"):
        config_data.setdefault("segment", {})["duration_sec"] = int(env_duration)

    # Simulation settings
    if env_seed := os.environ.get("TELEMETRY_SIMULATION_SEED"):
        config_data.setdefault("simulation", {})["seed"] = int(env_seed)

    # Policy overrides
    if env_speed := os.environ.get("TELEMETRY_MAX_SPEED"):
        config_data.setdefault("policy", {})["max_speed"] = float(env_speed)
    if env_accel := os.environ.get("TELEMETRY_MAX_ACCELERATION"):
        config_data.setdefault("policy", {})["max_acceleration"] = float(env_accel)
    if env_yaw := os.environ.get("TELEMETRY_MAX_YAW_RATE"):
        config_data.setdefault("policy", {})["max_yaw_rate"] = float(env_yaw)
    if env_steer := os.environ.get("TELEMETRY_MAX_STEERING_ANGLE"):
        config_data.setdefault("policy", {})["max_steering_angle"] = float(env_steer)

    # Server settings (Cloud Run uses PORT env var)
    if env_port := os.environ.get("PORT"):
        config_data.setdefault("server", {})["port"] = int(env_port)
    elif env_port := os.environ.get("TELEMETRY_PORT"):
        config_data.setdefault("server", {})["port"] = int(env_port)

    # Logging settings
    if env_log := os.environ.get("TELEMETRY_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


# =============================================================================
# Global Settings Instance
# =============================================================================

# Global settings instance - loaded on import, read-only afterwards
settings = load_config()
