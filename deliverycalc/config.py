"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import date, time
from pathlib import Path
from typing import List, Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.models import BusinessWindow, HolidayPeriod


class BusinessHoursConfig(BaseModel):
    """Daily business window."""
    start_hour: int = 9
    start_minute: int = 0
    end_hour: int = 17
    end_minute: int = 0

    @field_validator("start_hour", "end_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {v}")
        return v

    @field_validator("start_minute", "end_minute")
    @classmethod
    def validate_minute(cls, v: int) -> int:
        """Validate minute is between 0 and 59."""
        if not 0 <= v <= 59:
            raise ValueError(f"Minute must be between 0 and 59, got {v}")
        return v

    @model_validator(mode="after")
    def validate_window_order(self) -> "BusinessHoursConfig":
        """Ensure the configured window opens before it closes."""
        if self.end_hour * 60 + self.end_minute <= self.start_hour * 60 + self.start_minute:
            raise ValueError("Business hours must end later than they start")
        return self

    def get_start_time(self) -> time:
        """Get start time as time object."""
        return time(hour=self.start_hour, minute=self.start_minute)

    def get_end_time(self) -> time:
        """Get end time as time object."""
        return time(hour=self.end_hour, minute=self.end_minute)

    def to_window(self) -> BusinessWindow:
        return BusinessWindow(
            start_hour=self.start_hour,
            start_minute=self.start_minute,
            end_hour=self.end_hour,
            end_minute=self.end_minute
        )


class HolidayConfig(BaseModel):
    """Inline holiday period."""
    name: str = ""
    start: date
    end: Optional[date] = None  # Defaults to start for single days

    @model_validator(mode="after")
    def validate_period_order(self) -> "HolidayConfig":
        """Ensure the period doesn't end before it starts."""
        if self.end is not None and self.end < self.start:
            raise ValueError(f"Holiday '{self.name}' ends before it starts")
        return self

    def to_period(self) -> HolidayPeriod:
        return HolidayPeriod(start_date=self.start, end_date=self.end or self.start, name=self.name)


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Zurich"
    business_hours: BusinessHoursConfig = Field(default_factory=BusinessHoursConfig)
    holidays_file: Optional[Path] = None
    holiday_cache_ttl_seconds: int = 3600
    holidays: List[HolidayConfig] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone name is known."""
        try:
            pendulum.timezone(value)
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("holiday_cache_ttl_seconds")
    @classmethod
    def validate_cache_ttl(cls, value: int) -> int:
        """Ensure the cache lifetime is not negative (0 disables caching)."""
        if value < 0:
            raise ValueError("holiday_cache_ttl_seconds must not be negative")
        return value

    def get_holiday_periods(self) -> List[HolidayPeriod]:
        """Get the inline holiday periods as domain objects."""
        return [holiday.to_period() for holiday in self.holidays]

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        A relative ``holidays_file`` is resolved against the directory of
        the config file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)

        if config.holidays_file is not None and not config.holidays_file.is_absolute():
            config = config.model_copy(
                update={"holidays_file": config_path.parent / config.holidays_file}
            )

        return config


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of deliverycalc/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
