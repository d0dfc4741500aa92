"""
Configuration module for the sbet command line.

Handles loading and saving of default options from YAML files. Values given
on the command line take precedence over the configuration file.
"""

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class CsvOptions:
    """Options for CSV export."""
    decimate: int = 1  # Keep every Nth point
    include_time: bool = False  # Append a time column


@dataclass
class FilterOptions:
    """Inclusive time window for filtering."""
    start_time: float = -math.inf
    stop_time: float = math.inf


@dataclass
class Config:
    """
    Main configuration class.

    Attributes:
        log_level: Name of the logging level
        csv: CSV export options
        filter: Time filter options
    """
    log_level: str = 'INFO'
    csv: CsvOptions = field(default_factory=CsvOptions)
    filter: FilterOptions = field(default_factory=FilterOptions)

    def __post_init__(self):
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")

        # bool is a subclass of int and must not pass as a number
        decimate = self.csv.decimate
        if isinstance(decimate, bool) or not isinstance(decimate, int):
            raise ValueError(f"csv.decimate must be an integer, got {decimate!r}")
        if decimate < 1:
            raise ValueError(f"csv.decimate must be >= 1, got {decimate}")
        if not isinstance(self.csv.include_time, bool):
            raise ValueError(
                f"csv.include_time must be true or false, got {self.csv.include_time!r}"
            )

        for name in ('start_time', 'stop_time'):
            value = getattr(self.filter, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"filter.{name} must be a number, got {value!r}")
            setattr(self.filter, name, float(value))
        if self.filter.start_time > self.filter.stop_time:
            raise ValueError(
                f"filter.start_time ({self.filter.start_time}) is after "
                f"filter.stop_time ({self.filter.stop_time})"
            )

    @classmethod
    def from_yaml(cls, config_path: str) -> "Config":
        """
        Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Config object with loaded parameters

        Example YAML structure:
            log_level: INFO
            csv:
              decimate: 10
              include_time: true
            filter:
              start_time: 380000.0
              stop_time: .inf
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a mapping: {config_path}")

        logger.info(f"Loading configuration from {config_path}")

        for section in ('csv', 'filter'):
            if not isinstance(data.get(section) or {}, dict):
                raise ValueError(f"Section '{section}' must be a mapping: {config_path}")

        csv_data = data.get('csv') or {}
        csv_options = CsvOptions(
            decimate=csv_data.get('decimate', 1),
            include_time=csv_data.get('include_time', False),
        )

        filter_data = data.get('filter') or {}
        filter_options = FilterOptions(
            start_time=filter_data.get('start_time', -math.inf),
            stop_time=filter_data.get('stop_time', math.inf),
        )

        return cls(
            log_level=data.get('log_level', 'INFO'),
            csv=csv_options,
            filter=filter_options,
        )

    def to_yaml(self, config_path: str) -> None:
        """Save configuration to a YAML file."""
        data = {
            'log_level': self.log_level,
            'csv': {
                'decimate': self.csv.decimate,
                'include_time': self.csv.include_time,
            },
            'filter': {
                'start_time': self.filter.start_time,
                'stop_time': self.filter.stop_time,
            },
        }

        with open(config_path, 'w') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

        logger.info(f"Configuration saved to {config_path}")
