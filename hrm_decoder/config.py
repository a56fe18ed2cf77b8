"""Central decoder constants and runtime settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict

# Devices
DEVICE_NAME_S6XX_S7XX: str = "Polar S6xx/S7xx Series"

# File recognition
SRD_EXTENSIONS = (".srd",)
SIGNATURE_OFFSET: int = 2
SIGNATURE_S610: int = 0x61
SIGNATURE_S710: int = 0x71
SIGNATURE_S625X: int = 0x65

# Header encodings
LABEL_LENGTH: int = 7
YEAR_BASE: int = 2000
RECORDING_INTERVALS: Dict[int, int] = {0: 5, 1: 15, 2: 60, 3: 1}  # code -> seconds
ZONE_COUNT: int = 3
LAP_SENTINEL: int = 0xFF

# Checksum
CHECKSUM_MODULUS: int = 0x10000
CHECKSUM_SIZE: int = 2

# Unit conversion
KM_PER_MILE: float = 1.609344
METERS_PER_FOOT: float = 0.3048
SPEED_RESOLUTION: int = 16  # raw speed is 1/16 km/h or mph
DISTANCE_RESOLUTION: int = 10  # raw distance is 1/10 km or mile


@dataclass
class DecoderSettings:
    """Runtime settings used by the command line tools."""
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    csv_float_format: str = "%.3f"

    @classmethod
    def from_env(cls) -> "DecoderSettings":
        return cls(
            log_level=os.environ.get("HRM_DECODER_LOG_LEVEL", "WARNING").upper(),
            log_format=os.environ.get("HRM_DECODER_LOG_FORMAT", cls.log_format),
            csv_float_format=os.environ.get("HRM_DECODER_CSV_FLOAT_FORMAT", cls.csv_float_format),
        )

    def get_summary(self) -> Dict[str, Any]:
        return {
            "log_level": self.log_level,
            "log_format": self.log_format,
            "csv_float_format": self.csv_float_format,
        }


# Global settings instance
config = DecoderSettings.from_env()


def get_config() -> DecoderSettings:
    """Get the global settings instance."""
    return config


def reset_config() -> DecoderSettings:
    """Reload settings from the environment."""
    global config
    config = DecoderSettings.from_env()
    return config
