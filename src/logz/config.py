"""
Configuration settings for logz.
Environment variables prefixed with ``LOGZ_`` override defaults,
e.g. ``LOGZ_HIGH_LATENCY=0.25``.
"""
import os
from dataclasses import dataclass, field
from typing import List

ENV_PREFIX = "LOGZ_"


@dataclass
class Settings:
    """logz configuration"""

    # Row levels (seconds)
    MEDIUM_LATENCY: float = 0.01
    HIGH_LATENCY: float = 0.1

    # Logging
    LOG_LEVEL: str = "WARNING"

    # CLI: columns rendered when a document omits them
    DEFAULT_COLUMNS: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Load from environment variables"""
        for key in self.__dataclass_fields__:
            env_value = os.getenv(ENV_PREFIX + key)
            if env_value is None:
                continue
            field_type = self.__dataclass_fields__[key].type
            if field_type == bool:
                setattr(self, key, env_value.lower() in ("true", "1", "yes"))
            elif field_type == int:
                setattr(self, key, int(env_value))
            elif field_type == float:
                setattr(self, key, float(env_value))
            elif field_type == List[str]:
                setattr(self, key, [v.strip() for v in env_value.split(",") if v.strip()])
            else:
                setattr(self, key, env_value)


# Global settings instance
settings = Settings()
