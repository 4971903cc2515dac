"""
Configuration settings for the filet service.
Environment variables override defaults.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Service configuration"""

    # Service identity
    SERVICE_NAME: str = "filet"
    VERSION: str = "0.1.0"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Rendering
    CELL_SIZE_PX: int = 20
    MAX_CELL_SIZE_PX: int = 100

    # Input limits
    MAX_DIGITS: int = 32

    # Search
    SEARCH_PAGE_SIZE: int = 8

    def __post_init__(self):
        """Load from environment variables"""
        for key in self.__dataclass_fields__:
            env_value = os.getenv(key)
            if env_value is not None:
                field_type = self.__dataclass_fields__[key].type
                if field_type in (bool, "bool"):
                    setattr(self, key, env_value.lower() in ("true", "1", "yes"))
                elif field_type in (int, "int"):
                    setattr(self, key, int(env_value))
                else:
                    setattr(self, key, env_value)


# Global settings instance
settings = Settings()
