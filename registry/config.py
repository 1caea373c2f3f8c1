"""Environment-driven configuration."""

import os


class Config:
    """Registry configuration"""

    def __init__(self):
        self.registry_file = os.getenv("MAINT_REGISTRY_FILE", "registry.yaml")
        self.log_level = os.getenv("MAINT_LOG_LEVEL", "WARNING").upper()
        self.due_soon_miles = int(os.getenv("MAINT_DUE_SOON_MILES", "1000"))


# Global config instance
config = Config()
