"""cachebro - agent file cache with diff tracking."""

__version__ = "0.1.0"

SERVER_NAME = "cachebro"
