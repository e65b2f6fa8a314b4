"""
adb_projector/client

Client package for adb-projector:
- client: ProjectorClient (startup, daemon respawn, capture loop) and main()
- config: Configuration dataclass

Usage:
    from adb_projector.client import ProjectorClient, ProjectorConfig

    client = ProjectorClient(ProjectorConfig(landscape=True))
    client.run()
"""

from .client import ProjectorClient, main
from .config import ProjectorConfig

__all__ = [
    "ProjectorClient",
    "main",
    "ProjectorConfig",
]
