"""
Task kinds supported in pipeline documents.

    script            ScriptTask           host shell
    docker-container  DockerContainerTask  script inside a container
    docker-image      DockerImageTask      image build from a Dockerfile
"""

from .base import AbstractTask
from .docker import DockerContainerTask, DockerImageTask, DockerTask
from .script import ScriptTask

__all__ = [
    "AbstractTask",
    "ScriptTask",
    "DockerTask",
    "DockerContainerTask",
    "DockerImageTask",
]
