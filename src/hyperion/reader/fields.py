"""
Field names used in pipeline documents.
"""

from enum import Enum


class DocumentReaderFields(str, Enum):
    """Document field names"""

    MODEL = "model"
    TASKGROUPS = "taskgroups"
    TITLE = "title"
    PARALLEL = "parallel"
    TASKS = "tasks"
    TYPE = "type"
    CODE = "code"
    VARIABLE = "variable"
    NAME = "name"
    REGEX = "regex"
    GROUP = "group"
    TAGS = "tags"
    IMAGE_NAME = "image-name"
    IMAGE_VERSION = "image-version"
    PLATFORM = "platform"


class TaskType(str, Enum):
    """Values of the ``type`` field of a task"""

    SCRIPT = "script"
    DOCKER_CONTAINER = "docker-container"
    DOCKER_IMAGE = "docker-image"
