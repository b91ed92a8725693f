"""
Docker based task kinds.

Classes:
    DockerTask: Shared image name, version and platform handling
    DockerContainerTask: Runs a script inside a container
    DockerImageTask: Builds an image from a Dockerfile

Both kinds need a reachable container runtime; the readers check this
while the document is read, before any task object is created.

Example:
    >>> task = DockerContainerTask("build", "make all")
    >>> task.image_name = "gcc"
    >>> task.image_version = "13"
    >>> task.image()
    'gcc:13'
"""

import tempfile
from pathlib import Path
from typing import List, Optional

from hyperion.components.parameters import TaskParameters
from hyperion.components.tasks.base import AbstractTask, exported_environment
from hyperion.core.config.settings import settings
from hyperion.execution.process import ProcessResult

CONTAINER_WORK_DIR = "/hyperion"
DEFAULT_IMAGE_VERSION = "latest"


class DockerTask(AbstractTask):
    """
    Common fields of the docker task kinds.

    Attributes:
        image_name (str): Image to run or to build
        image_version (str): Image tag, "latest" unless given
        platform (Optional[str]): Target platform such as "linux/amd64"
    """

    def __init__(self, title: str, code: str):
        super().__init__(title, code)
        self.image_name = ""
        self.image_version = DEFAULT_IMAGE_VERSION
        self.platform: Optional[str] = None

    def image(self) -> str:
        return f"{self.image_name}:{self.image_version}"

    def _platform_options(self) -> List[str]:
        return ["--platform", self.platform] if self.platform else []

    def _identity(self) -> tuple:
        return super()._identity() + (
            self.image_name,
            self.image_version,
            self.platform,
        )


class DockerContainerTask(DockerTask):
    """
    Runs the rendered code as a script inside a container.

    The script is written to a temporary directory which is mounted at
    ``/hyperion`` and executed with ``settings.CONTAINER_SHELL``. Group
    variables are passed as container environment variables.
    """

    kind = "docker-container"

    def build_command(self, script_dir: str, parameters: TaskParameters) -> List[str]:
        command = [settings.DOCKER_EXECUTABLE, "run", "--rm"]
        command += self._platform_options()
        command += ["-v", f"{script_dir}:{CONTAINER_WORK_DIR}"]
        command += ["-w", CONTAINER_WORK_DIR]
        environment = exported_environment(parameters.variable_values())
        for name, value in environment.items():
            command += ["-e", f"{name}={value}"]
        command += [
            self.image(),
            settings.CONTAINER_SHELL,
            f"{CONTAINER_WORK_DIR}/script.sh",
        ]
        return command

    async def execute(self, code: str, parameters: TaskParameters) -> ProcessResult:
        with tempfile.TemporaryDirectory(prefix="hyperion-") as temp_dir:
            (Path(temp_dir) / "script.sh").write_text(code)
            return await parameters.runner.run(
                self.build_command(temp_dir, parameters), on_line=parameters.sink
            )


class DockerImageTask(DockerTask):
    """
    Builds ``image_name:image_version`` from the rendered Dockerfile.

    The code is the Dockerfile content (or the path of a Dockerfile); it is
    written into an empty temporary build context.
    """

    kind = "docker-image"

    def build_command(self, context_dir: str) -> List[str]:
        command = [settings.DOCKER_EXECUTABLE, "build"]
        command += self._platform_options()
        command += ["-t", self.image(), context_dir]
        return command

    async def execute(self, code: str, parameters: TaskParameters) -> ProcessResult:
        with tempfile.TemporaryDirectory(prefix="hyperion-") as temp_dir:
            (Path(temp_dir) / "Dockerfile").write_text(code)
            return await parameters.runner.run(
                self.build_command(temp_dir), on_line=parameters.sink
            )
