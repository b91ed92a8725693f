"""
Pytest configuration and fixtures for Hyperion tests
"""

import re
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

import pytest

from hyperion.components.model import Model
from hyperion.components.parameters import TaskParameters
from hyperion.execution.process import LineCallback, ProcessResult, ProcessRunner

_EXIT = re.compile(r"^exit (\d+)$")


class FakeProcessRunner(ProcessRunner):
    """
    Records commands instead of running them.

    When the command names an existing script file, the script is
    "interpreted": ``echo TEXT`` lines produce TEXT as output, an ``exit N``
    line ends the script with exit code N and other lines are ignored.
    Commands without a script produce no output and exit with 0.
    """

    def __init__(self):
        self.commands: List[List[str]] = []
        self.environments: List[Mapping[str, str]] = []
        self.scripts: List[str] = []

    async def run(
        self,
        command: Sequence[str],
        *,
        env: Optional[Mapping[str, str]] = None,
        cwd: Optional[str] = None,
        on_line: Optional[LineCallback] = None,
    ) -> ProcessResult:
        self.commands.append(list(command))
        self.environments.append(dict(env or {}))

        script = next((arg for arg in command if Path(arg).is_file()), None)
        if script is None:
            return ProcessResult(exit_code=0, lines=[])

        content = Path(script).read_text()
        self.scripts.append(content)
        lines: List[str] = []
        exit_code = 0
        for line in content.splitlines():
            line = line.strip()
            match = _EXIT.match(line)
            if match:
                exit_code = int(match.group(1))
                break
            if line.startswith("echo "):
                lines.append(line[len("echo ") :])
                if on_line is not None:
                    on_line(line[len("echo ") :])
        return ProcessResult(exit_code=exit_code, lines=lines)


@pytest.fixture
def fake_runner() -> FakeProcessRunner:
    """Process runner recording commands"""
    return FakeProcessRunner()


@pytest.fixture
def output_lines() -> List[str]:
    """Collects the output lines passed to the output sink"""
    return []


@pytest.fixture
def make_parameters(fake_runner, output_lines):
    """Factory for TaskParameters wired to the fake runner"""

    def _make(model: Optional[Model] = None, variables=None) -> TaskParameters:
        return TaskParameters.of(
            model or Model(),
            variables or {},
            runner=fake_runner,
            sink=output_lines.append,
        )

    return _make


@pytest.fixture
def allow_docker(monkeypatch):
    """Pretend a container runtime is reachable while reading documents"""
    monkeypatch.setattr(
        "hyperion.reader.task_readers.require_container_runtime", lambda: None
    )


@pytest.fixture
def sample_document(tmp_path) -> Path:
    """Document with two tagged script tasks"""
    path = tmp_path / "document.yml"
    path.write_text(
        """\
model:
  description: sample document
taskgroups:
  - title: test
    parallel: false
    tasks:
      - title: t1
        code: echo "hello world 1!"
        tags:
          - test1
      - title: t2
        code: echo "hello world 2!"
        tags:
          - test2
"""
    )
    return path
