"""
Unit tests for the task kinds
"""

import pytest

from hyperion.components.model import Model
from hyperion.components.parameters import TaskParameters
from hyperion.components.tasks import DockerContainerTask, DockerImageTask, ScriptTask
from hyperion.data.attributes import Attribute
from hyperion.data.variable import Variable
from hyperion.execution.process import ProcessRunner


class TestTaskBasics:
    """Test tags, equality and code handling"""

    def test_tags_are_unique(self):
        task = ScriptTask("t1", "echo")
        task.add_tag("a")
        task.add_tag("b")
        task.add_tag("a")
        assert task.tags == ("a", "b")

    @pytest.mark.parametrize(
        "tags, tag_filter, selected",
        [
            ([], [], True),
            (["a"], [], True),
            ([], ["a"], False),
            (["a"], ["a"], True),
            (["a", "b"], ["b", "c"], True),
            (["a"], ["c"], False),
        ],
    )
    def test_tag_selection(self, tags, tag_filter, selected):
        task = ScriptTask("t1", "echo")
        for tag in tags:
            task.add_tag(tag)
        assert task.is_selected(tag_filter) is selected

    def test_is_regular_file(self, tmp_path):
        script = tmp_path / "script.sh"
        script.write_text("echo from file")
        assert ScriptTask("file", str(script)).is_regular_file()
        assert not ScriptTask("dir", str(tmp_path)).is_regular_file()
        assert not ScriptTask("inline", "echo hello").is_regular_file()
        assert not ScriptTask("invalid", "bad\0path").is_regular_file()

    def test_equality(self):
        assert ScriptTask("t1", "echo") == ScriptTask("t1", "echo")
        assert ScriptTask("t1", "echo") != ScriptTask("t2", "echo")
        assert ScriptTask("t1", "echo") != DockerContainerTask("t1", "echo")


class TestScriptTask:
    """Test script task execution"""

    @pytest.mark.asyncio
    async def test_hello_world_with_bash(self, output_lines):
        task = ScriptTask("t1", "echo hello world 1!")
        parameters = TaskParameters.of(
            Model(), {}, runner=ProcessRunner(), sink=output_lines.append
        )

        result = await task.run(parameters)

        assert result.success is True
        assert result.variable.name == "default"
        assert "hello world 1!" in result.variable.value
        assert output_lines == ["hello world 1!"]

    @pytest.mark.asyncio
    async def test_failing_script_with_bash(self, output_lines):
        task = ScriptTask("t1", "echo failing >&2\nexit 3")
        parameters = TaskParameters.of(
            Model(), {}, runner=ProcessRunner(), sink=output_lines.append
        )

        result = await task.run(parameters)

        assert result.success is False
        assert result.output == ("failing",)

    @pytest.mark.asyncio
    async def test_variables_are_rendered_and_exported(
        self, fake_runner, make_parameters
    ):
        model = Model()
        model.data.add(Attribute("greeting", "hello"))
        model.data.add(Attribute("name", "model"))
        variables = {"name": Variable(name="name", value="group")}
        task = ScriptTask("t1", "echo {{ greeting }} {{ name }} {{ model.name }}")

        result = await task.run(make_parameters(model, variables))

        assert result.success is True
        assert fake_runner.scripts == ["echo hello group model"]
        assert fake_runner.environments[0] == {"name": "group"}
        assert result.variable.value == "hello group model"

    @pytest.mark.asyncio
    async def test_code_from_file(self, tmp_path, fake_runner, make_parameters):
        script = tmp_path / "build.sh"
        script.write_text("echo from {{ model.origin }}\n")
        model = Model()
        model.data.add(Attribute("origin", "file"))

        result = await ScriptTask("t1", str(script)).run(make_parameters(model))

        assert result.success is True
        assert fake_runner.scripts == ["echo from file\n"]

    @pytest.mark.asyncio
    async def test_unresolved_reference_fails_task(self, fake_runner, make_parameters):
        task = ScriptTask("t1", "echo {{ missing }}")

        result = await task.run(make_parameters())

        assert result.success is False
        assert "missing" in result.error
        assert fake_runner.commands == []

    @pytest.mark.asyncio
    async def test_regex_variable(self, make_parameters):
        task = ScriptTask("t1", "echo building\necho version: 1.2.3")
        task.variable = Variable(name="version", regex=r"version: (\S+)", group=1)

        result = await task.run(make_parameters())

        assert result.variable == Variable(
            name="version", value="1.2.3", regex=r"version: (\S+)", group=1
        )


class TestDockerTasks:
    """Test docker command lines"""

    @pytest.mark.asyncio
    async def test_container_command(self, fake_runner, make_parameters):
        task = DockerContainerTask("t1", "make {{ target }}")
        task.image_name = "gcc"
        task.platform = "linux/amd64"
        variables = {"target": Variable(name="target", value="all")}

        result = await task.run(make_parameters(variables=variables))

        assert result.success is True
        command = fake_runner.commands[0]
        assert command[:5] == ["docker", "run", "--rm", "--platform", "linux/amd64"]
        assert command[5] == "-v"
        assert command[6].endswith(":/hyperion")
        assert command[7:9] == ["-w", "/hyperion"]
        assert command[9:11] == ["-e", "target=all"]
        assert command[11:] == ["gcc:latest", "/bin/sh", "/hyperion/script.sh"]

    @pytest.mark.asyncio
    async def test_image_command(self, fake_runner, make_parameters):
        task = DockerImageTask("t1", "FROM alpine:3")
        task.image_name = "demo"
        task.image_version = "1.0"

        result = await task.run(make_parameters())

        assert result.success is True
        command = fake_runner.commands[0]
        assert command[:4] == ["docker", "build", "-t", "demo:1.0"]
        assert len(command) == 5
