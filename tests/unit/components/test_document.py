"""
Unit tests for running documents
"""

import pytest

from hyperion.components.document import Document
from hyperion.components.task_group import TaskGroup
from hyperion.components.tasks import ScriptTask
from hyperion.data.attributes import Attribute
from hyperion.reader.document_reader import DocumentReader


def group_with(title, *codes):
    group = TaskGroup(title)
    for index, code in enumerate(codes):
        group.add(ScriptTask(f"{title}-{index}", code))
    return group


def test_groups_run_in_order(fake_runner, output_lines):
    document = Document()
    document.add(group_with("first", "echo one"))
    document.add(group_with("second", "echo two"))

    assert document.run(runner=fake_runner, sink=output_lines.append) is True
    assert output_lines == ["one", "two"]


def test_failed_group_stops_the_document(fake_runner, output_lines):
    document = Document()
    document.add(group_with("first", "exit 1", "echo same group"))
    document.add(group_with("second", "echo never"))

    assert document.run(runner=fake_runner, sink=output_lines.append) is False
    assert output_lines == ["same group"]


def test_model_is_visible_in_every_group(fake_runner, output_lines):
    document = Document()
    document.model.data.add(Attribute("release", "1.0"))
    document.add(group_with("first", "echo {{ release }}"))
    document.add(group_with("second", "echo {{ model.release }}"))

    assert document.run(runner=fake_runner, sink=output_lines.append) is True
    assert output_lines == ["1.0", "1.0"]
    assert document.model.to_dict() == {"release": "1.0"}


def test_sample_document_with_bash(sample_document, output_lines):
    document = DocumentReader(sample_document).read()

    assert document.run(sink=output_lines.append) is True

    assert output_lines == ["hello world 1!", "hello world 2!"]


def test_sample_document_with_tag_filter(sample_document, output_lines):
    document = DocumentReader(sample_document).read()

    assert document.run(["test1"], sink=output_lines.append) is True

    assert output_lines == ["hello world 1!"]
    variables = document.task_groups[0].variables
    assert variables["default"].value == "hello world 1!"


@pytest.mark.asyncio
async def test_run_async(fake_runner):
    document = Document()
    document.add(group_with("first", "echo async"))

    assert await document.run_async(runner=fake_runner) is True
