"""
Unit tests for the process runner
"""

import asyncio

import pytest

from hyperion.core.exceptions.custom_exceptions import ExecutionError
from hyperion.execution.process import ProcessResult, ProcessRunner


@pytest.mark.asyncio
async def test_output_is_streamed_and_collected():
    lines = []
    result = await ProcessRunner().run(
        ["bash", "-c", "echo out; echo err >&2"], on_line=lines.append
    )
    assert result.success is True
    assert sorted(result.lines) == ["err", "out"]
    assert lines == result.lines


@pytest.mark.asyncio
async def test_environment_and_working_directory(tmp_path):
    result = await ProcessRunner().run(
        ["bash", "-c", 'echo "$GREETING"; pwd -P'],
        env={"GREETING": "hello"},
        cwd=str(tmp_path),
    )
    assert result.lines == ["hello", str(tmp_path.resolve())]


@pytest.mark.asyncio
async def test_exit_code():
    result = await ProcessRunner().run(["bash", "-c", "exit 4"])
    assert result == ProcessResult(exit_code=4, lines=[])
    assert result.success is False


@pytest.mark.asyncio
async def test_missing_executable():
    with pytest.raises(ExecutionError) as exc_info:
        await ProcessRunner().run(["/nonexistent/hyperion-command"])
    assert exc_info.value.error_code == "PROCESS_START_ERROR"


@pytest.mark.asyncio
async def test_line_longer_than_stream_limit():
    lines = []
    result = await ProcessRunner().run(
        ["bash", "-c", "head -c 70000 /dev/zero | tr '\\0' x; echo; echo after"],
        on_line=lines.append,
    )
    assert result.success is True
    assert result.lines == ["x" * 70000, "after"]
    assert lines == result.lines


@pytest.mark.asyncio
async def test_last_line_without_newline():
    result = await ProcessRunner().run(["bash", "-c", "printf 'a\\r\\nb'"])
    assert result.lines == ["a", "b"]


@pytest.mark.asyncio
async def test_process_is_killed_when_the_callback_fails(monkeypatch):
    started = []
    create = asyncio.create_subprocess_exec

    async def recording_create(*args, **kwargs):
        process = await create(*args, **kwargs)
        started.append(process)
        return process

    def failing_callback(line):
        raise RuntimeError(f"cannot handle {line}")

    monkeypatch.setattr(asyncio, "create_subprocess_exec", recording_create)

    with pytest.raises(RuntimeError):
        await ProcessRunner().run(
            ["bash", "-c", "echo first; sleep 30"], on_line=failing_callback
        )
    assert started[0].returncode is not None
