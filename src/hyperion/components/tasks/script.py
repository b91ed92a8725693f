"""
Script task running code with the host shell.
"""

import tempfile
from pathlib import Path

from hyperion.components.parameters import TaskParameters
from hyperion.components.tasks.base import AbstractTask, exported_environment
from hyperion.core.config.settings import settings
from hyperion.execution.process import ProcessResult


class ScriptTask(AbstractTask):
    """
    Runs inline code or a script file with the configured shell.

    The rendered code is written to a temporary script that is executed
    with ``settings.SHELL``. Group variables with identifier-like names are
    exported to the process environment.
    """

    kind = "script"

    async def execute(self, code: str, parameters: TaskParameters) -> ProcessResult:
        with tempfile.TemporaryDirectory(prefix="hyperion-") as temp_dir:
            script = Path(temp_dir) / "script.sh"
            script.write_text(code)
            return await parameters.runner.run(
                [settings.SHELL, str(script)],
                env=exported_environment(parameters.variable_values()),
                on_line=parameters.sink,
            )
