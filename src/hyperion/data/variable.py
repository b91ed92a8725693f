"""
Task result variables.

Every task owns one Variable that receives the task's output after it ran.
By default the whole output (all lines joined by a newline) becomes the
value; with a regular expression only the selected capture group of the
first match is kept.

Example:
    >>> variable = Variable(name="version", regex=r"version: (\\S+)", group=1)
    >>> variable.extract(["building", "version: 1.2.3"])
    '1.2.3'
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from hyperion.core.logging.logger import get_logger

logger = get_logger(__name__)

DEFAULT_VARIABLE_NAME = "default"


@dataclass
class Variable:
    """
    Named result slot of a task.

    Attributes:
        name (str): Variable name, "default" unless the document names it
        value (str): Value of the last run
        regex (Optional[str]): Pattern used to extract the value from output
        group (int): Capture group of the regex that becomes the value
    """

    name: str = DEFAULT_VARIABLE_NAME
    value: str = ""
    regex: Optional[str] = None
    group: int = 0

    def extract(self, lines: Sequence[str]) -> str:
        """
        Compute the value for the given output lines.

        Args:
            lines: Output lines of the task (stdout and stderr merged)

        Returns:
            str: Complete output, or the regex capture group when a regex
                is configured ("" when the regex does not match)
        """
        output = "\n".join(lines)
        if self.regex is None:
            return output

        match = re.search(self.regex, output, re.MULTILINE)
        if match is None:
            logger.warning(
                "Variable regex did not match task output",
                variable=self.name,
                regex=self.regex,
            )
            return ""
        return match.group(self.group) or ""

    def snapshot(self) -> "Variable":
        """Independent copy handed out in task results"""
        return Variable(
            name=self.name, value=self.value, regex=self.regex, group=self.group
        )
