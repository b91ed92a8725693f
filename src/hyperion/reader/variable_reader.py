"""
Reader for the ``variable`` field of a task.

    variable:
      name: version
      regex: "version: (\\S+)"
      group: 1
"""

import re
from typing import Any

from hyperion.core.exceptions.custom_exceptions import DocumentFormatError
from hyperion.data.variable import Variable
from hyperion.execution.templating import RESERVED_NAMES
from hyperion.reader.base import NodeReader
from hyperion.reader.fields import DocumentReaderFields as Fields
from hyperion.reader.matcher import FieldSchema

VARIABLE_SCHEMA = (
    FieldSchema()
    .require_exactly_once(Fields.NAME.value)
    .allow(Fields.REGEX.value)
    .allow(Fields.GROUP.value)
)


class VariableReader(NodeReader):
    """Sets name and extraction settings of a task's variable"""

    node_kind = "variable"

    def __init__(self, variable: Variable):
        super().__init__()
        self.variable = variable

    def read(self, node: Any) -> None:
        node = self.require_mapping(node)
        VARIABLE_SCHEMA.validate(sorted(node), self.node_kind)

        name = self.require_text(node[Fields.NAME.value], Fields.NAME.value)
        if not name:
            raise DocumentFormatError(
                "The variable name must not be empty!",
                error_code="EMPTY_VARIABLE_NAME",
            )

        if name in RESERVED_NAMES:
            raise DocumentFormatError(
                f"The variable name '{name}' is reserved!",
                error_code="RESERVED_VARIABLE_NAME",
                details={"variable": name, "reserved": sorted(RESERVED_NAMES)},
            )

        regex = None
        if Fields.REGEX.value in node:
            regex = self.require_text(node[Fields.REGEX.value], Fields.REGEX.value)
            try:
                compiled = re.compile(regex)
            except re.error as e:
                raise DocumentFormatError(
                    f"The variable regex is not valid: {e}",
                    error_code="INVALID_REGEX",
                    details={"variable": name, "regex": regex},
                ) from e

        group = 0
        if Fields.GROUP.value in node:
            group = self.require_int(node[Fields.GROUP.value], Fields.GROUP.value)
            if regex is None or not 0 <= group <= compiled.groups:
                raise DocumentFormatError(
                    "The variable group needs a regex with that many groups!",
                    error_code="INVALID_REGEX_GROUP",
                    details={"variable": name, "regex": regex, "group": group},
                )

        self.variable.name = name
        self.variable.regex = regex
        self.variable.group = group
