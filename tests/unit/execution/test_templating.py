"""
Unit tests for variable substitution in task code
"""

import pytest

from hyperion.core.exceptions.custom_exceptions import ResolutionError
from hyperion.execution.templating import build_context, render_code


def test_group_variables_take_precedence():
    context = build_context({"name": "group"}, {"name": "model", "other": "x"})
    assert context["name"] == "group"
    assert context["other"] == "x"
    assert context["variables"] == {"name": "group"}
    assert context["model"] == {"name": "model", "other": "x"}


def test_render_explicit_scopes():
    code = "{{ name }} {{ variables.name }} {{ model.name }}"
    assert render_code(code, {"name": "group"}, {"name": "model"}) == (
        "group group model"
    )


def test_list_attributes():
    code = "{% for target in model.targets %}build {{ target }}\n{% endfor %}"
    rendered = render_code(code, {}, {"targets": ["linux", "darwin"]})
    assert rendered == "build linux\nbuild darwin\n"


def test_shell_syntax_passes_through():
    code = 'items=(a b)\necho ${#items[@]} "${HOME}"\n'
    assert render_code(code, {}, {}) == code


def test_comments():
    assert render_code("echo hi{## note ##}", {}, {}) == "echo hi"


def test_unresolved_reference():
    with pytest.raises(ResolutionError) as exc_info:
        render_code("echo {{ missing }}", {"known": "x"}, {})
    assert exc_info.value.error_code == "UNRESOLVED_VARIABLE"
    assert exc_info.value.details["variables"] == ["known"]


def test_invalid_template():
    with pytest.raises(ResolutionError) as exc_info:
        render_code("echo {{ broken", {}, {})
    assert exc_info.value.error_code == "INVALID_TEMPLATE"
