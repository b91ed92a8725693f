"""
Variable substitution for task code.

Task code is rendered as a Jinja2 template before it is handed to the
process runner. References resolve against the task group's variables
first and fall back to the document model:

    {{ name }}             group variable "name", else model attribute "name"
    {{ variables.name }}   group variable only
    {{ model.name }}       model attribute only

List attributes stay lists, so ``{% for target in model.targets %}`` works.
Comments use ``{## ... ##}`` instead of Jinja's default ``{# ... #}`` so
shell constructs like ``${#array[@]}`` pass through untouched.

The names ``variables`` and ``model`` are reserved for the two namespaces;
the readers reject group variables and model attributes that use them.

Unknown references and template syntax errors raise ResolutionError.
"""

from typing import Any, Dict, Mapping

from jinja2 import Environment, StrictUndefined, TemplateError, UndefinedError

from hyperion.core.exceptions.custom_exceptions import ResolutionError

RESERVED_NAMES = frozenset({"variables", "model"})

_environment = Environment(
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
    comment_start_string="{##",
    comment_end_string="##}",
)


def build_context(
    variables: Mapping[str, str], model: Mapping[str, Any]
) -> Dict[str, Any]:
    """
    Build the template context with group variables taking precedence.

    Args:
        variables: Group variable values by name
        model: Model attribute values by name

    Returns:
        Dict[str, Any]: Flat lookup plus the explicit ``variables`` and
            ``model`` namespaces
    """
    context: Dict[str, Any] = dict(model)
    context.update(variables)
    context["variables"] = dict(variables)
    context["model"] = dict(model)
    return context


def render_code(
    code: str, variables: Mapping[str, str], model: Mapping[str, Any]
) -> str:
    """
    Substitute variable references in task code.

    Args:
        code: Inline code or file content of a task
        variables: Group variable values by name
        model: Model attribute values by name

    Returns:
        str: Rendered code

    Raises:
        ResolutionError: If a reference cannot be resolved or the code is
            not a valid template
    """
    try:
        template = _environment.from_string(code)
        return template.render(build_context(variables, model))
    except UndefinedError as e:
        raise ResolutionError(
            f"Unresolved variable reference: {e.message}",
            error_code="UNRESOLVED_VARIABLE",
            details={"variables": sorted(variables), "model": sorted(model)},
        ) from e
    except TemplateError as e:
        raise ResolutionError(
            f"Invalid variable reference syntax: {e.message}",
            error_code="INVALID_TEMPLATE",
        ) from e
