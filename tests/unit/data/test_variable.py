"""
Unit tests for task result variables
"""

from hyperion.data.variable import DEFAULT_VARIABLE_NAME, Variable


def test_default_variable():
    variable = Variable()
    assert variable.name == DEFAULT_VARIABLE_NAME == "default"
    assert variable.value == ""


def test_extract_joins_all_lines():
    assert Variable().extract(["first", "second"]) == "first\nsecond"
    assert Variable().extract([]) == ""


def test_extract_with_regex_group():
    variable = Variable(name="version", regex=r"^version: (\S+)$", group=1)
    assert variable.extract(["building", "version: 1.2.3", "done"]) == "1.2.3"


def test_extract_with_regex_whole_match():
    variable = Variable(name="word", regex=r"wor\w+")
    assert variable.extract(["hello world"]) == "world"


def test_extract_without_match_is_empty():
    variable = Variable(name="version", regex=r"version: (\S+)", group=1)
    assert variable.extract(["nothing here"]) == ""


def test_snapshot_is_independent():
    variable = Variable(name="x", value="1")
    snapshot = variable.snapshot()
    variable.value = "2"
    assert snapshot == Variable(name="x", value="1")
