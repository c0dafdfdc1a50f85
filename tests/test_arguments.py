import pytest

from fpcli.arguments import KeyValueArgument, labels_to_map, notebook_title


def test_parse_key_and_value():
    argument = KeyValueArgument.parse("env=production")
    assert argument.key == "env"
    assert argument.value == "production"


def test_parse_key_only_has_empty_value():
    argument = KeyValueArgument.parse("important")
    assert argument == KeyValueArgument("important", "")


def test_parse_splits_at_first_equals_sign():
    argument = KeyValueArgument.parse("query=a=b")
    assert argument.key == "query"
    assert argument.value == "a=b"


def test_parse_empty_key():
    argument = KeyValueArgument.parse("=value")
    assert argument.key == ""
    assert argument.value == "value"


def test_parse_empty_input_is_an_error():
    with pytest.raises(ValueError, match="empty input"):
        KeyValueArgument.parse("")


def test_to_label():
    label = KeyValueArgument.parse("team=core").to_label()
    assert label == {"key": "team", "value": "core"}


def test_labels_to_map_collects_pairs():
    arguments = [KeyValueArgument.parse("a=1"), KeyValueArgument.parse("b")]
    assert labels_to_map(arguments) == {"a": "1", "b": ""}


def test_labels_to_map_last_value_wins():
    arguments = [KeyValueArgument.parse("a=1"), KeyValueArgument.parse("a=2")]
    assert labels_to_map(arguments) == {"a": "2"}


@pytest.mark.parametrize("arguments", [None, []])
def test_labels_to_map_without_labels(arguments):
    assert labels_to_map(arguments) is None


def test_notebook_title_defaults_to_untitled():
    assert notebook_title([]) == "Untitled"


def test_notebook_title_joins_words():
    assert notebook_title(["Incident", "review"]) == "Incident review"