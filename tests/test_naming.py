import pytest

from fpcli.naming import MAX_NAME_LENGTH, Name, sluggify_str


@pytest.mark.parametrize("text", ["a", "my-name", "abc123", "9-lives", "a" * MAX_NAME_LENGTH])
def test_valid_names_round_trip(text):
    name = Name.parse(text)
    assert name == text
    assert str(name) == text


@pytest.mark.parametrize(
    "text",
    ["", "a" * (MAX_NAME_LENGTH + 1), "-abc", "abc-", "Abc", "a_b", "a b", "naïve"],
)
def test_invalid_names_raise(text):
    with pytest.raises(ValueError):
        Name.parse(text)


def test_sluggify_words():
    assert sluggify_str("Hello World") == "hello-world"


def test_sluggify_drops_digits_and_symbols():
    assert sluggify_str("Title 2") == "title"


def test_sluggify_trims_dashes():
    result = sluggify_str("  --my name!!  ")
    assert result is not None
    assert not result.startswith("-")
    assert not result.endswith("-")
    assert result == "my-name"


def test_sluggify_only_emoji_is_none():
    assert sluggify_str("😁🎉") is None


def test_sluggify_empty_is_none():
    assert sluggify_str("") is None


def test_sluggify_long_text_is_valid_or_none():
    result = sluggify_str("word " * 40)
    if result is None:
        assert len("word-" * 13) >= MAX_NAME_LENGTH
    else:
        assert len(result) <= MAX_NAME_LENGTH
        assert Name.parse(result) == result


@pytest.mark.parametrize("text", ["Service Down", "API: errors / latency", "Ünïcode Title"])
def test_sluggify_result_is_a_valid_name(text):
    result = sluggify_str(text)
    assert isinstance(result, Name)
    assert Name.parse(str(result)) == result
    assert result == result.lower()