import pytest

from slashlib.inflect import ordinalize, pluralize


@pytest.mark.parametrize(
    "number, suffix",
    [(1, "st"), (2, "nd"), (3, "rd"), (4, "th"), (10, "th"), (21, "st"), (102, "nd")],
)
def test_ordinalize_suffix(number, suffix):
    result = ordinalize(number)
    assert result == str(number) + suffix


def test_ordinalize_teens_follow_last_digit():
    assert ordinalize(11).endswith("st")
    assert ordinalize(13).endswith("rd")


def test_ordinalize_negative_is_th():
    for number in (-1, -2, -3, -9, -21):
        assert ordinalize(number) == str(number) + "th"


def test_ordinalize_big_number():
    big = 10**30 + 2
    assert ordinalize(big) == str(big) + "nd"


def test_ordinalize_rejects_non_int():
    with pytest.raises(TypeError):
        ordinalize("1")


@pytest.mark.parametrize(
    "singular, plural",
    [("child", "children"), ("goose", "geese"), ("mouse", "mice"), ("tooth", "teeth")],
)
def test_irregulars(singular, plural):
    assert pluralize(singular) == plural


def test_irregular_keeps_first_letter_case():
    assert pluralize("Person") == "People"
    assert pluralize("MAN") == "Men"


@pytest.mark.parametrize("word", ["sheep", "fish", "Information", "news"])
def test_uncountables_unchanged(word):
    assert pluralize(word) == word


def test_rule_axis():
    assert pluralize("axis") == "axes"


def test_rule_consonant_y():
    assert pluralize("query") == "queries"


def test_rule_trailing_s():
    assert pluralize("bus") == "buses"


def test_vowel_y_takes_plain_s():
    assert pluralize("day") == "day" + "s"


def test_default_appends_s():
    for word in ("cat", "dog", "table"):
        assert pluralize(word) == word + "s"


def test_plural_a_words_unchanged():
    assert pluralize("data") == "data"


def test_pluralize_rejects_non_str():
    with pytest.raises(TypeError):
        pluralize(3)