import pytest

from tbldoc.cardinality import Cardinality, to_cardinality


@pytest.mark.parametrize(
    "text, expected",
    [
        ("zero or one", Cardinality.ZERO_OR_ONE),
        ("Zero or One", Cardinality.ZERO_OR_ONE),
        ("exactly one", Cardinality.EXACTLY_ONE),
        ("Zero or more", Cardinality.ZERO_OR_MORE),
        ("ONE OR MORE", Cardinality.ONE_OR_MORE),
        ("one or zero", Cardinality.ZERO_OR_ONE),
        ("zero or many", Cardinality.ZERO_OR_MORE),
        ("one or many", Cardinality.ONE_OR_MORE),
        ("many(0)", Cardinality.ZERO_OR_MORE),
        ("many(1)", Cardinality.ONE_OR_MORE),
        ("0+", Cardinality.ZERO_OR_MORE),
        ("1+", Cardinality.ONE_OR_MORE),
        ("*", Cardinality.ZERO_OR_MORE),
        ("0..*", Cardinality.ZERO_OR_MORE),
        ("0..1", Cardinality.ZERO_OR_ONE),
        ("1..*", Cardinality.ONE_OR_MORE),
        ("1", Cardinality.EXACTLY_ONE),
        ("", Cardinality.UNKNOWN),
    ],
)
def test_to_cardinality(text, expected):
    assert to_cardinality(text) is expected


@pytest.mark.parametrize("text", ["0", "many", "two"])
def test_to_cardinality_invalid(text):
    with pytest.raises(ValueError, match=f"invalid cardinality: {text}"):
        to_cardinality(text)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1+", "One or more"),
        ("0..1", "Zero or one"),
        ("1", "Exactly one"),
        ("*", "Zero or more"),
        ("", ""),
    ],
)
def test_string_form_is_value(text, expected):
    assert str(to_cardinality(text)) == expected


def test_round_trip_through_string():
    for card in Cardinality:
        assert to_cardinality(str(card)) is card