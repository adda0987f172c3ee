import pytest

from argsieve import FLAG, Param, ParseError, Parser, integer, number, parse
from argsieve.bind import ErrorReport, resolve
from argsieve.parameter import normalize_schema
from argsieve.split import split


def test_bind_positionals(assert_parse):
    assert_parse("apple carrot", {"fruit": {}, "vegetable": {}}, {"fruit": "apple", "vegetable": "carrot"})


def test_bind_positionals_token_list(assert_parse):
    assert_parse(["apple pie", "carrot"], {"fruit": {}, "vegetable": {}}, {"fruit": "apple pie", "vegetable": "carrot"})


def test_bind_short(assert_parse):
    assert_parse(
        "-f apple -v carrot",
        {"fruit": {"short": "f"}, "vegetable": {"short": "v"}},
        {"fruit": "apple", "vegetable": "carrot"},
    )


def test_bind_long(assert_parse):
    assert_parse(
        "--vegetable carrot --fruit=apple",
        {"fruit": {"long": "fruit"}, "vegetable": {"long": "vegetable"}},
        {"fruit": "apple", "vegetable": "carrot"},
    )


def test_bind_quoted_value(assert_parse):
    assert_parse("--name 'Jane Doe'", {"name": {"long": "name"}}, {"name": "Jane Doe"})


@pytest.mark.parametrize("cmd,expected", [("-v", True), ("", False), ("--verbose=false", True)])
def test_bind_flag(assert_parse, cmd, expected):
    assert_parse(cmd, {"verbose": {"type": FLAG, "short": "v", "long": "verbose"}}, {"verbose": expected})


def test_bind_number(assert_parse):
    assert_parse("--number 6.9", {"number": {"type": number, "long": "number"}}, {"number": 6.9})


def test_bind_int_positional(assert_parse):
    assert_parse("2112", {"number": {"type": integer}}, {"number": 2112})


def test_bind_negative_number_value(assert_parse):
    assert_parse("--offset -5", {"offset": {"type": integer, "long": "offset"}}, {"offset": -5})


def test_bind_optional_present(assert_parse):
    assert_parse("--fruit apple", {"fruit": {"long": "fruit", "optional": True}}, {"fruit": "apple"})


def test_bind_optional_absent(assert_parse):
    assert_parse("", {"fruit": {"long": "fruit", "optional": True}}, {})


def test_bind_default_overridden(assert_parse):
    assert_parse("--fruit apple", {"fruit": {"long": "fruit", "default": "banana"}}, {"fruit": "apple"})


def test_bind_default_used(assert_parse):
    assert_parse("", {"fruit": {"long": "fruit", "default": "banana"}}, {"fruit": "banana"})


def test_bind_default_is_coerced(assert_parse):
    assert_parse("", {"rotate": {"type": number, "long": "rotate", "default": "0.0"}}, {"rotate": 0.0})


def test_bind_positional_default(assert_parse):
    assert_parse("in.jpg", {"src": {}, "dst": {"default": "out.jpg"}}, {"src": "in.jpg", "dst": "out.jpg"})


def test_bind_long_over_short(assert_parse):
    assert_parse("-w 1 --width 2", {"width": {"type": integer, "short": "w", "long": "width"}}, {"width": 2})


def test_bind_last_long_alias_wins(assert_parse):
    schema = {"width": {"type": integer, "long": ["width", "cols"]}}
    assert_parse("--cols 3 --width 2", schema, {"width": 3})
    assert_parse("--width 2", schema, {"width": 2})


def test_bind_flag_aliases_or(assert_parse):
    schema = {"verbose": {"type": FLAG, "short": "v", "long": ["verbose", "loud"]}}
    assert_parse("--loud", schema, {"verbose": True})
    assert_parse("-v --verbose", schema, {"verbose": True})


def test_bind_empty_option_value_is_missing(parse_errors):
    errors = parse_errors("--fruit", {"fruit": {"long": "fruit"}})
    assert errors.missing == ["fruit"]
    assert errors.unexpected == []


def test_bind_shared_alias_first_parameter_claims(assert_parse):
    schema = {"a": {"long": "x"}, "b": {"long": "x", "optional": True}}
    assert_parse("--x 1", schema, {"a": "1"})


def test_bind_complex(assert_parse):
    assert_parse(
        "-v apple.jpg -w 720 --height=480 apple.png",
        {
            "in": {},
            "out": {},
            "verbose": {"type": FLAG, "short": "v"},
            "width": {"type": integer, "short": "w", "long": "width"},
            "height": {"type": integer, "short": "h", "long": "height"},
            "rotate": {"type": number, "short": "r", "long": "rotate", "default": "0.0"},
        },
        {
            "in": "apple.jpg",
            "out": "apple.png",
            "verbose": True,
            "width": 720,
            "height": 480,
            "rotate": 0.0,
        },
    )


def test_bind_invalid(parse_errors):
    errors = parse_errors("--number=apple", {"number": {"long": "number", "type": number}})
    assert isinstance(errors.invalid["number"], ParseError)
    assert str(errors.invalid["number"]) == "Invalid value for \"--number\": 'apple' is not a valid number"


def test_bind_invalid_default(parse_errors):
    errors = parse_errors("", {"rotate": {"long": "rotate", "type": number, "default": "left"}})
    assert str(errors.invalid["rotate"]) == "Invalid default for \"rotate\": 'left' is not a valid number"


def test_bind_invalid_positional(parse_errors):
    errors = parse_errors("apple", {"count": {"type": integer}})
    assert str(errors.invalid["count"]) == "Invalid value for \"COUNT\": 'apple' is not a valid integer"


def test_bind_invalid_override_keeps_default(parse_errors):
    errors = parse_errors("--rotate left", {"rotate": {"long": "rotate", "type": number, "default": "0"}})
    assert list(errors.invalid) == ["rotate"]
    assert errors.missing == []


def test_bind_missing(parse_errors):
    errors = parse_errors("", {"fruit": {"long": "fruit"}, "vegetable": {}, "verbose": {"type": FLAG}})
    assert errors.missing == ["fruit", "vegetable"]
    assert errors.invalid == {}
    assert errors.unexpected == []


def test_bind_unexpected_option(parse_errors):
    errors = parse_errors("--fruit apple", {"verbose": {"type": FLAG}})
    assert errors.unexpected == ["fruit"]


def test_bind_unexpected_in_input_order(parse_errors):
    errors = parse_errors("a --x 1 b -y c", {"first": {}})
    assert errors.unexpected == ["x", "b", "y"]


def test_bind_unexpected_after_delimiter(parse_errors):
    errors = parse_errors("apple -- --verbose", {"fruit": {}})
    assert errors.unexpected == ["--verbose"]


def test_bind_all_errors_accumulated(parse_errors):
    errors = parse_errors(
        "--width wide extra",
        {
            "width": {"type": integer, "long": "width"},
            "height": {"type": integer, "long": "height"},
        },
    )
    assert list(errors.invalid) == ["width"]
    assert errors.missing == ["width", "height"]
    assert errors.unexpected == ["extra"]


def test_bind_user_coercion_fatal_error_propagates():
    def broken(arg):
        raise KeyError(arg)

    with pytest.raises(KeyError):
        parse("--n 3", {"n": {"long": "n", "type": broken}})


def test_bind_help_returned_on_success_and_failure():
    schema = {"fruit": {"long": "fruit"}}
    _, _, help_ok = parse("--fruit apple", schema)
    _, _, help_err = parse("", schema)
    assert help_ok == help_err
    assert help_ok.options == ("--fruit <fruit>",)


def test_bind_outcome_is_exclusive():
    schema = {"fruit": {}}
    result, errors, _ = parse("apple", schema)
    assert result is not None and errors is None
    result, errors, _ = parse("", schema)
    assert result is None and errors is not None


def test_bind_idempotent():
    schema = {"fruit": {}, "verbose": {"type": FLAG, "short": "v"}}
    first = parse("-v apple", schema)
    second = parse("-v apple", schema)
    assert first == second
    assert first.result == {"fruit": "apple", "verbose": True}


def test_resolve_does_not_mutate_raw():
    schema = normalize_schema({"fruit": {"long": "fruit"}, "src": {}})
    raw = split(["--fruit", "apple", "in.jpg"], options={"fruit"})
    options, positionals = dict(raw.options), raw.positionals
    result, errors = resolve(schema, raw)
    assert result == {"fruit": "apple", "src": "in.jpg"}
    assert errors == ErrorReport()
    assert raw.options == options
    assert raw.positionals == positionals


def test_resolve_accepts_param_instances():
    schema = {"n": Param(short="n", type=integer)}
    result, _ = resolve(schema, split(["-n", "4"], options={"n"}))
    assert result == {"n": 4}


@pytest.mark.parametrize("cmd,expected", [("-v=false apple", True), ("-v= apple", False)])
def test_bind_short_flag_with_attached_value(assert_parse, cmd, expected):
    schema = {"verbose": {"type": FLAG, "short": "v"}, "src": {}}
    assert_parse(cmd, schema, {"verbose": expected, "src": "apple"})


def test_bind_empty_value_delimiter_disabled():
    result, errors, _ = Parser({"fruit": {"long": "fruit"}}, end_of_options_delimiter="").parse(["--fruit", ""])
    assert result is None
    assert errors.missing == ["fruit"]
    assert errors.unexpected == []


def test_bind_invalid_default_reported_missing(parse_errors):
    errors = parse_errors("", {"rotate": {"long": "rotate", "type": number, "default": "left"}})
    assert list(errors.invalid) == ["rotate"]
    assert errors.missing == ["rotate"]


def test_bind_presence_rules(assert_parse, parse_errors):
    schema = {
        "verbose": {"type": FLAG, "short": "v"},
        "fruit": {"long": "fruit", "optional": True},
        "color": {"long": "color", "default": "red"},
        "size": {"long": "size"},
    }
    assert_parse("--size 3", schema, {"verbose": False, "color": "red", "size": "3"})
    assert parse_errors("", schema).missing == ["size"]
