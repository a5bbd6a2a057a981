from dataclasses import dataclass

import pytest

from lambdaengine.command_line import parse_options
from lambdaengine.errors import LambdaError


@dataclass
class Options:
    WindowTitle: str = "Lambda :3"
    width: int = 1080
    scale: float = 1.0
    vsync: bool = False


@dataclass(frozen=True)
class FrozenOptions:
    name: str = "default"


def test_defaults_when_no_arguments():
    assert parse_options(Options, []) == Options()


def test_string_option_overrides_default():
    options = parse_options(Options, ["--WindowTitle", "My Window"])
    assert options.WindowTitle == "My Window"
    assert options.width == Options().width


def test_numeric_and_bool_options_are_converted():
    options = parse_options(Options, ["--width", "640", "--scale", "2.5", "--vsync", "1"])
    assert options == Options(width=640, scale=2.5, vsync=True)


def test_unrelated_arguments_are_ignored():
    options = parse_options(Options, ["positional", "--unknown", "x", "-width", "5"])
    assert options == Options()


def test_first_occurrence_wins():
    options = parse_options(Options, ["--width", "10", "--width", "20"])
    assert options.width == 10


def test_frozen_dataclass_supported():
    assert parse_options(FrozenOptions, ["--name", "other"]).name == "other"


def test_missing_value_raises():
    with pytest.raises(LambdaError, match="Missing option value for --width"):
        parse_options(Options, ["--width"])


def test_unparsable_value_raises():
    with pytest.raises(LambdaError, match="Failed to parse option --width to int"):
        parse_options(Options, ["--width", "wide"])


def test_bad_bool_raises():
    with pytest.raises(LambdaError, match="--vsync"):
        parse_options(Options, ["--vsync", "maybe"])


def test_non_dataclass_rejected():
    with pytest.raises(TypeError):
        parse_options(dict, ["--x", "1"])