import json

from tilepairing.testing.__main__ import (
    COMMANDS,
    create_completer,
    create_main_parser,
    create_simulate_parser,
    run_simulate_command,
    run_standard_mode,
    run_validate_command,
)


def test_completer_offers_both_command_forms():
    options = create_completer().options
    for command in COMMANDS:
        assert command in options
        assert f"/{command}" in options
    assert "/list" in options


def test_main_parser_dispatches_to_handlers():
    args = create_main_parser().parse_args(
        ["simulate", "--players", "8", "--system", "king_of_the_hill", "--seed", "3"]
    )
    assert args.func is run_simulate_command
    assert args.players == 8
    assert args.system == "king_of_the_hill"


def test_simulate_parser_defaults():
    args = create_simulate_parser().parse_args([])
    assert args.system == "swiss"
    assert args.max_repeats == 0
    assert not args.gibson


def test_simulate_then_validate(tmp_path, capsys):
    output = tmp_path / "event.json"

    argv = ["simulate", "--players", "7", "--rounds", "4", "--seed", "8"]
    assert run_standard_mode(argv + ["--output", str(output)]) == 0
    assert json.loads(output.read_text(encoding="utf-8"))["rounds"]

    assert run_standard_mode(["validate", "--file", str(output), "--detailed"]) == 0
    assert run_standard_mode(["validate", "--file", str(output), "--round", "9"]) == 1
    assert "Validating event" in capsys.readouterr().out


def test_validate_missing_file(tmp_path):
    args = create_main_parser().parse_args(
        ["validate", "--file", str(tmp_path / "missing.json")]
    )
    assert run_validate_command(args) == 1
