import logging

import pytest

import main
from logic import check_file, parse_file, parse_text, run_program
from nodes import EvaluationError, Program
from parser import ParserFailure


@pytest.fixture
def program_file(tmp_path):
    def write(text, name="robot.prog"):
        path = tmp_path / name
        path.write_text(text)
        return path
    return write


def test_parse_text_returns_program():
    program = parse_text("loop { move; }")
    assert isinstance(program, Program)


def test_parse_text_raises_on_bad_input():
    with pytest.raises(ParserFailure):
        parse_text("loop { move; ")


def test_parse_file(program_file):
    program = parse_file(program_file("move(2);\nturnL;"))
    assert str(program) == "move(2);\nturnL;"


def test_parse_file_logs_parse_errors(program_file, caplog):
    with caplog.at_level(logging.ERROR):
        assert parse_file(program_file("move turnL;")) is None
    assert "No semicolon" in caplog.text


def test_parse_file_missing_file(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        assert parse_file(tmp_path / "nope.prog") is None
    assert "could not be read" in caplog.text


def test_check_file(program_file):
    assert check_file(program_file("wait;"))
    assert not check_file(program_file("wait", name="bad.prog"))


def test_run_program_to_completion(robot):
    assert run_program(parse_text("move; turnL;"), robot)
    assert robot.calls == ["move", "turn_left"]


def test_run_program_stops_when_robot_interrupts(make_robot):
    robot = make_robot(max_actions=5)
    assert not run_program(parse_text("loop { move; }"), robot)
    assert robot.calls == ["move"] * 5


def test_run_program_propagates_evaluation_errors(robot):
    with pytest.raises(EvaluationError):
        run_program(parse_text("move(div(1, fuelLeft));"), robot)


@pytest.fixture
def quiet_main(monkeypatch):
    # keep pytest's log capture handlers on the root logger
    monkeypatch.setattr(main, "setup_logging", lambda *args: None)


@pytest.mark.usefixtures("quiet_main")
def test_main_with_files(program_file, tmp_path, capsys):
    good = program_file("if(eq(fuelLeft,0)){shieldOn;}")
    main.main([str(good), str(tmp_path / "missing.prog")])
    out = capsys.readouterr().out
    assert "if(eq(fuelLeft, 0)) { shieldOn; }" in out
    assert "Can't find file" in out
    assert out.rstrip().endswith("Done")


@pytest.mark.usefixtures("quiet_main")
def test_main_prompts_until_empty_line(program_file, monkeypatch, capsys):
    answers = iter([str(program_file("turnAround;")), ""])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    main.main([])
    out = capsys.readouterr().out
    assert "turnAround;" in out
    assert "Done" in out
