import random

import pytest

from llrb.demo import main, parse_args


@pytest.mark.parametrize("mode", ["2-3", "2-3-4"])
def test_demo_prints_remaining_keys(capsys, mode):
    assert main(["--seed", "3", "--size", "12", "--mode", mode]) == 0

    rng = random.Random(3)
    keys = [rng.randint(1, 200) for _ in range(12)]
    out = capsys.readouterr().out

    assert out.startswith("Values: " + "\t".join(str(k) for k in keys))
    assert f"Deleting 4th key: {keys[3]}" in out
    lines = [line for line in out.splitlines() if line.startswith("(")]
    assert len(lines) == len(set(keys)) - 1
    printed = [int(line.split()[1]) for line in lines]
    assert printed == sorted(set(keys) - {keys[3]})
    assert all(line.split()[0] in ("(Red)", "(Black)") for line in lines)


def test_demo_with_few_keys_deletes_nothing(capsys):
    assert main(["--seed", "1", "--size", "3"]) == 0

    out = capsys.readouterr().out
    assert "Deleting" not in out


def test_defaults(monkeypatch):
    monkeypatch.delenv("LLRB_MODE", raising=False)

    args = parse_args([])

    assert args.size == 10
    assert args.max_key == 200
    assert args.mode == "2-3"
    assert not args.verbose


def test_environment_defaults(monkeypatch):
    monkeypatch.setenv("LLRB_SEED", "42")
    monkeypatch.setenv("LLRB_MODE", "2-3-4")

    args = parse_args([])

    assert args.seed == 42
    assert args.mode == "2-3-4"


def test_flags_override_environment(monkeypatch):
    monkeypatch.setenv("LLRB_MODE", "2-3-4")

    assert parse_args(["--mode", "2-3"]).mode == "2-3"


def test_unknown_mode_in_environment(monkeypatch, capsys):
    monkeypatch.setenv("LLRB_MODE", "bogus")

    with pytest.raises(SystemExit) as exc:
        parse_args([])

    assert exc.value.code == 2
    assert "LLRB_MODE" in capsys.readouterr().err


def test_bad_seed_in_environment(monkeypatch):
    monkeypatch.setenv("LLRB_SEED", "abc")

    with pytest.raises(SystemExit):
        parse_args([])


def test_seed_flag(monkeypatch):
    monkeypatch.delenv("LLRB_SEED", raising=False)

    assert parse_args(["--seed", "7"]).seed == 7
    assert parse_args([]).seed is None
