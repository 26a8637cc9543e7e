import json

from blackjack_sim.app import run


def test_auto_run_with_options_file(tmp_path, capsys):
    path = tmp_path / "options.json"
    path.write_text(json.dumps({"hands": 5, "decks": 1}))
    assert run(["--auto", str(path)]) == 0
    assert "Final bankroll after 5 hands" in capsys.readouterr().out


def test_unknown_flag_prints_usage(capsys):
    assert run(["--bogus"]) == 2
    assert "usage" in capsys.readouterr().err


def test_missing_options_file_fails(tmp_path):
    assert run(["--auto", str(tmp_path / "missing.json")]) == 1
