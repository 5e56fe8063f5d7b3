import io

import prime_cli
from montprime import config


def test_cli_arguments(capsys):
    rc = prime_cli.main(["--seed", "1", "--rounds", "10", "97", "91", "abc", "1"])
    out, err = capsys.readouterr()
    lines = out.splitlines()
    assert rc == 1
    assert lines[0] == "97\tprime"
    assert lines[1].startswith("91\tcomposite\twitness=")
    assert lines[2] == "1\tcomposite"
    assert "# skip: abc" in err


def test_cli_seed_is_reproducible(capsys):
    prime_cli.main(["--seed", "5", "--rounds", "1", "3215031751", "561", "1105"])
    first = capsys.readouterr().out
    prime_cli.main(["--seed", "5", "--rounds", "1", "3215031751", "561", "1105"])
    assert capsys.readouterr().out == first


def test_cli_trial_from_stdin(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("91\n\n7919\n"))
    rc = prime_cli.main(["--trial"])
    out = capsys.readouterr().out.splitlines()
    assert rc == 0
    assert out == ["91\tcomposite\tdivisor=7", "7919\tprime"]


def test_cli_workers(capsys):
    rc = prime_cli.main(["--workers", "2", "--rounds", "8", "97", "4"])
    out = sorted(capsys.readouterr().out.splitlines())
    assert rc == 0
    assert out == ["4\tcomposite\twitness=2", "97\tprime"]


def test_cli_workers_honour_trial_limit(capsys, monkeypatch):
    monkeypatch.setattr(config, "PRIME_TRIAL_LIMIT", 1009)
    rc = prime_cli.main(["--workers", "2", "--trial", str(1009 * 1013)])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == [f"{1009 * 1013}\tcomposite\tdivisor=1009"]
