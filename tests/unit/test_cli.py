import pytest

from consentrelay.application.parsing import can_dispatch
from consentrelay.presentation.cli import create_parser, run_cli
from consentrelay.presentation.cli.main import check_message
from tests.fakes import make_message


def test_cli_run_flags():
    parser = create_parser()
    args = parser.parse_args(["run", "--config", "relay.yaml"])
    assert args.command == "run"
    assert args.config == "relay.yaml"


def test_cli_version(capsys):
    assert run_cli(["--version"]) == 0
    assert "consent-relay v" in capsys.readouterr().out


def test_check_active_message(tmp_path, capsys):
    p = tmp_path / "msg.json"
    p.write_text(make_message(request_id="r1", status="active"), encoding="utf-8")

    assert run_cli(["check", str(p)]) == 0
    assert "request r1 -> submit" in capsys.readouterr().out


def test_check_rejected_message(tmp_path, capsys):
    p = tmp_path / "msg.json"
    p.write_text(make_message(request_id="r2", status="rejected", patient="p2"), encoding="utf-8")

    assert run_cli(["check", str(p)]) == 0
    assert "delete p2" in capsys.readouterr().out


def test_check_undispatchable_message(tmp_path, capsys):
    p = tmp_path / "msg.json"
    p.write_text('{"requestId":"r3"}', encoding="utf-8")

    assert run_cli(["check", str(p)]) == 1
    assert "not dispatchable" in capsys.readouterr().out


def test_check_missing_file(tmp_path):
    assert run_cli(["check", str(tmp_path / "missing.json")]) == 2


def test_run_without_registry_is_fatal(monkeypatch, capsys):
    monkeypatch.delenv("APP_REST_URI", raising=False)

    assert run_cli(["run"]) == 2
    assert "APP_REST_URI" in capsys.readouterr().err


@pytest.mark.parametrize(
    "raw",
    [
        make_message(status="active"),
        make_message(status="rejected"),
        make_message(status="draft"),
        '{"requestId":"r3"}',
        '{"requestId":"r4","content":{"value":NaN}}',
        "not json",
    ],
)
def test_check_agrees_with_can_dispatch(raw, capsys):
    assert (check_message(raw.encode("utf-8")) == 0) is can_dispatch(raw)
