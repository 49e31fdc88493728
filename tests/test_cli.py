import io
import json
import logging

import goodgit.cli as cli_mod
from goodgit.cli import describe, main, route_many


def _records(out):
    return [json.loads(ln) for ln in out.strip().splitlines()]


def _quiet(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "0")
    monkeypatch.delenv("LOG_FILE", raising=False)
    monkeypatch.delenv("URL", raising=False)


def test_describe_repo():
    rec = describe("https://github.com/ctsrc/goodgit.git")
    assert rec["canonical"] == "https://github.com/ctsrc/goodgit"
    assert rec["route"] == {"kind": "repo", "platform": "github", "username": "ctsrc", "repo_name": "goodgit"}
    assert rec["owner"] == "https://github.com/ctsrc"
    assert rec["steps"] == ["repo_info", "clone", "user_info"]


def test_describe_user():
    rec = describe("https://gitlab.com/qemu-project")
    assert rec["canonical"] == "https://gitlab.com/qemu-project"
    assert rec["route"]["kind"] == "user"
    assert rec["steps"] == ["user_info"]


def test_describe_error():
    rec = describe("https://bitbucket.org/a/b")
    assert rec == {
        "url": "https://bitbucket.org/a/b",
        "error": "NoRoute",
        "message": "No route for the provided URL",
    }


def test_route_many_keeps_input_order():
    urls = [f"https://github.com/u{i}/r{i}" for i in range(20)]
    rows = route_many(urls)
    assert [r["url"] for r in rows] == urls
    assert route_many([]) == []


def test_main_routes_arguments(monkeypatch, capsys):
    _quiet(monkeypatch)
    rc = main(["prog", "https://GITLAB.com/qemu-project/qemu/-/network/master?ref_type=heads", "https://github.com/ctsrc"])
    assert rc == 0
    recs = _records(capsys.readouterr().out)
    assert [r["canonical"] for r in recs] == ["https://gitlab.com/qemu-project/qemu", "https://github.com/ctsrc"]


def test_main_reports_failures(monkeypatch, capsys):
    _quiet(monkeypatch)
    rc = main(["prog", "https://github.com/", "https://github.com/a/b"])
    assert rc == 1
    recs = _records(capsys.readouterr().out)
    assert recs[0]["error"] == "NoUsername"
    assert recs[1]["canonical"] == "https://github.com/a/b"


def test_main_reads_url_env(monkeypatch, capsys):
    _quiet(monkeypatch)
    monkeypatch.setenv("URL", "https://github.com/ctsrc/goodgit")
    assert main(["prog"]) == 0
    recs = _records(capsys.readouterr().out)
    assert len(recs) == 1 and recs[0]["route"]["repo_name"] == "goodgit"


def test_main_reads_stdin(monkeypatch, capsys):
    _quiet(monkeypatch)
    monkeypatch.setattr("sys.stdin", io.StringIO("https://github.com/a/b\n\n  https://gitlab.com/c  \n"))
    assert main(["prog"]) == 0
    recs = _records(capsys.readouterr().out)
    assert [r["canonical"] for r in recs] == ["https://github.com/a/b", "https://gitlab.com/c"]


def test_main_usage_message(monkeypatch, capsys):
    _quiet(monkeypatch)
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main(["prog"]) == 1
    captured = capsys.readouterr()
    assert "Usage:" in captured.err
    assert captured.out == ""


def test_main_logs_route_to_file(monkeypatch, capsys, tmp_path):
    log_file = tmp_path / "goodgit.log"
    monkeypatch.delenv("URL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "1")
    monkeypatch.setenv("LOG_FILE", str(log_file))
    assert main(["prog", "https://github.com/ctsrc/goodgit", "https://example.com/x"]) == 1
    # main closes its log file on the way out
    assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)
    text = log_file.read_text(encoding="utf-8")
    assert "Route found for URL https://github.com/ctsrc/goodgit" in text
    assert '"repo_name": "goodgit"' in text
    assert "NoRoute" in text
    # logs never leak into the NDJSON stream
    assert "Route found" not in capsys.readouterr().out


def test_main_uses_write_rows(monkeypatch):
    _quiet(monkeypatch)
    captured = {}

    def fake_write(rows, out=None):
        captured["rows"] = list(rows)
        return len(captured["rows"])

    monkeypatch.setattr(cli_mod, "write_rows", fake_write)
    assert main(["prog", "https://github.com/a"]) == 0
    assert captured["rows"][0]["route"] == {"kind": "user", "platform": "github", "username": "a"}
