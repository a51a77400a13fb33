import importlib
import json
import sys

import pytest

# run.py is imported as a module; start_server is patched so no networking happens.


@pytest.fixture()
def run_module(monkeypatch):
    # Ensure a clean import each time (run.py reads VERSION once)
    if "run" in sys.modules:
        del sys.modules["run"]
    mod = importlib.import_module("run")
    return mod


@pytest.fixture()
def fake_server(monkeypatch):
    calls = {}

    def fake_start_server(host, port, debug):  # signature match
        calls["called"] = True
        calls["host"] = host
        calls["port"] = port
        calls["debug"] = debug

    import byow.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)
    return calls


def test_version_flag_outputs_version(run_module, capsys):
    ver = run_module.__version__
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    captured = capsys.readouterr().out
    assert ver in captured
    assert "BYOW World Server" in captured


def test_default_command_is_server(run_module):
    ns = run_module.parse_args([])
    assert ns.command == "server"


def test_server_main_invokes_start_server(monkeypatch, run_module, fake_server, capsys):
    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setenv("HOST", "127.0.0.1")
    exit_code = run_module.main(["server"])
    assert exit_code == 0
    assert fake_server == {"called": True, "host": "127.0.0.1", "port": 5555, "debug": False}
    assert "BYOW World Server" in capsys.readouterr().out


def test_server_flags_override_env(monkeypatch, run_module, fake_server):
    monkeypatch.setenv("PORT", "5555")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    run_module.main(["server", "--port", "6001", "--host", "localhost", "--debug"])
    assert fake_server["port"] == 6001
    assert fake_server["host"] == "localhost"
    assert fake_server["debug"] is True


def test_env_file_argument(monkeypatch, tmp_path, run_module, fake_server):
    # Set then delete so the value loaded from the file is undone afterwards
    monkeypatch.setenv("PORT", "1")
    monkeypatch.delenv("PORT")
    env_file = tmp_path / ".env"
    env_file.write_text("PORT=6002\n")
    run_module.main(["--env-file", str(env_file), "server"])
    assert fake_server["port"] == 6002


def test_generate_prints_ascii(run_module, capsys):
    assert run_module.main(["generate", "--seed", "42", "--width", "40", "--height", "30"]) == 0
    out = capsys.readouterr().out.splitlines()
    grid = out[:30]
    assert all(len(line) == 40 for line in grid)
    assert set("".join(grid)) <= {"#", ".", "+", " "}
    assert "Seed: 42" in out[30]
    assert "Connected: True" in out[30]


def test_generate_json(run_module, capsys):
    assert run_module.main(["generate", "--seed", "3", "--width", "20", "--height", "12", "--json"]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert (doc["seed"], doc["width"], doc["height"]) == (3, 20, 12)


def test_generate_invalid_dimension(run_module, capsys):
    assert run_module.main(["generate", "--width", "3"]) == 1
    assert "[ERROR]" in capsys.readouterr().out


def test_path_command(run_module, capsys):
    assert run_module.main(["path", "--seed", "42", "--width", "40", "--height", "30", "0", "0"]) == 0
    assert json.loads(capsys.readouterr().out) == {"path": [0], "length": 1}


def test_path_command_bad_room(run_module, capsys):
    assert run_module.main(["path", "--seed", "42", "0", "999"]) == 1
    assert "[ERROR]" in capsys.readouterr().out
