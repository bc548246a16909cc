# tests/test_cli.py
import json
from pathlib import Path

import pytest

from nix_runner import __version__
from nix_runner.cli import build_parser, main


def test_gets_script_and_trailing_args():
    args = build_parser().parse_args(["test.py", "--poo", "pee"])
    assert args.script == "test.py"
    assert args.args == ["--poo", "pee"]


def test_no_trailing_args():
    args = build_parser().parse_args(["test.py"])
    assert args.script == "test.py"
    assert args.args == []


def test_script_is_required(capsys):
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args([])
    assert exc.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_prints_invocation(script_file: Path, capsys):
    assert main([str(script_file), "--loud", "x"]) == 0
    out = capsys.readouterr().out.strip()
    assert out.startswith("nix shell --ignore-environment --option experimental-features flakes")
    assert "'nixpkgs#hello' 'nixpkgs#jq' --command bash" in out
    assert out.endswith(f"{script_file} --loud x")


def test_json_output(script_file: Path, capsys):
    assert main(["--json", str(script_file)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["config"]["packages"] == ["hello", "jq"]
    assert data["config"]["command"] == "bash"
    assert data["directives"][0] == "#!pure"
    assert data["body"] == "hello | jq -R .\n"


def test_custom_flake(script_file: Path, capsys):
    assert main(["--flake", "github:me/pkgs", "--nix", "nix2", str(script_file)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("nix2 shell")
    assert "github:me/pkgs#hello" in out


def test_defaults_file(tmp_path: Path, capsys):
    defaults = tmp_path / "defaults.toml"
    defaults.write_text('[defaults]\npackages = ["coreutils"]\n')
    script = tmp_path / "s.sh"
    script.write_text("#!/usr/bin/env nix-runner\n#!package jq\n\necho\n")

    assert main(["--defaults", str(defaults), "--json", str(script)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["config"]["packages"] == ["coreutils", "jq"]


def test_parse_error_exit_code(tmp_path: Path, capsys):
    script = tmp_path / "bad.sh"
    script.write_text("#!/usr/bin/env nix-runner\n#!nix-option onlykey\n\n")

    assert main([str(script)]) == 1
    err = capsys.readouterr().err
    assert err.startswith("nix-runner: error: ")
    assert "line 2:" in err


def test_missing_script(tmp_path: Path, capsys):
    assert main([str(tmp_path / "absent.sh")]) == 1
    assert "absent.sh" in capsys.readouterr().err


def test_bad_defaults_file(tmp_path: Path, script_file: Path, capsys):
    defaults = tmp_path / "defaults.toml"
    defaults.write_text('[defaults]\ncommand = "two words"\n')
    assert main(["--defaults", str(defaults), str(script_file)]) == 1
    err = capsys.readouterr().err
    assert "defaults.toml" in err
    assert "not a valid identifier" in err


def test_script_not_utf8(tmp_path: Path, capsys):
    script = tmp_path / "latin1.sh"
    script.write_bytes(b"#!/usr/bin/env nix-runner\n#!package jq\n\necho caf\xe9 \xff\n")

    assert main([str(script)]) == 1
    err = capsys.readouterr().err
    assert err.startswith("nix-runner: error: ")
    assert "not valid UTF-8" in err


def test_defaults_file_not_utf8(tmp_path: Path, script_file: Path, capsys):
    defaults = tmp_path / "defaults.toml"
    defaults.write_bytes(b'[defaults]\ncommand = "\xff"\n')

    assert main(["--defaults", str(defaults), str(script_file)]) == 1
    err = capsys.readouterr().err
    assert "defaults.toml" in err
    assert "not valid UTF-8" in err
