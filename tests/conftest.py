# tests/conftest.py
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

import pytest


@pytest.fixture
def full_header_script():
    return (
        "#!/usr/bin/env nix-runner\n"
        "#!pure\n"
        "#!nix-option experimental-features flakes\n"
        "#!registry nixpkgs github:NixOS/nixpkgs/0080a93cdf255b27e466116250b14b2bcd7b843b?dir=modules\n"
        "#!package hello\n"
        "#!package jq\n"
        "#!command bash\n"
        "\n"
        "hello | jq -R .\n"
    )


@pytest.fixture
def script_file(tmp_path, full_header_script):
    path = tmp_path / "greet.sh"
    path.write_text(full_header_script)
    return path
