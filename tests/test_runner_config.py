# tests/test_runner_config.py
import dataclasses

import pytest

from nix_runner.directives import Command, Option, Package, Purity, Registry
from nix_runner.exceptions import ConfigValidationError
from nix_runner.runner_config import RunnerConfig, reduce_directives


def test_defaults():
    config = RunnerConfig()
    assert config.pure is False
    assert config.options == ()
    assert config.registries == ()
    assert config.packages == ()
    assert config.command == "bash"


def test_reduce_no_directives_returns_defaults():
    assert reduce_directives([]) == RunnerConfig()


def test_reduce_override_and_accumulate():
    config = reduce_directives(
        [
            Command("bash"),
            Package("jq"),
            Option("a", "b"),
            Purity(True),
            Registry("nixpkgs", "github:NixOS/nixpkgs"),
            Package("jq"),
            Command("python3"),
            Option("a", "b"),
        ]
    )
    assert config.command == "python3"
    assert config.pure is True
    assert config.packages == ("jq", "jq")
    assert config.options == (("a", "b"), ("a", "b"))
    assert config.registries == (("nixpkgs", "github:NixOS/nixpkgs"),)


def test_last_purity_wins():
    assert reduce_directives([Purity(True), Purity(False)]).pure is False
    assert reduce_directives([Purity(False), Purity(True)]).pure is True


def test_reduce_accepts_generator():
    config = reduce_directives(Package(n) for n in ["a", "b", "c"])
    assert config.packages == ("a", "b", "c")


def test_reduce_does_not_touch_defaults():
    defaults = RunnerConfig(packages=["coreutils"])
    config = reduce_directives([Package("jq")], defaults)
    assert defaults.packages == ("coreutils",)
    assert config.packages == ("coreutils", "jq")


def test_reduce_rejects_non_directive():
    with pytest.raises(TypeError, match="Not a directive"):
        reduce_directives([Package("jq"), "#!pure"])


def test_config_is_frozen():
    config = RunnerConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.command = "zsh"


def test_lists_are_stored_as_tuples():
    config = RunnerConfig(
        packages=["jq"], options=[["a", "b"]], registries=[["nixpkgs", "path:/x"]]
    )
    assert config.packages == ("jq",)
    assert config.options == (("a", "b"),)
    assert config.registries == (("nixpkgs", "path:/x"),)


def test_to_dict():
    config = RunnerConfig(pure=True, packages=("jq",), options=(("a", "b"),))
    assert config.to_dict() == {
        "pure": True,
        "options": [["a", "b"]],
        "registries": [],
        "packages": ["jq"],
        "command": "bash",
    }


def test_validation_errors():
    with pytest.raises(ConfigValidationError, match="command '' is not a valid identifier"):
        RunnerConfig(command="")

    with pytest.raises(ConfigValidationError, match="not a valid identifier"):
        RunnerConfig(command="bash -x")

    with pytest.raises(ConfigValidationError, match="pure must be a boolean"):
        RunnerConfig(pure="yes")

    with pytest.raises(ConfigValidationError, match="package 'a b' is not a valid identifier"):
        RunnerConfig(packages=["a b"])

    with pytest.raises(ConfigValidationError, match="packages must be a list"):
        RunnerConfig(packages="jq")

    with pytest.raises(ConfigValidationError, match="option entry"):
        RunnerConfig(options=[("only-key",)])

    with pytest.raises(ConfigValidationError, match="option entry"):
        RunnerConfig(options=["ab"])

    with pytest.raises(ConfigValidationError, match="option entry"):
        RunnerConfig(options=[("key", "github:x")])

    with pytest.raises(ConfigValidationError, match="registry entry"):
        RunnerConfig(registries=[("nixpkgs", "has space")])
