"""
01_parse_header.py - Minimal nix_runner example

Demonstrates:
- Parsing the runner header of hello.sh with load_script()
- Inspecting the resulting RunnerConfig and body
- Building (not running) the matching `nix shell` command line

Try it:
    python examples/basic/01_parse_header.py
"""
# ruff: noqa: T201

from pathlib import Path

from nix_runner import ParseError, build_invocation, load_script

SCRIPT = Path(__file__).with_name("hello.sh")


def main():
    try:
        parsed = load_script(SCRIPT)
    except ParseError as e:
        print(f"Could not parse {SCRIPT.name}: {e}")
        return

    # Singleton fields keep the last value, list fields keep every entry
    print(f"pure:       {parsed.config.pure}")
    print(f"command:    {parsed.config.command}")
    print(f"packages:   {list(parsed.config.packages)}")
    print(f"options:    {list(parsed.config.options)}")
    print(f"registries: {list(parsed.config.registries)}")
    print(f"body:\n{parsed.body}")

    invocation = build_invocation(parsed.config, SCRIPT, ["--extra", "arg"])
    print(f"Would run: {invocation.shell_line}")


if __name__ == "__main__":
    main()
