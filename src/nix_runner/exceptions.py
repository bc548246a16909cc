# nix_runner/exceptions.py
"""
Custom exception hierarchy for nix_runner.

All nix_runner-specific exceptions inherit from NixRunnerError to enable
catch-all error handling while still providing specific exception types
for different failure conditions.

Parsing is all-or-nothing: every ParseError aborts the whole parse and no
partial configuration is ever returned.
"""

from __future__ import annotations


class NixRunnerError(Exception):
    """
    Base exception for all nix_runner errors.

    Catch this to handle any nix_runner-specific error.
    """

    pass


class ParseError(NixRunnerError):
    """
    Base class for failures while reading a runner header.

    Attributes:
        line: 1-based line number of the offending text, if known
        reason: Message without the location prefix
    """

    def __init__(self, reason: str, *, line: int | None = None):
        self.reason = reason
        self.line = line
        if line is not None:
            super().__init__(f"line {line}: {reason}")
        else:
            super().__init__(reason)

    def at_line(self, line: int) -> ParseError:
        """Return a copy of this error located at the given line."""
        return type(self)(self.reason, line=line)


class MissingHeaderMarkerError(ParseError):
    """
    Raised when the input does not start with the '#!' marker.

    Example:
        >>> parse("echo hi\\n")
        MissingHeaderMarkerError: line 1: script must start with '#!'
    """

    pass


class DirectiveError(ParseError):
    """
    Base for errors tied to a single directive line.

    Attributes:
        directive: The offending line text (without its line ending)
    """

    def __init__(self, reason: str, directive: str, *, line: int | None = None):
        self.directive = directive
        super().__init__(reason, line=line)

    def at_line(self, line: int) -> DirectiveError:
        return type(self)(self.reason, self.directive, line=line)


class UnknownDirectiveError(DirectiveError):
    """
    Raised when a '#!' line names none of the known directives.

    Example:
        >>> parse("#!/usr/bin/env nix-runner\\n#!impure\\n\\n")
        UnknownDirectiveError: line 2: unknown directive '#!impure'
    """

    pass


class MalformedArgumentError(DirectiveError):
    """
    Raised when a directive keyword is recognized but its arguments are not.

    Covers empty tokens, disallowed characters, a missing second token of a
    pair, and trailing text after the expected arguments.
    """

    pass


class MissingTerminatorError(ParseError):
    """
    Raised when the directive block is not followed by a blank line.
    """

    pass


class IncompleteConsumptionError(ParseError):
    """
    Raised when input remains after the body was captured.

    The body extends to end of input, so this signals a parser bug rather
    than a problem with the script.
    """

    pass


class ScriptDecodeError(NixRunnerError):
    """
    Raised when a script file is not valid UTF-8 text.
    """

    pass


class ConfigValidationError(NixRunnerError):
    """
    Raised when RunnerConfig validation fails.

    This is raised during RunnerConfig.__post_init__ and by load_config()
    when a defaults file holds values outside the directive grammar.

    Example:
        >>> RunnerConfig(command="")
        ConfigValidationError: command '' is not a valid identifier
    """

    pass

