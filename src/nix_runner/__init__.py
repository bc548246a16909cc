__version__ = "0.1.0"

from .directives import (
    Command,
    Directive,
    Option,
    Package,
    Purity,
    Registry,
    check_unambiguous,
    dispatch,
)
from .exceptions import (
    ConfigValidationError,
    DirectiveError,
    IncompleteConsumptionError,
    MalformedArgumentError,
    MissingHeaderMarkerError,
    MissingTerminatorError,
    NixRunnerError,
    ParseError,
    ScriptDecodeError,
    UnknownDirectiveError,
)
from .invocation import ResolvedInvocation, build_invocation
from .load_config import load_config
from .load_script import load_script, load_scripts
from .logging_config import disable_logging, setup_logging
from .runner_config import RunnerConfig, reduce_directives
from .script_parser import HeaderBlock, ParsedScript, collect_directives, parse

__all__ = [
    # Version
    "__version__",
    # Parsing
    "parse",
    "collect_directives",
    "dispatch",
    "check_unambiguous",
    "reduce_directives",
    "HeaderBlock",
    "ParsedScript",
    "RunnerConfig",
    # Directives
    "Directive",
    "Command",
    "Option",
    "Package",
    "Purity",
    "Registry",
    # Loading
    "load_config",
    "load_script",
    "load_scripts",
    # Invocation
    "build_invocation",
    "ResolvedInvocation",
    # Logging
    "setup_logging",
    "disable_logging",
    # Exceptions
    "NixRunnerError",
    "ParseError",
    "DirectiveError",
    "MissingHeaderMarkerError",
    "UnknownDirectiveError",
    "MalformedArgumentError",
    "MissingTerminatorError",
    "IncompleteConsumptionError",
    "ScriptDecodeError",
    "ConfigValidationError",
]
