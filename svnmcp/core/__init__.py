"""Core domain types and logic."""

from .config import ConfigError, SvnConfig, load_config, load_config_or_default
from .errors import ErrorKind, ExitCode, ParseError, SvnError
from .result import Err, Ok, Result, is_err, is_ok
from .structured import as_sequence

__all__ = [
    # config
    "ConfigError",
    "SvnConfig",
    "load_config",
    "load_config_or_default",
    # errors
    "ErrorKind",
    "ExitCode",
    "ParseError",
    "SvnError",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
    # structured
    "as_sequence",
]
