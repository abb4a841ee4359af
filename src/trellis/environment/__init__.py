"""Trellis environment: configuration, loaders and errors."""

from trellis.environment.exceptions import (
    ConfigError,
    ErrorCode,
    TemplateError,
    TemplateNotFoundError,
    TemplateSyntaxError,
)
from trellis.environment.core import Environment
from trellis.environment.loaders import DictLoader, FunctionLoader, Loader

__all__ = [
    "ConfigError",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FunctionLoader",
    "Loader",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateSyntaxError",
]
