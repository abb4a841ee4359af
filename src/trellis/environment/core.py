"""Environment: named delimiter syntaxes plus template lookup.

The environment is the configuration layer in front of the parser. It holds
one or more named :class:`~trellis.syntax.Syntax` values, picks the default,
and optionally resolves template names through a loader.

Example:
    >>> env = Environment.from_mapping({
    ...     "general": {"default_syntax": "erb"},
    ...     "syntax": [{"name": "erb", "block_start": "<%", "block_end": "%>"}],
    ... })
    >>> env.parse("<% if user %>hi<% endif %>").body[0]
    If(...)

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from trellis.environment.exceptions import ConfigError, ErrorCode, TemplateNotFoundError
from trellis.environment.loaders import Loader
from trellis.nodes import Template
from trellis.parser import parse
from trellis.syntax import DEFAULT_SYNTAX, Syntax

logger = logging.getLogger(__name__)

DEFAULT_SYNTAX_NAME = "default"

_GENERAL_KEYS = frozenset({"default_syntax"})
_TOP_LEVEL_KEYS = frozenset({"general", "syntax"})


class Environment:
    """Registry of named syntaxes and the entry point for parsing.

    Attributes:
        syntaxes: Mapping of syntax name to Syntax; always has ``"default"``
        default_syntax: Name of the syntax used when none is requested
        loader: Optional source loader for :meth:`get_template`

    Raises:
        ConfigError: If ``default_syntax`` names no registered syntax.
    """

    def __init__(
        self,
        syntaxes: Mapping[str, Syntax] | None = None,
        default_syntax: str = DEFAULT_SYNTAX_NAME,
        loader: Loader | None = None,
    ):
        self.syntaxes: dict[str, Syntax] = {DEFAULT_SYNTAX_NAME: DEFAULT_SYNTAX}
        if syntaxes:
            self.syntaxes.update(syntaxes)
        if default_syntax not in self.syntaxes:
            raise ConfigError(
                f"default syntax '{default_syntax}' is not defined",
                ErrorCode.UNKNOWN_SYNTAX,
            )
        self.default_syntax = default_syntax
        self.loader = loader
        logger.debug(
            "environment configured with syntaxes %s (default %r)",
            sorted(self.syntaxes),
            default_syntax,
        )

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any], loader: Loader | None = None) -> Environment:
        """Build an environment from a parsed configuration document.

        Layout (e.g. as read from TOML)::

            [general]
            default_syntax = "erb"

            [[syntax]]
            name = "erb"
            block_start = "<%"
            block_end = "%>"

        Raises:
            ConfigError: On unknown keys, unnamed or duplicate syntaxes, an
                unknown default, or invalid delimiters.
        """
        unknown = sorted(set(config) - _TOP_LEVEL_KEYS)
        if unknown:
            raise ConfigError(f"unknown configuration section(s): {', '.join(unknown)}")

        general = config.get("general", {})
        unknown = sorted(set(general) - _GENERAL_KEYS)
        if unknown:
            raise ConfigError(f"unknown [general] option(s): {', '.join(unknown)}")

        syntaxes: dict[str, Syntax] = {}
        for entry in config.get("syntax", ()):
            name = entry.get("name")
            if not name:
                raise ConfigError("every [[syntax]] entry needs a name")
            if name == DEFAULT_SYNTAX_NAME:
                raise ConfigError(
                    f"syntax name '{DEFAULT_SYNTAX_NAME}' is reserved",
                    ErrorCode.DUPLICATE_SYNTAX,
                )
            if name in syntaxes:
                raise ConfigError(f"syntax '{name}' is defined more than once", ErrorCode.DUPLICATE_SYNTAX)
            syntaxes[name] = Syntax.from_mapping(entry)

        return cls(
            syntaxes=syntaxes,
            default_syntax=general.get("default_syntax", DEFAULT_SYNTAX_NAME),
            loader=loader,
        )

    def get_syntax(self, name: str | None = None) -> Syntax:
        """Return the syntax called ``name``, or the default one."""
        name = name or self.default_syntax
        try:
            return self.syntaxes[name]
        except KeyError:
            raise ConfigError(f"syntax '{name}' is not defined", ErrorCode.UNKNOWN_SYNTAX) from None

    def parse(
        self,
        source: str,
        *,
        syntax: str | None = None,
        name: str | None = None,
        filename: str | None = None,
    ) -> Template:
        """Parse template source using a named syntax.

        Raises:
            ConfigError: If ``syntax`` is not registered.
            ParseError: If the template is malformed.
        """
        resolved = self.get_syntax(syntax)
        logger.debug("parsing template %s (%d chars)", name or "<string>", len(source))
        template = parse(source, syntax=resolved, name=name, filename=filename)
        logger.debug("parsed template %s into %d top-level nodes", name or "<string>", len(template.body))
        return template

    def get_template(self, name: str, *, syntax: str | None = None) -> Template:
        """Load a template through the configured loader and parse it.

        Raises:
            TemplateNotFoundError: If there is no loader or it lacks ``name``.
        """
        if self.loader is None:
            raise TemplateNotFoundError(f"Template '{name}' requested but no loader is configured")
        source, filename = self.loader.get_source(name)
        return self.parse(source, syntax=syntax, name=name, filename=filename)
