"""Template loaders for the Trellis environment.

Loaders provide template source to the Environment. They implement
``get_source(name)`` returning ``(source, filename)``. Trellis itself does
no I/O, so the built-in loaders work from memory or a caller-supplied
callable:

- `DictLoader`: Load from an in-memory dictionary
- `FunctionLoader`: Wrap a callable as a loader
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Protocol

from trellis.environment.exceptions import TemplateNotFoundError


class Loader(Protocol):
    """Anything with ``get_source(name) -> (source, filename)``."""

    def get_source(self, name: str) -> tuple[str, str | None]: ...


class DictLoader:
    """Load templates from a dictionary mapping names to sources.

    Example:
        >>> loader = DictLoader({"base.html": "{% block body %}{% endblock %}"})
        >>> loader.get_source("base.html")
        ('{% block body %}{% endblock %}', None)
    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: Mapping[str, str]):
        self._mapping = dict(mapping)

    def get_source(self, name: str) -> tuple[str, str | None]:
        if name not in self._mapping:
            raise TemplateNotFoundError(f"Template '{name}' not found in DictLoader")
        return self._mapping[name], None

    def list_templates(self) -> list[str]:
        return sorted(self._mapping)


class FunctionLoader:
    """Wrap a callable as a loader.

    The callable receives a template name and returns the source, a
    ``(source, filename)`` tuple, or None when the template does not exist.
    """

    __slots__ = ("_load",)

    def __init__(self, load: Callable[[str], str | tuple[str, str | None] | None]):
        self._load = load

    def get_source(self, name: str) -> tuple[str, str | None]:
        result = self._load(name)
        if result is None:
            raise TemplateNotFoundError(f"Template '{name}' not found")
        if isinstance(result, str):
            return result, None
        return result
