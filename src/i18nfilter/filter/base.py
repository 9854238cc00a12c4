"""Base class for value filters.

A filter is a callable object that transforms one value. Options are
applied through ``set_<name>`` setters, either directly or in bulk with
``set_options()``.

Python 3.13+.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from typing import Any, Self

from i18nfilter.diagnostics import ErrorTemplate, InvalidOptionError

from .options import option_name

__all__ = ["AbstractFilter"]


class AbstractFilter(ABC):
    """Callable value filter with setter-based options.

    Subclasses implement ``filter()`` and one ``set_<name>`` method per option.

    Example:
        >>> class Upper(AbstractFilter):
        ...     def filter(self, value):
        ...         return value.upper() if isinstance(value, str) else value
        >>> Upper()("abc")
        'ABC'
    """

    @abstractmethod
    def filter(self, value: Any) -> Any:
        """Return the filtered value."""

    def __call__(self, value: Any) -> Any:
        return self.filter(value)

    def set_options(self, options: Mapping[str, Any] | object) -> Self:
        """Apply options by calling the matching ``set_<name>`` setters.

        Args:
            options: Mapping of option names (snake_case or camelCase) to
                values, or a dataclass instance such as FilterOptions

        Returns:
            self

        Raises:
            InvalidOptionError: If options is not a mapping/dataclass, or a
                key has no matching setter
        """
        if is_dataclass(options) and not isinstance(options, type):
            items: Mapping[str, Any] = {f.name: getattr(options, f.name) for f in fields(options)}
        elif isinstance(options, Mapping):
            items = options
        else:
            raise InvalidOptionError(ErrorTemplate.invalid_options_container(options))

        for key, value in items.items():
            name = option_name(key)
            setter = getattr(self, f"set_{name}", None)
            if name == "options" or not callable(setter):
                raise InvalidOptionError(ErrorTemplate.invalid_option(str(key)))
            setter(value)
        return self
