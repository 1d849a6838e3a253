"""Case-conversion strategies and strategy resolution.

Every built-in strategy works on the word-segmented form of its input:

- ``"getUserQuery"`` → ``["get", "User", "Query"]``
- ``"HTTPServer"`` → ``["HTTP", "Server"]``
- ``"user-id 2"`` → ``["user", "id", "2"]``

Strategies are looked up by identifier. Plain names (``"pascalCase"``) and
names carrying a ``change-case-all#`` or ``change-case#`` prefix resolve to
the built-ins below; any other ``module#attribute`` identifier is imported.
"""

import importlib
import re
from typing import Callable, Dict, List, Union

from .constants import KEEP
from .exceptions import ConfigError

CaseFn = Callable[[str], str]
StrategyId = Union[str, CaseFn]

_split_lower_upper = re.compile(r"([a-z0-9])([A-Z])")
_split_acronym = re.compile(r"([A-Z])([A-Z][a-z])")
_strip = re.compile(r"[^A-Za-z0-9]+")

BUILTIN_MODULE_ALIASES = ("change-case-all", "change-case")


def split_words(value: str) -> List[str]:
    """Split an identifier into words on casing boundaries and separators."""
    s = _split_lower_upper.sub(r"\1 \2", value)
    s = _split_acronym.sub(r"\1 \2", s)
    return [w for w in _strip.split(s) if w]


def _cap(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def pascal_case(value: str) -> str:
    return "".join(_cap(w) for w in split_words(value))


def camel_case(value: str) -> str:
    words = split_words(value)
    if not words:
        return ""
    return words[0].lower() + "".join(_cap(w) for w in words[1:])


def constant_case(value: str) -> str:
    return "_".join(w.upper() for w in split_words(value))


def snake_case(value: str) -> str:
    return "_".join(w.lower() for w in split_words(value))


def param_case(value: str) -> str:
    return "-".join(w.lower() for w in split_words(value))


def dot_case(value: str) -> str:
    return ".".join(w.lower() for w in split_words(value))


def path_case(value: str) -> str:
    return "/".join(w.lower() for w in split_words(value))


def no_case(value: str) -> str:
    return " ".join(w.lower() for w in split_words(value))


def capital_case(value: str) -> str:
    return " ".join(_cap(w) for w in split_words(value))


def header_case(value: str) -> str:
    return "-".join(_cap(w) for w in split_words(value))


def sentence_case(value: str) -> str:
    s = no_case(value)
    return s[:1].upper() + s[1:]


def lower_case(value: str) -> str:
    return value.lower()


def upper_case(value: str) -> str:
    return value.upper()


def lower_case_first(value: str) -> str:
    return value[:1].lower() + value[1:]


def upper_case_first(value: str) -> str:
    return value[:1].upper() + value[1:]


def keep(value: str) -> str:
    return value


BUILTIN_STRATEGIES: Dict[str, CaseFn] = {
    "pascalCase": pascal_case,
    "camelCase": camel_case,
    "constantCase": constant_case,
    "snakeCase": snake_case,
    "paramCase": param_case,
    "dotCase": dot_case,
    "pathCase": path_case,
    "noCase": no_case,
    "capitalCase": capital_case,
    "headerCase": header_case,
    "sentenceCase": sentence_case,
    "lowerCase": lower_case,
    "upperCase": upper_case,
    "lowerCaseFirst": lower_case_first,
    "upperCaseFirst": upper_case_first,
    KEEP: keep,
}


def _import_strategy(module_name: str, attr: str) -> CaseFn:
    try:
        mod = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot load naming convention module '{module_name}': {e}") from e
    fn = getattr(mod, attr, None)
    if fn is None:
        raise ConfigError(f"Naming convention '{module_name}#{attr}' does not exist")
    if not callable(fn):
        raise ConfigError(f"Naming convention '{module_name}#{attr}' is not callable")
    return fn


def resolve_strategy(strategy: StrategyId) -> CaseFn:
    """Turn a strategy identifier into a ``str -> str`` function.

    Args:
        strategy: A built-in name, an aliased ``change-case-all#name``, a
            ``module#attribute`` reference, or a callable.

    Returns:
        The case function.

    Raises:
        ConfigError: If the identifier names no known or importable strategy.
    """
    if callable(strategy):
        return strategy
    if not isinstance(strategy, str) or not strategy:
        raise ConfigError(f"Invalid naming convention: {strategy!r}")
    if "#" not in strategy:
        fn = BUILTIN_STRATEGIES.get(strategy)
        if fn is None:
            raise ConfigError(f"Unknown naming convention '{strategy}'")
        return fn
    module_name, _, attr = strategy.partition("#")
    if not module_name or not attr:
        raise ConfigError(f"Invalid naming convention reference '{strategy}', expected 'module#function'")
    if module_name in BUILTIN_MODULE_ALIASES:
        fn = BUILTIN_STRATEGIES.get(attr)
        if fn is None:
            raise ConfigError(f"Unknown naming convention '{strategy}'")
        return fn
    return _import_strategy(module_name, attr)


def strategy_label(strategy: StrategyId) -> str:
    """Stable textual form of a strategy identifier, used for fingerprints."""
    if isinstance(strategy, str):
        return strategy
    module = getattr(strategy, "__module__", None) or ""
    name = getattr(strategy, "__qualname__", None) or getattr(strategy, "__name__", None) or repr(strategy)
    return f"{module}#{name}" if module else name
