# visitor_common/__init__.py
try:
    from ._version import __version__
except Exception:
    __version__ = "0.0.0"

from .casing import BUILTIN_STRATEGIES, resolve_strategy, split_words
from .config_resolver import ConfigResolver, NamingConvention, ResolvedConfiguration, resolve_config
from .exceptions import ConfigError, UnknownScalarError, VisitorCommonError
from .model import (
    DeclarationKind,
    FragmentImport,
    ImportIdentifier,
    InlineFragmentTypes,
    LoadedFragment,
    Name,
    NameCategory,
    NameKind,
    ParsedScalar,
)
from .naming import NameConverter
from .scalars import ScalarRegistry
from .visitor import NamingVisitor

__all__ = [
    "__version__",
    "BUILTIN_STRATEGIES",
    "resolve_strategy",
    "split_words",
    "ConfigResolver",
    "NamingConvention",
    "ResolvedConfiguration",
    "resolve_config",
    "VisitorCommonError",
    "ConfigError",
    "UnknownScalarError",
    "DeclarationKind",
    "FragmentImport",
    "ImportIdentifier",
    "InlineFragmentTypes",
    "LoadedFragment",
    "Name",
    "NameCategory",
    "NameKind",
    "ParsedScalar",
    "NameConverter",
    "ScalarRegistry",
    "NamingVisitor",
]
