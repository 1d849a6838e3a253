"""Constants used throughout the visitor-common layer.

This module defines the package logger, the built-in configuration defaults
every :class:`~visitor_common.config_resolver.ResolvedConfiguration` starts
from, and the scalar types that are always mapped.
"""

import logging
from types import MappingProxyType
from typing import Any, Mapping

LOGGER_NAME: str = "visitor_common"
"""Default logger name for the visitor-common layer."""

LOGGER: logging.Logger = logging.getLogger(LOGGER_NAME)
"""Pre-configured logger instance for configuration and naming diagnostics."""

KEEP: str = "keep"
"""Naming convention sentinel: leave GraphQL names as they are."""

DEFAULT_NAMING_STRATEGY: str = "pascalCase"
"""Strategy used for any name category the user did not configure."""

ANY_SCALAR_TYPE: str = "any"
"""Universal fallback type for scalars with no mapping."""

DEFAULT_FRAGMENT_VARIABLE_SUFFIX: str = "FragmentDoc"
"""Appended to fragment names to build the name of their document variable."""

BUILTIN_SCALARS: Mapping[str, str] = MappingProxyType(
    {
        "ID": "string",
        "String": "string",
        "Boolean": "boolean",
        "Int": "number",
        "Float": "number",
    }
)
"""GraphQL built-in scalars and the target types they map to unless overridden."""

DEFAULT_CONFIG: Mapping[str, Any] = MappingProxyType(
    {
        "scalars": {},
        "strictScalars": False,
        "defaultScalarType": ANY_SCALAR_TYPE,
        "namingConvention": DEFAULT_NAMING_STRATEGY,
        "typesPrefix": "",
        "typesSuffix": "",
        "skipTypename": False,
        "nonOptionalTypename": False,
        "omitOperationSuffix": False,
        "dedupeOperationSuffix": False,
        "fragmentVariableSuffix": DEFAULT_FRAGMENT_VARIABLE_SUFFIX,
        "fragmentVariablePrefix": "",
        "externalFragments": [],
        "fragmentImports": [],
        "dedupeFragments": False,
        "allowEnumStringTypes": False,
        "inlineFragmentTypes": "inline",
        "immutableTypes": False,
        "useTypeImports": False,
        "globalNamespace": False,
    }
)
"""Built-in defaults, the lowest-priority layer of every resolution."""
