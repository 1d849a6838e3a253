"""Resolution of raw plugin configuration into an immutable configuration.

A raw configuration is the already-parsed ``config`` mapping of a generation
target (camelCase keys, every key optional). :class:`ConfigResolver` layers
it between per-call overrides and :data:`~visitor_common.constants.DEFAULT_CONFIG`
and validates every value, producing one frozen :class:`ResolvedConfiguration`
that all plugins of a run share.
"""

import hashlib
import json
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .casing import StrategyId, resolve_strategy, strategy_label
from .constants import BUILTIN_SCALARS, DEFAULT_CONFIG, DEFAULT_NAMING_STRATEGY, KEEP, LOGGER
from .exceptions import ConfigError
from .model import (
    FragmentImport,
    ImportIdentifier,
    InlineFragmentTypes,
    LoadedFragment,
    NameCategory,
    ParsedScalar,
)

_CONVENTION_KEYS = {c.value for c in NameCategory} | {"transformUnderscore"}


def _coerce_bool(node: Any, path: str) -> bool:
    if isinstance(node, bool):
        return node
    if isinstance(node, str):
        s = node.strip().lower()
        if s in ("1", "true", "yes", "on", "y", "t"):
            return True
        if s in ("0", "false", "no", "off", "n", "f"):
            return False
    raise ConfigError(f"Expected bool at {path}")


def _coerce_str(node: Any, path: str) -> str:
    if isinstance(node, str):
        return node
    raise ConfigError(f"Expected string at {path}")


def _coerce_list(node: Any, path: str) -> list:
    if isinstance(node, (list, tuple)):
        return list(node)
    raise ConfigError(f"Expected list at {path}")


def _first(m: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        if m.get(k) is not None:
            return m[k]
    return default


@dataclass(frozen=True)
class NamingConvention:
    """Case strategy per name category plus the underscore policy.

    ``"keep"`` is a valid strategy for any category and means identity.
    """

    type_names: StrategyId = DEFAULT_NAMING_STRATEGY
    enum_values: StrategyId = DEFAULT_NAMING_STRATEGY
    transform_underscore: bool = False

    def strategy_for(self, category: NameCategory) -> StrategyId:
        if category is NameCategory.ENUM_VALUES:
            return self.enum_values
        return self.type_names

    @classmethod
    def from_raw(cls, value: Any) -> "NamingConvention":
        """Build a convention from the ``namingConvention`` config value.

        Raises:
            ConfigError: If the value has the wrong shape or names a strategy
                that cannot be resolved.
        """
        if isinstance(value, NamingConvention):
            conv = value
        elif isinstance(value, str) or callable(value):
            conv = cls(type_names=value, enum_values=value)
        elif isinstance(value, Mapping):
            extra = sorted(k for k in value if k not in _CONVENTION_KEYS)
            if extra:
                raise ConfigError(f"Unknown keys {extra} at namingConvention")
            conv = cls(
                type_names=_first(value, NameCategory.TYPE_NAMES.value, default=DEFAULT_NAMING_STRATEGY),
                enum_values=_first(value, NameCategory.ENUM_VALUES.value, default=DEFAULT_NAMING_STRATEGY),
                transform_underscore=_coerce_bool(
                    value.get("transformUnderscore", False), "namingConvention.transformUnderscore"
                ),
            )
        else:
            raise ConfigError(f"Invalid naming convention: {value!r}")
        for category in NameCategory:
            resolve_strategy(conv.strategy_for(category))
        return conv


@dataclass(frozen=True)
class ResolvedConfiguration:
    """Fully defaulted, read-only configuration of one generation run.

    Never mutate an instance; build a new one with :func:`resolve_config`.
    """

    scalars: Mapping[str, ParsedScalar]
    strict_scalars: bool
    default_scalar_type: str
    naming_convention: NamingConvention
    types_prefix: str
    types_suffix: str
    add_typename: bool
    non_optional_typename: bool
    omit_operation_suffix: bool
    dedupe_operation_suffix: bool
    fragment_variable_suffix: str
    fragment_variable_prefix: str
    external_fragments: Tuple[LoadedFragment, ...]
    fragment_imports: Tuple[FragmentImport, ...]
    dedupe_fragments: bool
    allow_enum_string_types: bool
    inline_fragment_types: InlineFragmentTypes
    immutable_types: bool
    use_type_imports: bool
    global_namespace: bool
    extras: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def fingerprint(self) -> str:
        """SHA-256 over the canonical rendering; equal configs share it."""
        return hashlib.sha256(canonicalize(_plain(self))).hexdigest()

    def __hash__(self) -> int:
        return hash(self.fingerprint())


def _freeze(obj: Any) -> Any:
    if isinstance(obj, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in obj.items()})
    if isinstance(obj, (list, tuple)):
        return tuple(_freeze(x) for x in obj)
    if isinstance(obj, (set, frozenset)):
        return frozenset(_freeze(x) for x in obj)
    return obj


def _plain(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _plain(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Mapping):
        return {str(k): _plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_plain(x) for x in obj]
    if isinstance(obj, (set, frozenset)):
        return sorted((_plain(x) for x in obj), key=repr)
    if callable(obj):
        return strategy_label(obj)
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    return repr(obj)


def canonicalize(node: Any) -> bytes:
    return json.dumps(node, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def parse_scalars(raw: Any) -> Mapping[str, ParsedScalar]:
    """Merge user scalar mappings over the built-in scalars.

    Entries are either a type string or a mapping with ``input`` and/or
    ``output``; a missing side falls back to the other one.
    """
    if not isinstance(raw, Mapping):
        raise ConfigError("Expected mapping at scalars")
    out: Dict[str, ParsedScalar] = {k: ParsedScalar(input=v, output=v) for k, v in BUILTIN_SCALARS.items()}
    for name, entry in raw.items():
        path = f"scalars.{name}"
        if isinstance(entry, ParsedScalar):
            out[name] = entry
        elif isinstance(entry, str):
            out[name] = ParsedScalar(input=entry, output=entry)
        elif isinstance(entry, Mapping):
            inp = entry.get("input")
            outp = entry.get("output")
            if inp is None and outp is None:
                raise ConfigError(f"Scalar mapping at {path} needs 'input' or 'output'")
            inp = _coerce_str(inp if inp is not None else outp, path + ".input")
            outp = _coerce_str(outp if outp is not None else inp, path + ".output")
            out[name] = ParsedScalar(input=inp, output=outp)
        else:
            raise ConfigError(f"Expected string or mapping at {path}")
    return MappingProxyType(out)


def _parse_external_fragment(item: Any, path: str) -> LoadedFragment:
    if isinstance(item, LoadedFragment):
        return item
    if not isinstance(item, Mapping) or not item.get("name"):
        raise ConfigError(f"Expected fragment with a name at {path}")
    return LoadedFragment(
        name=_coerce_str(item["name"], path + ".name"),
        on_type=_coerce_str(_first(item, "onType", "on_type", default=""), path + ".onType"),
        node=item.get("node"),
        is_external=_coerce_bool(_first(item, "isExternal", "is_external", default=False), path + ".isExternal"),
        import_from=_first(item, "importFrom", "import_from"),
    )


def _parse_fragment_import(item: Any, path: str) -> FragmentImport:
    if isinstance(item, FragmentImport):
        return item
    if not isinstance(item, Mapping):
        raise ConfigError(f"Expected object at {path}")
    source = item.get("importSource") or {}
    if not isinstance(source, Mapping):
        raise ConfigError(f"Expected object at {path}.importSource")
    namespace = _first(item, "namespace", default=source.get("namespace"))
    if namespace is not None:
        namespace = _coerce_str(namespace, path + ".importSource.namespace")
    idents = []
    for i, ident in enumerate(_coerce_list(_first(item, "identifiers", default=source.get("identifiers", [])), path)):
        ipath = f"{path}.identifiers.{i}"
        if isinstance(ident, ImportIdentifier):
            idents.append(ident)
            continue
        if not isinstance(ident, Mapping) or ident.get("kind") not in ("type", "document"):
            raise ConfigError(f"Expected identifier with kind 'type' or 'document' at {ipath}")
        idents.append(ImportIdentifier(name=_coerce_str(ident.get("name"), ipath + ".name"), kind=ident["kind"]))
    return FragmentImport(
        base_dir=_coerce_str(item.get("baseDir", ""), path + ".baseDir"),
        base_output_dir=_coerce_str(item.get("baseOutputDir", ""), path + ".baseOutputDir"),
        output_path=_coerce_str(item.get("outputPath", ""), path + ".outputPath"),
        import_path=_coerce_str(_first(item, "importPath", default=source.get("path", "")), path + ".importSource.path"),
        namespace=namespace,
        identifiers=tuple(idents),
        type_import=_coerce_bool(_first(item, "typeImport", "typesImport", default=False), path + ".typeImport"),
    )


def _parse_default_scalar_type(value: Any) -> str:
    value = _coerce_str(value, "defaultScalarType")
    if not value.strip():
        raise ConfigError("defaultScalarType must not be empty")
    return value


def _parse_inline_mode(value: Any) -> InlineFragmentTypes:
    if isinstance(value, InlineFragmentTypes):
        return value
    try:
        return InlineFragmentTypes(value)
    except ValueError:
        allowed = ", ".join(m.value for m in InlineFragmentTypes)
        raise ConfigError(f"Invalid inlineFragmentTypes '{value}', expected one of: {allowed}") from None


class ConfigResolver:
    """Merges overrides, raw configuration and defaults, highest first.

    Args:
        defaults: Lowest-priority layer; :data:`DEFAULT_CONFIG` unless a
            plugin family ships its own table.
    """

    def __init__(self, defaults: Mapping[str, Any] = DEFAULT_CONFIG):
        self._defaults = defaults

    def merged(self, raw: Optional[Mapping[str, Any]], overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        layers = (overrides or {}, raw or {}, self._defaults)
        out: Dict[str, Any] = {}
        for layer in layers:
            if not isinstance(layer, Mapping):
                raise ConfigError(f"Expected mapping for configuration, got {type(layer).__name__}")
            for k, v in layer.items():
                if v is not None and k not in out:
                    out[k] = v
        return out

    def resolve(
        self, raw: Optional[Mapping[str, Any]], overrides: Optional[Mapping[str, Any]] = None
    ) -> ResolvedConfiguration:
        """Produce the resolved configuration.

        Raises:
            ConfigError: On any malformed value, unknown naming strategy, or
                when ``strictScalars`` is combined with an explicit
                ``defaultScalarType``.
        """
        m = self.merged(raw, overrides)
        strict = _coerce_bool(m["strictScalars"], "strictScalars")
        explicit_default = any(
            (layer or {}).get("defaultScalarType") is not None for layer in (raw, overrides)
        )
        if strict and explicit_default:
            raise ConfigError(
                "strictScalars and defaultScalarType cannot be combined: strict mode never falls back to a default type"
            )

        convention = NamingConvention.from_raw(m["namingConvention"])
        LOGGER.debug(
            "Naming convention: typeNames=%s enumValues=%s transformUnderscore=%s",
            strategy_label(convention.type_names),
            strategy_label(convention.enum_values),
            convention.transform_underscore,
        )

        extras = {k: v for k, v in m.items() if k not in self._defaults}
        if extras:
            LOGGER.debug("Plugin-specific configuration keys: %s", sorted(extras))

        return ResolvedConfiguration(
            scalars=parse_scalars(m["scalars"]),
            strict_scalars=strict,
            default_scalar_type=_parse_default_scalar_type(m["defaultScalarType"]),
            naming_convention=convention,
            types_prefix=_coerce_str(m["typesPrefix"], "typesPrefix"),
            types_suffix=_coerce_str(m["typesSuffix"], "typesSuffix"),
            add_typename=not _coerce_bool(m["skipTypename"], "skipTypename"),
            non_optional_typename=_coerce_bool(m["nonOptionalTypename"], "nonOptionalTypename"),
            omit_operation_suffix=_coerce_bool(m["omitOperationSuffix"], "omitOperationSuffix"),
            dedupe_operation_suffix=_coerce_bool(m["dedupeOperationSuffix"], "dedupeOperationSuffix"),
            fragment_variable_suffix=_coerce_str(m["fragmentVariableSuffix"], "fragmentVariableSuffix"),
            fragment_variable_prefix=_coerce_str(m["fragmentVariablePrefix"], "fragmentVariablePrefix"),
            external_fragments=tuple(
                _parse_external_fragment(f, f"externalFragments.{i}")
                for i, f in enumerate(_coerce_list(m["externalFragments"], "externalFragments"))
            ),
            fragment_imports=tuple(
                _parse_fragment_import(f, f"fragmentImports.{i}")
                for i, f in enumerate(_coerce_list(m["fragmentImports"], "fragmentImports"))
            ),
            dedupe_fragments=_coerce_bool(m["dedupeFragments"], "dedupeFragments"),
            allow_enum_string_types=_coerce_bool(m["allowEnumStringTypes"], "allowEnumStringTypes"),
            inline_fragment_types=_parse_inline_mode(m["inlineFragmentTypes"]),
            immutable_types=_coerce_bool(m["immutableTypes"], "immutableTypes"),
            use_type_imports=_coerce_bool(m["useTypeImports"], "useTypeImports"),
            global_namespace=_coerce_bool(m["globalNamespace"], "globalNamespace"),
            extras=_freeze(extras),
        )


def resolve_config(
    raw: Optional[Mapping[str, Any]] = None, overrides: Optional[Mapping[str, Any]] = None
) -> ResolvedConfiguration:
    """Resolve ``raw`` against :data:`DEFAULT_CONFIG` with optional overrides.

    Example:
        >>> cfg = resolve_config({"typesPrefix": "I"}, overrides={"dedupeOperationSuffix": True})
        >>> cfg.types_prefix, cfg.dedupe_operation_suffix, cfg.fragment_variable_suffix
        ('I', True, 'FragmentDoc')
    """
    return ConfigResolver().resolve(raw, overrides)
