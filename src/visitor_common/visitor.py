"""The naming contract shared by every emission plugin.

Plugins subclass or wrap :class:`NamingVisitor` and derive every identifier
through it, so all files of one generation run name things the same way.
"""

from typing import Any, Iterable, List, Mapping, Optional

from graphql import OperationDefinitionNode

from .config_resolver import ConfigResolver, ResolvedConfiguration
from .exceptions import ConfigError
from .model import DeclarationKind, Name, NameCategory, NameKind
from .naming import NameConverter, NameSource, category_of, node_name
from .scalars import ScalarRegistry

_FRAGMENT = "fragment"


class NamingVisitor:
    """Derives names and scalar types from one :class:`ResolvedConfiguration`.

    Any number of visitors may share the same configuration and registry;
    nothing is mutated after construction.

    Args:
        config: The resolved configuration of the run.
        scalars: A registry to share between plugins; built from ``config``
            when omitted.
    """

    def __init__(self, config: ResolvedConfiguration, scalars: Optional[ScalarRegistry] = None):
        self._config = config
        self._converter = NameConverter(config.naming_convention)
        self._scalars = scalars if scalars is not None else ScalarRegistry.from_config(config)

    @classmethod
    def from_raw(
        cls, raw: Optional[Mapping[str, Any]], overrides: Optional[Mapping[str, Any]] = None
    ) -> "NamingVisitor":
        return cls(ConfigResolver().resolve(raw, overrides))

    @property
    def config(self) -> ResolvedConfiguration:
        return self._config

    @property
    def converter(self) -> NameConverter:
        return self._converter

    @property
    def scalar_registry(self) -> ScalarRegistry:
        return self._scalars

    @property
    def scalars(self) -> Mapping[str, str]:
        return self._scalars.table

    def scalar_type_for(self, scalar_name: str, direction: str = "output") -> str:
        return self._scalars.type_for(scalar_name, direction)

    def visitor_kind_context_from_ancestors(self, ancestors: Optional[Iterable[Any]]) -> List[str]:
        if not ancestors:
            return []
        return [k for k in (getattr(a, "kind", None) for a in ancestors) if k]

    def convert_name(
        self,
        node: NameSource,
        *,
        use_types_prefix: bool = True,
        use_types_suffix: bool = True,
        prefix: str = "",
        suffix: str = "",
        transform_underscore: Optional[bool] = None,
        category: Optional[NameCategory] = None,
    ) -> str:
        """Final identifier for ``node``.

        ``prefix`` and ``suffix`` are joined to the raw name before case
        conversion; the configured types prefix and suffix wrap the converted
        result unless opted out.
        """
        if category is None:
            category = category_of(node)
        raw = f"{prefix}{node_name(node)}{suffix}"
        converted = self._converter.convert(category, raw, transform_underscore)
        head = self._config.types_prefix if use_types_prefix else ""
        tail = self._config.types_suffix if use_types_suffix else ""
        return f"{head}{converted}{tail}"

    def operation_suffix_for(self, node: NameSource, operation_type: str) -> str:
        if self._config.omit_operation_suffix:
            return ""
        if self._config.dedupe_operation_suffix and node_name(node).lower().endswith(operation_type.lower()):
            return ""
        return operation_type

    def fragment_suffix_for(self, node: NameSource) -> str:
        return self.operation_suffix_for(node, "Fragment")

    def fragment_name_for(self, node: NameSource) -> str:
        return self.convert_name(node, suffix=self.fragment_suffix_for(node), use_types_prefix=False)

    def fragment_variable_name_for(self, node: NameSource) -> str:
        """Name of the document variable that holds a fragment.

        With ``dedupeOperationSuffix`` a fragment named ``UserFragment`` gets
        ``UserFragmentDoc`` rather than ``UserFragmentFragmentDoc``.
        """
        cfg = self._config
        var_suffix = cfg.fragment_variable_suffix
        if cfg.omit_operation_suffix:
            suffix = ""
        elif (
            cfg.dedupe_operation_suffix
            and node_name(node).lower().endswith(_FRAGMENT)
            and var_suffix.lower().startswith(_FRAGMENT)
        ):
            suffix = var_suffix[len(_FRAGMENT):]
        else:
            suffix = var_suffix
        return self.convert_name(
            node,
            prefix=cfg.fragment_variable_prefix,
            suffix=suffix,
            use_types_prefix=False,
        )

    def operation_name_for(self, node: OperationDefinitionNode) -> str:
        operation_type = node.operation.value.capitalize()
        return self.convert_name(node, suffix=self.operation_suffix_for(node, operation_type))

    def name_for(self, node: NameSource, kind: NameKind) -> Name:
        """Produce a :class:`Name` of the given kind.

        Raises:
            ConfigError: For :attr:`NameKind.OPERATION` on anything other than
                an ``OperationDefinitionNode``.
        """
        if kind is NameKind.TYPE:
            value = self.convert_name(node, category=NameCategory.TYPE_NAMES)
        elif kind is NameKind.ENUM_VALUE:
            value = self.convert_name(
                node, category=NameCategory.ENUM_VALUES, use_types_prefix=False, use_types_suffix=False
            )
        elif kind is NameKind.FRAGMENT:
            value = self.fragment_name_for(node)
        elif kind is NameKind.FRAGMENT_VARIABLE:
            value = self.fragment_variable_name_for(node)
        elif kind is NameKind.OPERATION:
            if not isinstance(node, OperationDefinitionNode):
                raise ConfigError("Operation names can only be derived from operation definitions")
            value = self.operation_name_for(node)
        else:
            raise ConfigError(f"Unknown name kind: {kind!r}")
        return Name(value=value, kind=kind)

    def punctuation(self, declaration_kind: DeclarationKind) -> str:
        return ""
