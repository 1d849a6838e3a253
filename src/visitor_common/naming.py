from typing import Dict, Optional, Union

from graphql import EnumValueDefinitionNode, Node

from .casing import CaseFn, resolve_strategy
from .config_resolver import NamingConvention
from .constants import KEEP
from .model import NameCategory

NameSource = Union[str, Node]


def node_name(node: NameSource) -> str:
    """Raw GraphQL name of ``node``; ``""`` for anonymous nodes."""
    if isinstance(node, str):
        return node
    name = getattr(node, "name", None)
    if name is None:
        return ""
    return getattr(name, "value", None) or ""


def category_of(node: NameSource) -> NameCategory:
    if isinstance(node, EnumValueDefinitionNode):
        return NameCategory.ENUM_VALUES
    return NameCategory.TYPE_NAMES


class NameConverter:
    """Applies the configured case strategy per name category.

    Conversion is case strategy plus underscore policy only; type prefixes and
    suffixes are layered by :class:`~visitor_common.visitor.NamingVisitor`.

    When underscores are preserved the input is split on ``_`` and every part
    is converted on its own, so ``user_id`` becomes ``User_Id`` under
    pascal-case and a leading ``_`` survives.

    Args:
        convention: A :class:`~visitor_common.config_resolver.NamingConvention`.
    """

    def __init__(self, convention: NamingConvention):
        self._convention = convention
        self._fns: Dict[NameCategory, Optional[CaseFn]] = {}
        for category in NameCategory:
            strategy = convention.strategy_for(category)
            self._fns[category] = None if strategy == KEEP else resolve_strategy(strategy)

    @property
    def convention(self) -> NamingConvention:
        return self._convention

    def convert(
        self,
        category: NameCategory,
        node: NameSource,
        transform_underscore: Optional[bool] = None,
    ) -> str:
        value = node_name(node)
        fn = self._fns[category]
        if fn is None:
            return value
        if transform_underscore is None:
            transform_underscore = self._convention.transform_underscore
        if transform_underscore:
            return str(fn(value))
        return "_".join(str(fn(part)) for part in value.split("_"))

    def __call__(self, node: NameSource, transform_underscore: Optional[bool] = None) -> str:
        return self.convert(category_of(node), node, transform_underscore)
