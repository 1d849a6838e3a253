from types import MappingProxyType
from typing import Iterable, Mapping

from graphql import GraphQLScalarType, GraphQLSchema

from .config_resolver import ResolvedConfiguration
from .constants import ANY_SCALAR_TYPE, LOGGER
from .exceptions import ConfigError, UnknownScalarError
from .model import ParsedScalar


class ScalarRegistry:
    """Normalized scalar → target type lookup for one resolved configuration.

    Lookup order is: explicit entry, then (only when strict mode is off) the
    configured default scalar type, then :data:`ANY_SCALAR_TYPE`. Strict mode
    never consults the default type.
    """

    def __init__(self, scalars: Mapping[str, ParsedScalar], *, strict: bool = False, default_type: str = ANY_SCALAR_TYPE):
        self._scalars = MappingProxyType(dict(scalars))
        self._strict = strict
        self._default_type = default_type or ANY_SCALAR_TYPE
        self._table = MappingProxyType({k: v.output for k, v in self._scalars.items()})

    @classmethod
    def from_config(cls, config: ResolvedConfiguration) -> "ScalarRegistry":
        return cls(config.scalars, strict=config.strict_scalars, default_type=config.default_scalar_type)

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def table(self) -> Mapping[str, str]:
        """Output type per explicitly mapped scalar."""
        return self._table

    def has(self, scalar_name: str) -> bool:
        return scalar_name in self._scalars

    def type_for(self, scalar_name: str, direction: str = "output") -> str:
        """Return the target type for ``scalar_name``.

        Args:
            scalar_name: GraphQL scalar name, e.g. ``"DateTime"``.
            direction: ``"output"`` (result types) or ``"input"`` (variables
                and input objects).

        Raises:
            UnknownScalarError: In strict mode when no entry exists.
            ConfigError: For an unknown ``direction``.
        """
        if direction not in ("input", "output"):
            raise ConfigError(f"Invalid scalar direction '{direction}', expected 'input' or 'output'")
        entry = self._scalars.get(scalar_name)
        if entry is not None:
            return entry.input if direction == "input" else entry.output
        if self._strict:
            raise UnknownScalarError(scalar_name)
        return self._default_type

    def validate(self, scalar_names: Iterable[str]) -> None:
        """Fail on the first referenced scalar that strict mode cannot map."""
        if not self._strict:
            return
        for name in scalar_names:
            if name not in self._scalars:
                raise UnknownScalarError(name)

    def for_schema(self, schema: GraphQLSchema) -> Mapping[str, str]:
        """Normalized output table covering every scalar ``schema`` defines.

        Unmapped custom scalars get the default type, or raise
        :class:`UnknownScalarError` in strict mode.
        """
        out = dict(self._table)
        for name, t in sorted(schema.type_map.items()):
            if not isinstance(t, GraphQLScalarType) or name in out:
                continue
            out[name] = self.type_for(name)
            LOGGER.debug("Scalar '%s' has no mapping, using '%s'", name, out[name])
        return MappingProxyType(out)
