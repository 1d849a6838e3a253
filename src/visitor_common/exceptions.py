"""Exception hierarchy for visitor-common.

All errors raised by this layer inherit from :class:`VisitorCommonError`, so a
generation run can abort on any of them with a single ``except`` clause.
"""


class VisitorCommonError(Exception):
    """Base exception for all visitor-common errors."""

    pass


class ConfigError(VisitorCommonError):
    """Raised for malformed or unresolvable configuration.

    Covers unknown naming-convention strategies, values of the wrong type,
    malformed scalar entries and conflicting scalar settings.
    """

    def __init__(self, msg: str):
        super().__init__(msg)


class UnknownScalarError(ConfigError):
    """Raised when strict scalars are enabled and a scalar has no mapping.

    Attributes:
        scalar_name: The GraphQL scalar that could not be mapped.
    """

    def __init__(self, scalar_name: str):
        super().__init__(
            f"Unknown scalar type '{scalar_name}'. Please override it using the 'scalars' configuration field!"
        )
        self.scalar_name = scalar_name
