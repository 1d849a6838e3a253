"""Value types shared by the resolver, the converter and the visitor."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Optional, Tuple


class NameCategory(str, Enum):
    """Name categories that can carry their own naming strategy."""

    TYPE_NAMES = "typeNames"
    ENUM_VALUES = "enumValues"


class NameKind(str, Enum):
    """What a produced :class:`Name` is used for."""

    TYPE = "type"
    ENUM_VALUE = "enumValue"
    FRAGMENT = "fragment"
    FRAGMENT_VARIABLE = "fragmentVariable"
    OPERATION = "operation"


class InlineFragmentTypes(str, Enum):
    """How fragment types are referenced from operation types.

    ``INLINE`` deep-inlines fragment types, ``COMBINE`` references them by
    name, ``MASK`` hides fragment fields behind a fragment reference.
    """

    INLINE = "inline"
    COMBINE = "combine"
    MASK = "mask"


class DeclarationKind(str, Enum):
    """Declaration blocks whose closing punctuation a plugin may customise."""

    TYPE = "type"
    INPUT = "input"
    INTERFACE = "interface"
    ARGUMENTS = "arguments"


@dataclass(frozen=True)
class Name:
    """A derived identifier plus the kind it was produced for."""

    value: str
    kind: NameKind

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ParsedScalar:
    """Target types of one scalar, for input and output positions."""

    input: str
    output: str


@dataclass(frozen=True)
class LoadedFragment:
    """A fragment defined outside the document being generated.

    Attributes:
        name: Fragment name as written in the document.
        on_type: Type condition of the fragment.
        node: The ``FragmentDefinitionNode`` when one was loaded, else ``None``.
        is_external: Whether the fragment lives in another output file.
        import_from: Module path to import it from, for external fragments.
    """

    name: str
    on_type: str
    node: Any = None
    is_external: bool = False
    import_from: Optional[str] = None


@dataclass(frozen=True)
class ImportIdentifier:
    """One identifier pulled in by a :class:`FragmentImport`.

    ``kind`` is ``"type"`` for the fragment's generated type and
    ``"document"`` for its document variable.
    """

    name: str
    kind: Literal["type", "document"]


@dataclass(frozen=True)
class FragmentImport:
    """Where generated fragment identifiers must be imported from."""

    base_dir: str
    base_output_dir: str
    output_path: str
    identifiers: Tuple[ImportIdentifier, ...] = ()
    type_import: bool = False
    import_path: str = ""
    namespace: Optional[str] = None
