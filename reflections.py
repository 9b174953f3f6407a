"""Runtime reflection tree consumed by the URL planner.

The analyzer builds this tree; the planner and anchor resolver only read the
structural fields (``name``, ``kind``, ``flags``, ``parent``, ``children``)
and write the output fields (``url``, ``anchor``, ``has_own_document``).
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum


class ReflectionKind(str, Enum):
    GLOBAL = "global"
    EXTERNAL_MODULE = "external-module"
    MODULE = "module"
    ENUM = "enum"
    ENUM_MEMBER = "enum-member"
    VARIABLE = "variable"
    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    CONSTRUCTOR = "constructor"
    PROPERTY = "property"
    METHOD = "method"
    ACCESSOR = "accessor"
    OBJECT_LITERAL = "object-literal"
    TYPE_ALIAS = "type-alias"
    EVENT = "event"

    # Not declarations: never planned, never given a url.
    CALL_SIGNATURE = "call-signature"
    INDEX_SIGNATURE = "index-signature"
    CONSTRUCTOR_SIGNATURE = "constructor-signature"
    PARAMETER = "parameter"
    TYPE_LITERAL = "type-literal"
    TYPE_PARAMETER = "type-parameter"
    GET_SIGNATURE = "get-signature"
    SET_SIGNATURE = "set-signature"


NON_DECLARATION_KINDS = frozenset(
    {
        ReflectionKind.GLOBAL,
        ReflectionKind.CALL_SIGNATURE,
        ReflectionKind.INDEX_SIGNATURE,
        ReflectionKind.CONSTRUCTOR_SIGNATURE,
        ReflectionKind.PARAMETER,
        ReflectionKind.TYPE_LITERAL,
        ReflectionKind.TYPE_PARAMETER,
        ReflectionKind.GET_SIGNATURE,
        ReflectionKind.SET_SIGNATURE,
    }
)


class ReflectionFlag(str, Enum):
    PRIVATE = "private"
    PROTECTED = "protected"
    PUBLIC = "public"
    STATIC = "static"
    EXPORTED = "exported"
    EXTERNAL = "external"
    OPTIONAL = "optional"
    REST = "rest"
    ABSTRACT = "abstract"
    CONST = "const"
    LET = "let"


@dataclass(eq=False)
class Reflection:
    """One documented program element.

    ``parent`` is a non-owning back-reference; ``children`` is the owning,
    declaration-ordered collection. Use :meth:`add_child` to keep both in sync.
    """

    name: str
    kind: ReflectionKind
    flags: tuple[ReflectionFlag, ...] = ()
    parent: Reflection | None = field(default=None, repr=False)
    children: list[Reflection] = field(default_factory=list, repr=False)

    url: str | None = None
    anchor: str | None = None
    has_own_document: bool = False

    def add_child(self, child: Reflection) -> Reflection:
        child.parent = self
        self.children.append(child)
        return child

    @property
    def is_static(self) -> bool:
        return ReflectionFlag.STATIC in self.flags

    @property
    def is_declaration(self) -> bool:
        return self.kind not in NON_DECLARATION_KINDS

    @property
    def is_project(self) -> bool:
        return self.kind is ReflectionKind.GLOBAL

    def has_assigned_url(self) -> bool:
        """True when ``url`` already names a document or an anchor inside one.

        A missing url or a bare fragment (``#anchor`` with no document) does
        not count: such a node is planned again.
        """
        return bool(self.url) and not self.url.startswith("#")

    def traverse(self) -> Iterator[Reflection]:
        """Yield declaration children in declaration order."""
        for child in self.children:
            if child.is_declaration:
                yield child

    def walk(self) -> Iterator[Reflection]:
        """Depth-first, pre-order walk over the declaration subtree (self excluded)."""
        for child in self.traverse():
            yield child
            yield from child.walk()

    def full_name(self, separator: str = ".") -> str:
        """Dotted path of names from the outermost non-project ancestor."""
        parts: list[str] = []
        node: Reflection | None = self
        while node is not None and not node.is_project:
            parts.append(node.name)
            node = node.parent
        return separator.join(reversed(parts))

    def nearest_document(self) -> Reflection | None:
        """Closest ancestor that owns its own document, if any."""
        node = self.parent
        while node is not None:
            if node.has_own_document:
                return node
            node = node.parent
        return None


@dataclass(eq=False)
class ProjectReflection(Reflection):
    """Analyzer entry point; also the model of the synthetic index document."""

    kind: ReflectionKind = ReflectionKind.GLOBAL
    readme: str | None = None
    display_readme: bool = True
    hide_breadcrumbs: bool = False
    is_index: bool = False


@dataclass(frozen=True)
class UrlMapping:
    """One document the renderer must produce: output path, root model, template."""

    url: str
    model: Reflection
    template: str


@dataclass(frozen=True)
class TemplateMapping:
    """Grouping rule: which kinds get their own document, where, and how."""

    kinds: frozenset[ReflectionKind]
    is_leaf: bool
    directory: str
    template: str


DEFAULT_MAPPINGS: tuple[TemplateMapping, ...] = (
    TemplateMapping(frozenset({ReflectionKind.CLASS}), False, "classes", "reflection.hbs"),
    TemplateMapping(frozenset({ReflectionKind.INTERFACE}), False, "interfaces", "reflection.hbs"),
    TemplateMapping(frozenset({ReflectionKind.ENUM}), False, "enums", "reflection.hbs"),
    TemplateMapping(
        frozenset({ReflectionKind.MODULE, ReflectionKind.EXTERNAL_MODULE}),
        False,
        "modules",
        "reflection.hbs",
    ),
)


def get_mapping(
    reflection: Reflection, mappings: Sequence[TemplateMapping] = DEFAULT_MAPPINGS
) -> TemplateMapping | None:
    """Return the first grouping rule that covers the reflection's kind."""
    for mapping in mappings:
        if reflection.kind in mapping.kinds:
            return mapping
    return None


__all__ = [
    "ReflectionKind",
    "ReflectionFlag",
    "NON_DECLARATION_KINDS",
    "Reflection",
    "ProjectReflection",
    "UrlMapping",
    "TemplateMapping",
    "DEFAULT_MAPPINGS",
    "get_mapping",
]
