"""Document and DocumentNode: addressable, lazily-wrapped views over JSON values.

A ``Document`` holds one complete root value and is shared by every node
derived from it.  A ``DocumentNode`` is one location in one document: the
document plus a ``Pointer``.  Nodes are never mutated; changing a value
(``with_value_at_pointer``) produces a new document and a new node, leaving
the original document and all of its nodes untouched.

Ownership:
- every node holds its ``Document`` strongly;
- a node holds the children it produced strongly (memoized per token);
- a child holds its parent only through a ``weakref``.  When the parent has
  been collected, ``parent()`` rebuilds an equal node from the document and
  the parent pointer, so the answer never depends on allocation lifetime.

Equality is content-based: two nodes are equal when their pointers are equal
and their documents have the same canonical fingerprint.
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Callable
from typing import Any
from urllib.parse import urldefrag, urljoin

from json_schema_view.document.pointer import Pointer, Token
from json_schema_view.errors import (
    NotIndexableError,
    PointerResolutionError,
    SchemaConfigurationError,
    TypeMismatchError,
)
from json_schema_view.normalizer import deep_stringify_keys
from json_schema_view.typelike import (
    as_plain,
    canonical_fingerprint,
    is_array_like,
    is_object_like,
)

__all__ = ["Document", "DocumentNode"]

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class Document:
    """An immutable JSON-like root value with a lazily computed fingerprint.

    The wrapped value must not be mutated after the document is created;
    all modification goes through ``DocumentNode.with_value_at_pointer``.
    """

    __slots__ = ("_fingerprint", "_value")

    def __init__(self, value: Any) -> None:
        self._value = value
        self._fingerprint: str | None = None

    @property
    def value(self) -> Any:
        """The root value."""
        return self._value

    @property
    def fingerprint(self) -> str:
        """Canonical serialization of the root value, computed once."""
        if self._fingerprint is None:
            self._fingerprint = canonical_fingerprint(self._value)
        return self._fingerprint

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Document):
            return NotImplemented
        return self.fingerprint == other.fingerprint

    def __hash__(self) -> int:
        return hash(self.fingerprint)

    def __repr__(self) -> str:
        return f"Document({self._value!r})"


class DocumentNode:
    """One location (a pointer) within one shared ``Document``.

    Example::

        root = DocumentNode.new_document({"a": [1, {"b": 2}]})
        b = root.child("a").child(1).child("b")
        b.value                 # 2
        b.pointer.fragment      # "#/a/1/b"
        b.parent().child("b") == b   # True

        changed = b.with_value_at_pointer(lambda v: v + 1)
        changed.value           # 3
        b.value                 # 2 (original document untouched)
    """

    __slots__ = (
        "__weakref__",
        "_children",
        "_document",
        "_parent_ref",
        "_pointer",
        "_value",
    )

    def __init__(
        self,
        document: Document,
        pointer: Pointer | None = None,
        parent: DocumentNode | None = None,
    ) -> None:
        if not isinstance(document, Document):
            msg = f"expected a Document, got {type(document).__name__}: {document!r}"
            raise TypeMismatchError(msg)
        self._document = document
        self._pointer = pointer if pointer is not None else Pointer.root()
        self._parent_ref: weakref.ref[DocumentNode] | None = (
            weakref.ref(parent) if parent is not None else None
        )
        self._children: dict[Token, DocumentNode] = {}
        self._value: Any = _UNSET

    @classmethod
    def new_document(cls, value: Any, normalize_keys: bool = True) -> DocumentNode:
        """Create a new document from a plain value and return its root node.

        Args:
            value: The root value.  Wrapper objects are projected to plain values.
            normalize_keys: When True, non-string mapping keys are converted to
                strings (see ``json_schema_view.normalizer``).
        """
        plain = as_plain(value)
        if normalize_keys:
            plain = deep_stringify_keys(plain)
        return cls(Document(plain))

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def document(self) -> Document:
        """The shared document this node belongs to."""
        return self._document

    @property
    def pointer(self) -> Pointer:
        """The location of this node within its document."""
        return self._pointer

    @property
    def value(self) -> Any:
        """The raw value at this node's pointer (evaluated once)."""
        if self._value is _UNSET:
            self._value = self._pointer.evaluate(self._document.value)
        return self._value

    @property
    def fingerprint(self) -> tuple[Pointer, str]:
        """Content identity of this node: pointer plus document fingerprint."""
        return (self._pointer, self._document.fingerprint)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, DocumentNode):
            return NotImplemented
        return self._pointer == other._pointer and self._document == other._document

    def __hash__(self) -> int:
        return hash(self.fingerprint)

    def __repr__(self) -> str:
        return f"<DocumentNode fragment={self._pointer.fragment!r} {self.value!r}>"

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    @property
    def is_object_like(self) -> bool:
        """True when the value here is a JSON object."""
        return is_object_like(self.value)

    @property
    def is_array_like(self) -> bool:
        """True when the value here is a JSON array."""
        return is_array_like(self.value)

    def as_plain(self) -> Any:
        """Return the value here as a plain JSON-like value."""
        return as_plain(self.value)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def child(self, token: Token) -> DocumentNode:
        """Return the node at ``pointer + [token]``.

        ``str`` tokens address object properties, ``int`` tokens address array
        elements.  The child is created on first access and reused afterwards.

        Raises:
            TypeMismatchError: If ``token`` is neither a str nor a non-negative int.
            NotIndexableError: If the value here does not have the shape the
                token requires.
            KeyError: If the object has no such property.
            IndexError: If the array index is out of range.
        """
        child_pointer = self._pointer.child(token)
        existing = self._children.get(token)
        if existing is not None:
            return existing
        value = self.value
        if isinstance(token, str):
            if not is_object_like(value):
                msg = (
                    f"cannot subscript (using token: {token!r}) at "
                    f"{self._pointer.fragment} from non-object value: {value!r}"
                )
                raise NotIndexableError(msg)
            if token not in value:
                msg = f"{child_pointer.fragment}: no property {token!r} in object"
                raise KeyError(msg)
        else:
            if not is_array_like(value):
                msg = (
                    f"cannot subscript (using token: {token!r}) at "
                    f"{self._pointer.fragment} from non-array value: {value!r}"
                )
                raise NotIndexableError(msg)
            if token >= len(value):
                msg = (
                    f"{child_pointer.fragment}: index {token} out of range for "
                    f"array of length {len(value)}"
                )
                raise IndexError(msg)
        node = DocumentNode(self._document, child_pointer, parent=self)
        self._children[token] = node
        return node

    def descend(self, pointer: Pointer) -> DocumentNode:
        """Follow every token of ``pointer`` from this node.

        String tokens made of digits address array elements when the current
        value is an array, as in RFC 6901.
        """
        node = self
        for token in pointer.tokens:
            if isinstance(token, str) and node.is_array_like:
                if not (token.isascii() and token.isdigit()):
                    msg = (
                        f"cannot subscript (using token: {token!r}) at "
                        f"{node.pointer.fragment} from array value"
                    )
                    raise NotIndexableError(msg)
                token = int(token)
            node = node.child(token)
        return node

    def parent(self) -> DocumentNode | None:
        """Return the parent node, or None at the document root."""
        if self._pointer.is_root:
            return None
        if self._parent_ref is not None:
            parent = self._parent_ref()
            if parent is not None:
                return parent
        return DocumentNode(self._document, self._pointer.parent())

    def root_node(self) -> DocumentNode:
        """Return the node at the root of this node's document."""
        if self._pointer.is_root:
            return self
        return DocumentNode(self._document)

    # ------------------------------------------------------------------
    # References
    # ------------------------------------------------------------------

    def deref(self) -> DocumentNode:
        """Follow same-document ``$ref`` chains starting at this node.

        A reference is followed when it is a fragment (``"#/definitions/a"``)
        or when it resolves, against the document root's ``$id``/``id``, to
        that same root.  Other references (remote documents, anchors) are left
        alone and this node is returned.

        Raises:
            PointerResolutionError: If a followed reference points nowhere.
            SchemaConfigurationError: If references form a cycle.
        """
        node = self
        seen: set[Pointer] = {node.pointer}
        while True:
            value = node.value
            ref = value.get("$ref") if is_object_like(value) else None
            if not isinstance(ref, str):
                return node
            target = node._local_reference(ref)
            if target is None:
                logger.debug("leaving non-local $ref %r at %s", ref, node.pointer)
                return node
            if target in seen:
                msg = f"$ref cycle detected at {node.pointer.fragment}: {ref!r}"
                raise SchemaConfigurationError(msg)
            seen.add(target)
            # validate first so a dangling reference reports the pointer
            target.evaluate(self._document.value)
            node = node.root_node().descend(target)

    def _local_reference(self, ref: str) -> Pointer | None:
        root_value = self._document.value
        root_id = None
        if is_object_like(root_value):
            root_id = root_value.get("$id", root_value.get("id"))
        if not isinstance(root_id, str):
            root_id = ""
        resolved = urljoin(root_id, ref) if root_id else ref
        base, fragment = urldefrag(resolved)
        if base != urldefrag(root_id).url:
            return None
        if fragment and not fragment.startswith("/"):
            return None
        try:
            return Pointer.from_fragment("#" + fragment)
        except PointerResolutionError:
            return None

    # ------------------------------------------------------------------
    # Copy-on-write modification
    # ------------------------------------------------------------------

    def with_value_at_pointer(self, modifier: Callable[[Any], Any]) -> DocumentNode:
        """Return a node at this pointer in a document where the value here is ``modifier(value)``.

        The original document, and every node derived from it, is unchanged.
        When ``modifier`` returns the identical object, this node is returned.
        """
        new_root = self._pointer.modified_document_copy(self._document.value, modifier)
        if new_root is self._document.value:
            return self
        return DocumentNode(Document(new_root), self._pointer)
