"""Pointer: an immutable path of reference tokens from a document root.

Tokens are object keys (``str``) or array indices (non-negative ``int``).
A pointer with no tokens denotes the root.  Pointers convert to and from
JSON Pointer strings (RFC 6901, e.g. ``"/properties/a"``) and URI fragments
(RFC 6901 section 6, e.g. ``"#/properties/a"``).

Besides addressing, a pointer knows how to evaluate itself in a plain
document and how to produce a copy of a document with the value at its
location replaced (copy-on-write: only the containers along the path are
copied, all other subtrees are shared with the original).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, unquote

import jsonpointer
from jsonpointer import JsonPointer, JsonPointerException

from json_schema_view.errors import PointerResolutionError, TypeMismatchError
from json_schema_view.typelike import is_array_like, is_object_like

__all__ = ["Pointer", "Token"]

Token = str | int

# Characters left unescaped in fragments: RFC 3986 pchar minus percent, plus "/"
_FRAGMENT_SAFE = "/~!$&'()*+,;=:@"


def _check_token(token: Any) -> Token:
    # bool before int: bool subclasses int
    if isinstance(token, bool) or not isinstance(token, (str, int)):
        msg = f"pointer tokens must be str or int, got {type(token).__name__}: {token!r}"
        raise TypeMismatchError(msg)
    if isinstance(token, int) and token < 0:
        msg = f"pointer index tokens must be non-negative, got {token}"
        raise TypeMismatchError(msg)
    return token


@dataclass(frozen=True, slots=True)
class Pointer:
    """An ordered, immutable sequence of reference tokens.

    Equality is token-sequence equality, so ``Pointer(("a", 0))`` and
    ``Pointer(["a", 0])`` are equal and hash alike.

    Example::

        ptr = Pointer.from_fragment("#/properties/a")
        ptr.tokens      # ("properties", "a")
        ptr.path        # "/properties/a"
        ptr.parent()    # Pointer(tokens=("properties",))
    """

    tokens: tuple[Token, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "tokens", tuple(_check_token(t) for t in self.tokens)
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def root(cls) -> Pointer:
        """Return the pointer with no tokens."""
        return cls(())

    @classmethod
    def from_path(cls, path: str) -> Pointer:
        """Parse a JSON Pointer string (``""`` or ``"/a/b"``).

        All tokens are returned as strings; digit tokens are interpreted as
        array indices only during evaluation.

        Raises:
            PointerResolutionError: If a non-empty path does not start with "/"
                or contains an invalid ``~`` escape.
        """
        try:
            parts = JsonPointer(path).parts
        except JsonPointerException as exc:
            msg = f"invalid JSON pointer {path!r}: {exc}"
            raise PointerResolutionError(msg) from exc
        return cls(tuple(parts))

    @classmethod
    def from_fragment(cls, fragment: str) -> Pointer:
        """Parse a URI fragment (``"#"`` or ``"#/a/b"``), percent-decoding it."""
        if not fragment.startswith("#"):
            msg = f"fragment must start with '#': {fragment!r}"
            raise PointerResolutionError(msg)
        return cls.from_path(unquote(fragment[1:]))

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def is_root(self) -> bool:
        """True when this pointer has no tokens."""
        return not self.tokens

    @property
    def last_token(self) -> Token:
        """The final token.  Raises PointerResolutionError at the root."""
        if not self.tokens:
            msg = "the root pointer has no last token"
            raise PointerResolutionError(msg)
        return self.tokens[-1]

    def child(self, token: Token) -> Pointer:
        """Return this pointer extended by one token."""
        return Pointer((*self.tokens, token))

    def extend(self, tokens: Iterable[Token]) -> Pointer:
        """Return this pointer extended by several tokens."""
        return Pointer((*self.tokens, *tokens))

    def parent(self) -> Pointer:
        """Return this pointer without its last token.

        Raises:
            PointerResolutionError: At the root, which has no parent.
        """
        if not self.tokens:
            msg = "the root pointer has no parent"
            raise PointerResolutionError(msg)
        return Pointer(self.tokens[:-1])

    # ------------------------------------------------------------------
    # String forms
    # ------------------------------------------------------------------

    @property
    def path(self) -> str:
        """RFC 6901 string form, ``""`` for the root."""
        return "".join("/" + jsonpointer.escape(str(t)) for t in self.tokens)

    @property
    def fragment(self) -> str:
        """URI fragment form, ``"#"`` for the root."""
        return "#" + quote(self.path, safe=_FRAGMENT_SAFE)

    def __str__(self) -> str:
        return self.fragment

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate(self, document: Any) -> Any:
        """Return the value this pointer identifies within ``document``.

        Each step is walked with ``jsonpointer``; its failures are re-raised
        as ``PointerResolutionError`` naming the location that failed.

        Raises:
            PointerResolutionError: If a token does not exist in its container
                or a container is not object/array-like.
        """
        value = document
        for depth, token in enumerate(self.tokens):
            value = self._step(value, token, depth)
        return value

    def _step(self, value: Any, token: Token, depth: int) -> Any:
        part = str(token)
        where = Pointer(self.tokens[: depth + 1]).fragment
        if not (is_object_like(value) or is_array_like(value)):
            msg = f"{where}: cannot evaluate token {token!r} in non-container value {value!r}"
            raise PointerResolutionError(msg)
        # "-" names the element past the end; jsonpointer's index pattern
        # also lets leading zeros through
        if is_array_like(value) and (part == "-" or (len(part) > 1 and part.startswith("0"))):
            msg = f"{where}: {part!r} is not a valid index for an array of length {len(value)}"
            raise PointerResolutionError(msg)
        try:
            return _WALKER.walk(value, part)
        except JsonPointerException as exc:
            msg = f"{where}: {exc}"
            raise PointerResolutionError(msg) from exc

    def modified_document_copy(
        self, document: Any, modifier: Callable[[Any], Any]
    ) -> Any:
        """Return a copy of ``document`` with the value here replaced by ``modifier(value)``.

        Only the containers along this pointer are copied; sibling subtrees are
        shared with ``document``, which is never mutated.  When ``modifier``
        returns the identical object, ``document`` itself is returned.

        Raises:
            PointerResolutionError: If the pointer does not resolve in ``document``.
        """
        return self._modify(document, 0, modifier)

    def _modify(self, value: Any, depth: int, modifier: Callable[[Any], Any]) -> Any:
        if depth == len(self.tokens):
            return modifier(value)
        token = self.tokens[depth]
        current = self._step(value, token, depth)
        replacement = self._modify(current, depth + 1, modifier)
        if replacement is current:
            return value
        part = _WALKER.get_part(value, str(token))
        if is_object_like(value):
            copied: dict[str, Any] = dict(value)
            copied[part] = replacement
            return copied
        items = list(value)
        items[part] = replacement
        return items


# walk() and get_part() do not depend on the pointer's own parts
_WALKER = JsonPointer("")
