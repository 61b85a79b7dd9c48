"""Document subpackage: addressing primitives for JSON-like documents.

Re-exports the public API for the document module:
- Pointer: immutable sequence of reference tokens (RFC 6901)
- Document: shared, immutable root value with a content fingerprint
- DocumentNode: one location in one document, navigable and copy-on-write
"""

from json_schema_view.document.node import Document, DocumentNode
from json_schema_view.document.pointer import Pointer, Token

__all__ = ["Document", "DocumentNode", "Pointer", "Token"]
