from __future__ import annotations

class TypeKindError(TypeError):
    """Operation invoked on a container of unsupported variant."""

    operation: str
    kind: str

    def __init__(self, operation: str, kind: str) -> None:
        self.operation = operation
        self.kind = kind
        super().__init__(f"{operation}() does not support {kind}")

class EmptyCollectionError(TypeKindError):
    """reduce() without a seed over an empty container."""

    def __init__(self, operation: str) -> None:
        super().__init__(operation, "an empty container without a seed")

__all__ = ("EmptyCollectionError", "TypeKindError")
