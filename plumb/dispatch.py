"""
Dispatch
========

Shared currying and dispatch strategy for every engine operation.

Resolution on each call, in this order:
1. arity    - too few arguments (or no container in last position) -> Partial
2. deferred - any awaitable argument -> Deferred of the re-invoked operation
3. variant  - run the handler registered for the container's Variant

Operations declare their arity explicitly; nothing is inferred from the
declaration's signature.

Example:
    @operation(arity=2)
    def double(factor, container):
        ...

    @double.sequence
    def _double_sequence(factor, items):
        return [item * factor for item in items]

    double(2, [1, 2])            # [2, 4]
    double(2)([1, 2])            # [2, 4]
    await double(2, Deferred.of([1, 2]))  # [2, 4]
"""

from __future__ import annotations

import enum
import functools
import inspect
import logging
import typing
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from ._errors import TypeKindError
from ._helpers import MISSING
from .deferred import Deferred, settle_value
from .predicates import is_promise

logger = logging.getLogger(__name__)

# ============================================================================
# Variants
# ============================================================================


class Variant(enum.Enum):
    """Container tag used to pick an operation's handler."""

    SEQUENCE = "sequence"
    MAPPING = "mapping"
    TEXT = "text"
    NUMBER = "number"


def variant_of(value: typing.Any) -> Variant | None:
    """Tag a value, None when it is not a container of any kind."""
    match value:
        case list() | tuple():
            return Variant.SEQUENCE
        case str():
            return Variant.TEXT
        case bool():
            return None
        case int() | float():
            return Variant.NUMBER
        case Mapping():
            return Variant.MAPPING
        case _:
            return None


type Handler = Callable[..., typing.Any]


def _positional_signature(names: typing.Iterable[str]) -> inspect.Signature:
    return inspect.Signature(
        [inspect.Parameter(name, inspect.Parameter.POSITIONAL_ONLY) for name in names]
    )

# ============================================================================
# Partial application
# ============================================================================


@dataclass(frozen=True, slots=True)
class Partial:
    """
    Operation waiting for its remaining argument(s).

    Immutable and reusable: every call re-invokes the operation with the
    captured arguments followed by the new ones.
    """

    operation: Operation
    args: tuple[typing.Any, ...]

    def __call__(self, *rest: typing.Any) -> typing.Any:
        return self.operation(*self.args, *rest)

    @property
    def __signature__(self) -> inspect.Signature:
        """Arguments still needed for the shortest complete call (at least one)."""
        remaining = max(1, self.operation.required - len(self.args))
        return _positional_signature(f"arg{index}" for index in range(remaining))

    def __repr__(self) -> str:
        captured = ", ".join(repr(arg) for arg in self.args)
        return f"{self.operation.__name__}({captured}{', ' if captured else ''}...)"


# ============================================================================
# Operation
# ============================================================================


class Operation:
    """
    Curried, deferred-aware entry point with per-variant handlers.

    arity    - full positional count, container last (None = variadic)
    required - fewest positional arguments that can already include the container
    when     - extra check over the arguments deciding whether the last one
               is really the container (for operations with ambiguous signatures)
    """

    def __init__(
        self,
        declaration: Callable[..., typing.Any],
        *,
        arity: int | None,
        required: int | None = None,
        when: Callable[[tuple[typing.Any, ...]], bool] | None = None,
    ) -> None:
        if arity is not None and arity < 1:
            raise ValueError("Operation.arity must be >= 1")
        functools.update_wrapper(self, declaration)
        self.arity = arity
        self.required = required if required is not None else (arity or 1)
        self.when = when
        self._handlers: dict[Variant, Handler] = {}
        self._otherwise: Handler | None = None
        # Signature of the shortest complete call, used when passed as a callback
        parameters = list(inspect.signature(declaration).parameters.values())
        self.__signature__ = inspect.Signature(parameters[-self.required :])

    # Registration

    def register(self, *variants: Variant) -> Callable[[Handler], Handler]:
        """Register one handler for several variants."""

        def decorator(handler: Handler) -> Handler:
            for variant in variants:
                self._handlers[variant] = handler
            return handler

        return decorator

    def sequence(self, handler: Handler) -> Handler:
        return self.register(Variant.SEQUENCE)(handler)

    def mapping(self, handler: Handler) -> Handler:
        return self.register(Variant.MAPPING)(handler)

    def text(self, handler: Handler) -> Handler:
        return self.register(Variant.TEXT)(handler)

    def number(self, handler: Handler) -> Handler:
        return self.register(Variant.NUMBER)(handler)

    def otherwise(self, handler: Handler) -> Handler:
        """Handler for every value without a variant handler (no TypeKindError)."""
        self._otherwise = handler
        return handler

    @property
    def variants(self) -> frozenset[Variant]:
        return frozenset(self._handlers)

    # Resolution

    def accepts(self, value: typing.Any) -> bool:
        """Can value sit in the container slot?"""
        return (
            is_promise(value)
            or self._otherwise is not None
            or variant_of(value) in self._handlers
        )

    def _has_container(self, args: tuple[typing.Any, ...]) -> bool:
        if len(args) < self.required or not self.accepts(args[-1]):
            return False
        return self.when is None or self.when(args)

    def __call__(self, *args: typing.Any) -> typing.Any:
        if self.arity is not None and len(args) > self.arity:
            raise TypeError(
                f"{self.__name__}() takes at most {self.arity} arguments ({len(args)} given)"
            )

        if not self._has_container(args):
            if args and self.arity is not None and len(args) == self.arity:
                raise self._type_kind(args[-1])
            return Partial(self, args)

        if any(is_promise(arg) for arg in args):
            return self._defer(args)

        return self._dispatch(args)

    def _defer(self, args: tuple[typing.Any, ...]) -> Deferred[typing.Any]:
        async def resolved() -> typing.Any:
            values = [await settle_value(arg) for arg in args]
            return self(*values)

        return Deferred.attempt(resolved)

    def _dispatch(self, args: tuple[typing.Any, ...]) -> typing.Any:
        container = args[-1]
        variant = variant_of(container)
        handler = self._handlers.get(variant) if variant is not None else None
        if handler is None:
            handler = self._otherwise
        if handler is None:
            raise self._type_kind(container)

        padding = (MISSING,) * (self.arity - len(args)) if self.arity is not None else ()
        return handler(*args[:-1], *padding, container)

    def _type_kind(self, value: typing.Any) -> TypeKindError:
        kind = type(value).__name__
        logger.debug("%s() rejected container of type %s", self.__name__, kind)
        return TypeKindError(self.__name__, kind)

    def __repr__(self) -> str:
        arity = "*" if self.arity is None else self.arity
        return f"<operation {self.__name__}/{arity}>"


def operation(
    *,
    arity: int | None,
    required: int | None = None,
    when: Callable[[tuple[typing.Any, ...]], bool] | None = None,
) -> Callable[[Callable[..., typing.Any]], Operation]:
    """Declare an Operation. The decorated function provides name and docstring."""

    def decorator(declaration: Callable[..., typing.Any]) -> Operation:
        return Operation(declaration, arity=arity, required=required, when=when)

    return decorator


__all__ = (
    "Operation",
    "Partial",
    "Variant",
    "operation",
    "variant_of",
)
