"""Exception validators used by the Will-Fail matcher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple, Type, Union

ExceptionType = Union[Type[BaseException], Tuple[Type[BaseException], ...]]


def type_name(kind: ExceptionType) -> str:
    """Qualified name of an exception type, or of each type in a tuple."""
    if isinstance(kind, tuple):
        return " | ".join(type_name(k) for k in kind)
    if kind.__module__ == "builtins":
        return kind.__qualname__
    return f"{kind.__module__}.{kind.__qualname__}"


@dataclass(frozen=True)
class ExceptionValidator:
    """A predicate over a failure cause plus a description for diagnostics."""

    predicate: Callable[[BaseException], bool]
    description: str

    def __call__(self, cause: BaseException) -> bool:
        return bool(self.predicate(cause))

    @classmethod
    def for_type(cls, kind: ExceptionType) -> "ExceptionValidator":
        """Accept causes that are instances of kind or one of its subclasses."""
        if kind is None:
            raise ValueError("exception_type should not be None")
        if not is_exception_type(kind):
            raise ValueError(f"{kind!r} is not an exception type")
        return cls(lambda cause: isinstance(cause, kind), type_name(kind))

    @classmethod
    def any_exception(cls) -> "ExceptionValidator":
        return cls.for_type(BaseException)


def is_exception_type(kind: object) -> bool:
    """Whether kind can be used with isinstance() to test a failure cause."""
    if isinstance(kind, tuple):
        return len(kind) > 0 and all(is_exception_type(k) for k in kind)
    return isinstance(kind, type) and issubclass(kind, BaseException)
