"""Composable decoders from parsed JSON to Python values.

A Decoder wraps a function taking the JSON value and its path inside the
response. Failures raise DecodeError carrying the path, so nested
decoders report exactly where the response diverged from the selection.
"""

from typing import Any, Callable, Generic, TypeVar

from .errors import DecodeError, DecodeFailure, PathSegment

T = TypeVar("T")
U = TypeVar("U")

Path = tuple[PathSegment, ...]


def classify(value: Any) -> str:
    """Name the JSON kind of a parsed value, GraphQL style."""
    if value is None:
        return "Null"
    if isinstance(value, bool):
        return "Boolean"
    if isinstance(value, int):
        return "Int"
    if isinstance(value, float):
        return "Float"
    if isinstance(value, str):
        return "String"
    if isinstance(value, list):
        return "List"
    if isinstance(value, dict):
        return "Object"
    return type(value).__name__


def fail(expected: str, found: str, path: Path) -> DecodeError:
    return DecodeError([DecodeFailure(expected=expected, found=found, path=path)])


class Decoder(Generic[T]):
    """A reusable JSON-to-value conversion."""

    def __init__(self, run: Callable[[Any, Path], T]):
        self._run = run

    def decode(self, value: Any, path: Path = ()) -> T:
        """Decode `value`, found at `path` inside the response.

        Raises:
            DecodeError: If the value does not have the expected shape
        """
        return self._run(value, path)

    __call__ = decode

    def map(self, fn: Callable[[T], U]) -> "Decoder[U]":
        return Decoder(lambda value, path: fn(self._run(value, path)))


def _primitive(expected: str, accepts: Callable[[Any], bool]) -> Decoder[Any]:
    def run(value: Any, path: Path) -> Any:
        if not accepts(value):
            raise fail(expected, classify(value), path)
        return value
    return Decoder(run)


string: Decoder[str] = _primitive("String", lambda v: isinstance(v, str))
integer: Decoder[int] = _primitive(
    "Int", lambda v: isinstance(v, int) and not isinstance(v, bool)
)
boolean: Decoder[bool] = _primitive("Boolean", lambda v: isinstance(v, bool))


def _number(value: Any, path: Path) -> float:
    # JSON numbers without a fraction are valid GraphQL Float values
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise fail("Float", classify(value), path)
    try:
        return float(value)
    except OverflowError as e:
        raise fail("Float", f"{classify(value)} (out of range)", path) from e


number: Decoder[float] = Decoder(_number)
anything: Decoder[Any] = Decoder(lambda value, path: value)


def succeed(value: T) -> Decoder[T]:
    """A decoder that ignores its input and returns `value`."""
    return Decoder(lambda _value, _path: value)


def nullable(inner: Decoder[T]) -> Decoder[T | None]:
    """Decode JSON null as None, anything else through `inner`."""
    def run(value: Any, path: Path) -> T | None:
        if value is None:
            return None
        return inner.decode(value, path)
    return Decoder(run)


def when_present(keys: tuple[str, ...], inner: Decoder[T]) -> Decoder[T | None]:
    """Decode None when any of `keys` is missing from the JSON object.

    Used for fragments, whose fields sit in the enclosing object and are
    missing from it when the fragment does not apply. Null decodes to None.
    """
    def run(value: Any, path: Path) -> T | None:
        if value is None:
            return None
        if keys and isinstance(value, dict) and not all(key in value for key in keys):
            return None
        return inner.decode(value, path)
    return Decoder(run)


def list_of(inner: Decoder[T]) -> Decoder[list[T]]:
    """Decode a JSON array element by element, stopping at the first failure."""
    def run(value: Any, path: Path) -> list[T]:
        if not isinstance(value, list):
            raise fail("List", classify(value), path)
        return [inner.decode(item, path + (index,)) for index, item in enumerate(value)]
    return Decoder(run)


def field(key: str, inner: Decoder[T], *, missing_as_null: bool = False) -> Decoder[T]:
    """Decode the value stored under `key` of a JSON object.

    Args:
        key: Object key to read
        inner: Decoder for the value under the key
        missing_as_null: Decode an absent key as JSON null instead of failing
    """
    def run(value: Any, path: Path) -> T:
        if not isinstance(value, dict):
            raise fail("Object", classify(value), path)
        if key not in value:
            if not missing_as_null:
                raise fail("Field", "Nothing", path + (key,))
            return inner.decode(None, path + (key,))
        return inner.decode(value[key], path + (key,))
    return Decoder(run)


def at(keys: list[str], inner: Decoder[T]) -> Decoder[T]:
    """Decode the value found by following `keys` through nested objects."""
    decoder = inner
    for key in reversed(keys):
        decoder = field(key, decoder)
    return decoder
