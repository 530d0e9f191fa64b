"""
cmdargs utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the parameter, argument and fault layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) as a frozen
    snapshot (tuple / read-only mapping) so the public API cannot mutate parser state.

- ordinal(number)
  • Human-friendly ordinal label ("first", "second", "21st") used in fault messages.

- pluralize(word, count)
  • Minimal English pluralization for counted nouns in messages ("1 value", "2 values").

- wglob(pattern)
  • Filesystem wildcard expansion relative to the current directory, never raising.

Stability and contract
- Names not in __all__ are internal and may change without notice.
"""
import functools
import glob
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0 or "" are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("prog", "cmdargs") -> "prog"
    - coalesce(Unset, "cmdargs")  -> "cmdargs"
    - coalesce(None, "cmdargs")   -> None
    """
    return object if object is not Unset else default


def _freeze(object):
    # Shallow freeze: the public view must not alias the mutable backing container.
    if isinstance(object, Sequence) and not isinstance(object, (str, bytes, bytearray)):
        return tuple(object)
    elif isinstance(object, Mapping):
        return MappingProxyType(dict(object))
    elif isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance and returns a frozen
    snapshot for container types (list → tuple, dict → read-only mapping,
    set → frozenset). Scalars are returned unchanged.

    Example
    - Given self._extras, declare extras = mirror("extras") to expose it safely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        return _freeze(getattr(self, "_" + name))

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with English suffixes (11th, 21st, 112th).
    """
    if not isinstance(number, int):
        raise TypeError("ordinal() argument must be an integer")
    words = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")
    if 1 <= number <= len(words):
        return words[number - 1]
    if 10 < number % 100 < 20:
        return f"{number}th"
    return f"{number}%s" % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def pluralize(word, count, /):
    """
    Prefix a noun with its count and pluralize it when the count is not one.

    Only the regular English rules needed by the fault messages are covered
    (s/sh/ch/x/z → +es, consonant+y → -ies, otherwise +s).

    Examples
    - pluralize("value", 1)    -> "1 value"
    - pluralize("argument", 0) -> "0 arguments"
    - pluralize("match", 2)    -> "2 matches"
    """
    if not isinstance(word, str):
        raise TypeError("pluralize() first argument must be a string")
    if count == 1 or not word:
        return "%d %s" % (count, word)
    lower = word.lower()
    if lower.endswith(("s", "sh", "ch", "x", "z")):
        word += "es"
    elif lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        word = word[:-1] + "ies"
    else:
        word += "s"
    return "%d %s" % (count, word)


def wglob(pattern, /):
    """
    expand a filesystem wildcard pattern relative to the current directory.

    rules
    - supports the usual shell wildcards ('*', '?', '[...]'); '**' is not recursive.
    - matches are returned sorted so results are stable across platforms.
    - a pattern without matches, or one the platform rejects, yields an empty list.
    """
    if not isinstance(pattern, str):
        raise TypeError("wglob() argument must be a string")
    try:
        return sorted(glob.glob(pattern))
    except (OSError, ValueError):
        return []


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but the API
still needs to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "coalesce",
    "mirror",
    "ordinal",
    "pluralize",
    "wglob",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
