"""
cmdargs generic values: lazily-typed wrappers around raw argument strings.

Overview
- Generic: an immutable wrapper over one textual token. Nothing is converted at
  parse time; callers decide the type when they read the value.

Accessors
- Checked: string(), bool(), int(), uint(), float() → (value, ok)
- Unchecked: tostring(), tobool(), toint(), touint(), tofloat() → value
  (the zero of the type when the checked accessor fails)

Conversion cascades (first success wins)
- bool():  lexicon → integer (base-detecting) → float; nonzero is true
- int():   integer (base-detecting) → float truncated toward zero → lexicon
- uint():  unsigned integer → non-negative float truncated → lexicon
- float(): float → integer widened → lexicon

Lexicon
- true:  1 t T TRUE true True
- false: 0 f F FALSE false False

Integer syntax
- optional sign (signed parse only), then 0x/0X hex, 0b/0B binary, 0o/0O octal,
  a leading 0 (legacy octal) or plain decimal; results are bounded to 64 bits.

Why the permissive fallbacks
- an integer option can be toggled with a boolean-looking value ("--level=true")
  and a boolean option can be given as a number ("--debug=0").

Quick example
    >>> Generic("0x1F").int()
    (31, True)
    >>> Generic("3.9").toint()
    3
    >>> Generic("-5").uint()
    (0, False)
"""
import math
import re

from rich.text import Text

_TRUE = frozenset(("1", "t", "T", "TRUE", "true", "True"))
_FALSE = frozenset(("0", "f", "F", "FALSE", "false", "False"))

_INTEGER = re.compile(
    r"(?P<sign>[+-]?)"
    r"(?:0[xX](?P<hex>[0-9a-fA-F]+)"
    r"|0[bB](?P<bin>[01]+)"
    r"|0[oO](?P<oct>[0-7]+)"
    r"|0(?P<legacy>[0-7]*)"
    r"|(?P<dec>[1-9][0-9]*))"
)
_BASES = (("hex", 16), ("bin", 2), ("oct", 8), ("legacy", 8), ("dec", 10))

_INT64 = (-(1 << 63), (1 << 63) - 1)
_UINT64 = (0, (1 << 64) - 1)


def _parsebool(text):
    if text in _TRUE:
        return True, True
    if text in _FALSE:
        return False, True
    return False, False


def _parseint(text, signed=True):
    match = _INTEGER.fullmatch(text)
    if not match or (match["sign"] and not signed):
        return 0, False
    for group, base in _BASES:
        if (digits := match[group]) is not None:
            break
    value = int(digits, base) if digits else 0
    if match["sign"] == "-":
        value = -value
    low, high = _INT64 if signed else _UINT64
    if not low <= value <= high:
        return 0, False
    return value, True


def _parsefloat(text):
    # float() also takes whitespace, underscores and non-ASCII digits; tokens must not.
    if not text or text != text.strip() or not text.isascii() or "_" in text:
        return 0.0, False
    try:
        return float(text), True
    except ValueError:
        return 0.0, False


def _truncate(value, bounds):
    if not math.isfinite(value):
        return 0, False
    value = math.trunc(value)
    low, high = bounds
    if not low <= value <= high:
        return 0, False
    return value, True


class Generic:
    """
    immutable, deferred-typed wrapper around a single raw argument string.

    notes
    - equality and hashing follow the wrapped text, so Generic("a") == "a".
    - every checked accessor reports success for its own cascade only; for
      example Generic("true").int() is (1, True) while Generic("true").float()
      is (1.0, True) and Generic("x").bool() is (False, False).
    """
    __slots__ = ("_text",)

    def __new__(cls, text="", /):
        if not isinstance(text, str):
            raise TypeError("Generic() argument must be a string")
        self = super().__new__(cls)
        object.__setattr__(self, "_text", text)
        return self

    def __setattr__(self, name, value, /):
        raise AttributeError("'Generic' object is immutable")

    def __delattr__(self, name, /):
        raise AttributeError("'Generic' object is immutable")

    def __reduce__(self):
        return type(self), (self._text,)

    def string(self):
        return self._text, True

    def tostring(self):
        return self.string()[0]

    def bool(self):
        value, ok = _parsebool(self._text)
        if ok:
            return value, True
        number, ok = _parseint(self._text)
        if ok:
            return number != 0, True
        number, ok = _parsefloat(self._text)
        if ok:
            return number != 0.0, True
        return False, False

    def tobool(self):
        return self.bool()[0]

    def int(self):
        value, ok = _parseint(self._text)
        if ok:
            return value, True
        number, ok = _parsefloat(self._text)
        if ok:
            return _truncate(number, _INT64)
        flag, ok = _parsebool(self._text)
        if ok:
            return int(flag), True
        return 0, False

    def toint(self):
        return self.int()[0]

    def uint(self):
        """
        unsigned variant of int(): negative numbers fail instead of wrapping around.
        """
        value, ok = _parseint(self._text, signed=False)
        if ok:
            return value, True
        number, ok = _parsefloat(self._text)
        if ok:
            if number < 0.0:
                return 0, False
            return _truncate(number, _UINT64)
        flag, ok = _parsebool(self._text)
        if ok:
            return int(flag), True
        return 0, False

    def touint(self):
        return self.uint()[0]

    def float(self):
        value, ok = _parsefloat(self._text)
        if ok:
            return value, True
        number, ok = _parseint(self._text)
        if ok:
            return float(number), True
        flag, ok = _parsebool(self._text)
        if ok:
            return float(flag), True
        return 0.0, False

    def tofloat(self):
        return self.float()[0]

    def __str__(self):
        return self._text

    def __repr__(self):
        return "Generic(%r)" % self._text

    def __rich__(self):
        return Text(repr(self._text), style="green")

    def __eq__(self, other):
        if isinstance(other, Generic):
            return self._text == other._text
        if isinstance(other, str):
            return self._text == other
        return NotImplemented

    def __hash__(self):
        return hash(self._text)


__all__ = (
    "Generic",
)
