r"""
cmdargs argument building blocks: token rules, definitions and occurrences.

Overview
- Token rules
  • optionname(token): strip exactly one "--" prefix, else one "-" prefix.
  • isoption(token): "--x..." (length > 2) or "-x..." (length > 1); a lone "-" or "--"
    is never an option, it is an ordinary argument (e.g. "read from stdin").
  • trimarg(token): trim whitespace and surrounding double quotes of an option value.

- Definition
  • A declared option: canonical name (prefix stripped, case-sensitive) and arity (nargs).
  • Shared by identity between the name and all its aliases in the registry, so updating
    the arity of a definition is visible through every alias at once.

- Argument
  • One occurrence of a recognized option in an evaluated argument vector:
    (index, name, values), where index is the position among all occurrences,
    name is the canonical option name and values is a tuple of Generic.

Naming conventions
- "--A" and "-A" name the same option, "-A" and "-a" do not.
- Prefixes are optional everywhere: "help", "-help" and "--help" are equivalent.
"""
from collections import namedtuple

from rich.text import Text

from .generics import Generic


def optionname(token, /):
    """
    return the option name of a token with its prefix stripped.

    only one prefix is removed: "---x" → "-x", "--x" → "x", "-x" → "x", "x" → "x".
    """
    if token.startswith("--"):
        return token[2:]
    if token.startswith("-"):
        return token[1:]
    return token


def isoption(token, /):
    """
    return whether a raw token qualifies as an option.
    """
    if token in ("-", "--"):
        return False
    return len(token) > 1 and token.startswith("-")


def trimarg(token, /):
    """
    normalize one option value and wrap it as a Generic.

    behavior
    - surrounding whitespace is trimmed first.
    - a leading double quote is removed, and only then a trailing one as well
      ('"hello"' → 'hello', '"open' → 'open', 'close"' → 'close"').
    - single quotes are never touched.
    """
    token = token.strip()
    if token.startswith('"'):
        token = token[1:]
        if token.endswith('"'):
            token = token[:-1]
    return Generic(token)


class Definition:
    """
    a declared option: canonical name plus the number of trailing values it takes.

    definitions are created and updated by Parameter.add(); the registry maps the
    canonical name and every alias to the same Definition object.
    """
    __slots__ = ("_name", "_nargs")

    def __init__(self, name, nargs=0, /):
        self._name = name
        self._nargs = nargs

    @property
    def name(self):
        return self._name

    @property
    def nargs(self):
        return self._nargs

    def __repr__(self):
        return "%s(name=%r, nargs=%d)" % (type(self).__name__, self._name, self._nargs)

    def __rich_repr__(self):
        yield "name", self._name
        yield "nargs", self._nargs


class Argument(namedtuple("Argument", ("index", "name", "values"))):
    """
    one occurrence of an option in the evaluated arguments.

    fields
    - index: position among all occurrences (0-based, in command-line order).
    - name: canonical option name (prefix stripped).
    - values: tuple of Generic values taken by this occurrence.
    """
    __slots__ = ()

    def __rich__(self):
        return Text.assemble(
            ("#%d " % self.index, "dim"),
            ("--" + self.name, "bold cyan"),
            *((" " + repr(str(value)), "green") for value in self.values),
        )


__all__ = (
    "Definition",
    "Argument",
    "optionname",
    "isoption",
    "trimarg",
)
