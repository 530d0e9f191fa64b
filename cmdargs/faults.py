"""
cmdargs faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings), grouped by domain to keep logs/searches predictable.
- ParameterException / ParameterWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Error kinds raised by Parameter.evaluate()
- UnrecognizedOptionError: an option token does not resolve to any definition.
- InsufficientArgumentsError: an option needs more values than tokens remain.
- EvaluationDeadlockError: the evaluator stopped making progress (a library bug).

Warnings
- EmptyInlineValueWarning: "--name=" gave an empty first value.
- IgnoredInlineValueWarning: "--name=value" on an option that takes no values.

Integration
- Parameter collects the runtime options (tool, shell, fancy, colorful) and calls
  trigger(fault, **ctx). In non-shell mode exceptions are raised; in shell mode they
  are rendered via rich on stderr and the process exits with status 1.
"""
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - options (1111x): UNRECOGNIZED_OPTION
    - option values (1112x): INSUFFICIENT_ARGUMENTS
    - internal (1119x): EVALUATION_DEADLOCK
    - warnings (121xx): EMPTY_INLINE_VALUE, IGNORED_INLINE_VALUE

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- option errors (11xxx) ---
    UNRECOGNIZED_OPTION         = 11111

    # --- option value errors (11xxx) ---
    INSUFFICIENT_ARGUMENTS      = 11121

    # --- internal errors (11xxx) ---
    EVALUATION_DEADLOCK         = 11191

    # --- warnings (12xxx) ---
    EMPTY_INLINE_VALUE          = 12111
    IGNORED_INLINE_VALUE        = 12112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette):
    """
    shared rich renderer for exceptions and warnings.

    options used: colorful, fancy, prog, tool, code, title, hint (all optional).
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style] if colorful else "")

    tool = options.get("tool")
    prog = getattr(main, "__prog__", None) or options.get("prog") or getattr(tool, "program", "") or "cmdargs"
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else code, "code"),
        " | ",
        text(str(options.get("title", "")).title(), "title"),
        " ]"
    )
    message = text(coalesce(fault.message, ""), "message")
    hint = Text.assemble(text(" → ", "hint-arrow"), text(options.get("hint"), "hint"))

    if fancy:
        width = console.width - 4
        try:
            width = int(width * options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(message, hint), title=header, title_align="left", width=width)

    return Group(header, message, hint)


class ParameterException(Exception):
    """
    base type of every error raised while evaluating arguments.

    the message is a short lowercased sentence; `options` holds the context
    (code, title, hint, token, index, ...) used for rendering and inspection.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | type(Unset))
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title

            # body
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnrecognizedOptionError(ParameterException):
    @property
    def name(self):
        return self.options.get("name", "")

    @property
    def token(self):
        return self.options.get("token", "")

    @property
    def suggestions(self):
        return tuple(self.options.get("suggestions", ()))


class InsufficientArgumentsError(ParameterException):
    @property
    def available(self):
        return self.options.get("available", 0)

    @property
    def needed(self):
        return self.options.get("needed", 0)


class EvaluationDeadlockError(ParameterException): ...


class ParameterWarning(Warning):
    """
    base type of the non-fatal diagnostics emitted while evaluating arguments.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | type(Unset))
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell"):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyInlineValueWarning(ParameterWarning): ...
class IgnoredInlineValueWarning(ParameterWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are
      raised and warnings go through the warnings module.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ParameterException",
    "UnrecognizedOptionError",
    "InsufficientArgumentsError",
    "EvaluationDeadlockError",
    "ParameterWarning",
    "EmptyInlineValueWarning",
    "IgnoredInlineValueWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
