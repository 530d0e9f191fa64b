"""
cmdargs parameter layer: declare options, evaluate argument vectors, query results.

What this module provides
- Parameter: one parser instance that owns
  • a registry of option definitions, addressable by canonical name or any alias;
  • the result of the last evaluation: the program token, the ordered option
    occurrences (duplicates kept) and the trailing extra arguments.

Evaluation model (single pass, left to right)
- The first token is the program name unless it looks like an option.
- Options are read until the first token that is not an option; that token and
  everything after it become the extra arguments (wrapped as Generic values).
- "--name=value" supplies the first value inline; only the first "=" splits, so
  "--name=a=b" has the first value "a=b". Remaining values are taken verbatim from
  the following tokens.
- Unknown options and missing values abort the whole evaluation. The previous
  result is cleared before parsing starts, so after a failure every query sees an
  empty result.

Quick start
    from cmdargs import Parameter

    parameter = Parameter()
    parameter.add("help", "h")
    parameter.add("num-threads", "t", "T", nargs=1)
    parameter.add("position", nargs=2)

    parameter.evaluate(["prog", "-t=4", "--position", "1.5", "2", "input.txt"])

    parameter.program                         # "prog"
    parameter.last("t").values[0].toint()     # 4
    parameter.extra(0).tostring()             # "input.txt"

Concurrency
- evaluate() mutates the instance without locking; serialize calls per instance.
  Queries are read-only and may run concurrently with each other.
"""
import difflib
import logging
import shlex
from collections.abc import Iterable

from .arguments import Definition, Argument, optionname, isoption, trimarg
from .faults import *
from .generics import Generic
from .utils import *

logger = logging.getLogger(__name__)


class Parameter:
    """
    command line parameter processor.

    Responsibilities
    - Registry: add()/remove() option definitions with aliases and arity.
    - Evaluation: evaluate() an argument vector into program/options/extras.
    - Queries: exists(), index(), at(), first(), last(), count(), value(),
      extra(), expand(); absent conditions return None/False/empty, never raise.

    Options (keyword-only, read-only afterwards)
    - shell: render faults with rich on stderr and exit(1) instead of raising.
    - fancy: draw rendered faults inside a panel.
    - colorful: style rendered faults (see __styles__ in __main__ to override).
    """

    def __init__(self, *, shell=False, fancy=False, colorful=False):
        for name, option in (("shell", shell), ("fancy", fancy), ("colorful", colorful)):
            if not isinstance(option, bool):
                raise TypeError("Parameter() %r option must be a boolean" % name)
        self._shell = shell
        self._fancy = fancy
        self._colorful = colorful
        self._fallback = Unset

        self._definitions = []
        self._aliases = {}

        self._program = ""
        self._options = []
        self._extras = []

    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    definitions = mirror("definitions")
    aliases = mirror("aliases")

    program = mirror("program")
    options = mirror("options")
    extras = mirror("extras")

    @property
    def optioncount(self):
        return len(self._options)

    @property
    def extracount(self):
        return len(self._extras)

    # ── Registry ─────────────────────────────────────────────────────────────

    def add(self, name, /, *aliases, nargs=0):
        """
        add or update the option definition called `name`.

        parameters
        - name: str
          primary name; the "--" or "-" prefix is optional and stripped.
        - aliases: str
          alternate names (prefix optional); empty aliases are skipped. An alias
          already bound to another option is silently rebound to this one.
        - nargs: int
          number of values following the option; negative values clamp to 0.

        behavior
        - an empty name (after stripping) is ignored.
        - when `name` already resolves to a definition, that definition's arity is
          updated in place, so every alias bound to it sees the new arity.
        - names are case-sensitive: "--A" and "-A" are the same option, "-a" is not.
        """
        if not isinstance(name, str):
            raise TypeError("add() first argument must be a string")
        if not all(isinstance(alias, str) for alias in aliases):
            raise TypeError("add() aliases must be strings")
        if not isinstance(nargs, int) or isinstance(nargs, bool):
            raise TypeError("add() 'nargs' argument must be an integer")

        if not (name := optionname(name)):
            return
        nargs = max(nargs, 0)

        try:
            definition = self._aliases[name]
        except KeyError:
            definition = Definition(name, nargs)
            self._definitions.append(definition)
        else:
            definition._nargs = nargs  # NOQA: shared by every alias

        self._aliases[name] = definition
        for alias in map(optionname, aliases):
            if alias:
                self._aliases[alias] = definition
        logger.debug("registered option %r (nargs=%d, aliases=%r)", definition.name, nargs, aliases)

    def remove(self, name, /):
        """
        remove the option that `name` resolves to, including all of its aliases.

        returns whether a definition was found and removed.
        """
        if not isinstance(name, str):
            raise TypeError("remove() argument must be a string")
        try:
            definition = self._aliases[optionname(name)]
        except KeyError:
            return False
        self._definitions.remove(definition)
        for alias in [alias for alias, other in self._aliases.items() if other is definition]:
            del self._aliases[alias]
        logger.debug("removed option %r", definition.name)
        return True

    def _resolve(self, name):
        # Canonical name for any spelling of a registered option, None otherwise.
        if not isinstance(name, str) or not (name := optionname(name)):
            return None
        try:
            return self._aliases[name].name
        except KeyError:
            return None

    # ── Faults ───────────────────────────────────────────────────────────────

    def fallback(self, fallback, /):
        """
        install a callable receiving evaluation exceptions instead of the default trigger.

        the evaluation is aborted either way; the fallback decides what to do with the
        error (log it, print it, raise something else). Returns the fallback so it can
        be used as a decorator.
        """
        if not callable(fallback):
            raise TypeError("fallback() argument must be callable")
        self._fallback = fallback
        return fallback

    def trigger(self, fault, /, **options):
        fault = fault.__replace__(**options, tool=self, shell=self._shell, fancy=self._fancy, colorful=self._colorful)
        if isinstance(fault, ParameterException) and self._fallback:
            return self._fallback(fault)
        trigger(fault)

    # ── Evaluation ───────────────────────────────────────────────────────────

    def _reset(self):
        self._program = ""
        self._options = []
        self._extras = []

    def _evaluate_option(self, tokens, index, position, prog=""):
        """
        parse the option starting at tokens[index].

        returns (argument, next index), or (None, index) when the token is not an option.
        faults are raised through trigger(); a fallback makes this return (None, None).
        """
        token = tokens[index]
        if not isoption(token):
            return None, index

        input, separator, inline = token.partition("=")
        name = optionname(input)
        index += 1

        try:
            definition = self._aliases[name]
        except KeyError:
            suggestions = difflib.get_close_matches(name, self._aliases.keys(), 5)
            try:
                hint = "did you mean %r?" % ("-" * min(len(suggestions[0]), 2) + suggestions[0])
            except IndexError:
                hint = "check the spelling or register the option before evaluating"
            self.trigger(UnrecognizedOptionError(
                "unrecognized option %r at %s position" % (input, ordinal(index)),
                title="unrecognized option",
                code=FaultCode.UNRECOGNIZED_OPTION,
                name=name,
                token=token,
                index=index - 1,
                suggestions=suggestions,
                hint=hint,
                docs=getdoc(FaultCode.UNRECOGNIZED_OPTION),
            ), prog=prog)
            return None, None

        values = []
        needed = definition.nargs
        if separator:
            if needed:
                if not inline:
                    self.trigger(EmptyInlineValueWarning(
                        "empty inline value for option %r at %s position" % (input, ordinal(index)),
                        title="empty inline value",
                        code=FaultCode.EMPTY_INLINE_VALUE,
                        name=definition.name,
                        token=token,
                        index=index - 1,
                        hint="add a value after '=' (for example: %s=<value>)" % input,
                        docs=getdoc(FaultCode.EMPTY_INLINE_VALUE),
                    ), prog=prog)
                values.append(trimarg(inline))
                needed -= 1
            else:
                self.trigger(IgnoredInlineValueWarning(
                    "option %r at %s position takes no value, %r is ignored" % (input, ordinal(index), inline),
                    title="inline value ignored",
                    code=FaultCode.IGNORED_INLINE_VALUE,
                    name=definition.name,
                    token=token,
                    index=index - 1,
                    hint="remove everything from '=' (for example: %s)" % input,
                    docs=getdoc(FaultCode.IGNORED_INLINE_VALUE),
                ), prog=prog)

        available = len(tokens) - index
        if available < needed:
            self.trigger(InsufficientArgumentsError(
                "too few option arguments for %r at %s position: available=%d, need=%d" % (
                    input, ordinal(index), available, needed
                ),
                title="too few option arguments",
                code=FaultCode.INSUFFICIENT_ARGUMENTS,
                name=definition.name,
                token=token,
                index=index - 1,
                available=available,
                needed=needed,
                hint="%s expects %s after it" % (input, pluralize("value", definition.nargs)),
                docs=getdoc(FaultCode.INSUFFICIENT_ARGUMENTS),
            ), prog=prog)
            return None, None

        values.extend(map(trimarg, tokens[index:index + needed]))
        index += needed
        return Argument(position, definition.name, tuple(values)), index

    def evaluate(self, args, /):
        """
        evaluate an argument vector against the registered options.

        parameters
        - args: Iterable[str] | str | None
          • Iterable[str]: tokens as received by the process (e.g. sys.argv).
          • str: split like a shell would (shlex.split).
          • None or empty: nothing happens, the previous result is kept.

        returns
        - True when the vector was evaluated, False when a fallback handled a fault
          or the input was empty.

        raises (non-shell mode without fallback)
        - UnrecognizedOptionError, InsufficientArgumentsError, EvaluationDeadlockError.
          The result is cleared before parsing starts and stays cleared on failure.
        """
        if args is None:
            return False
        if isinstance(args, str):
            args = shlex.split(args)
        elif isinstance(args, Iterable):
            args = list(args)
            if not all(isinstance(arg, str) for arg in args):
                raise TypeError("evaluate() argument must be an iterable of strings")
        else:
            raise TypeError("evaluate() argument must be a string or an iterable of strings")
        if not args:
            return False

        self._reset()

        index = 0
        program = ""
        if not isoption(args[0]):
            program = args[0]
            index = 1

        options = []
        while index < len(args):
            start = index
            argument, index = self._evaluate_option(args, index, len(options), prog=program)
            if index is None:
                return False
            if argument is None:
                break
            if index <= start:
                self.trigger(EvaluationDeadlockError(
                    "deadlock while evaluating %r at %s position" % (args[start], ordinal(start + 1)),
                    title="deadlock while evaluating",
                    code=FaultCode.EVALUATION_DEADLOCK,
                    token=args[start],
                    index=start,
                    hint="this is a bug in cmdargs, please report it with the arguments used",
                    docs=getdoc(FaultCode.EVALUATION_DEADLOCK),
                ), prog=program)
                return False
            logger.debug("evaluated option %r with %d value(s)", argument.name, len(argument.values))
            options.append(argument)

        self._program = program
        self._options = options
        self._extras = [Generic(arg) for arg in args[index:]]
        logger.debug("evaluated %d option(s) and %d extra argument(s)", len(self._options), len(self._extras))
        return True

    # ── Queries ──────────────────────────────────────────────────────────────

    def extra(self, index, /):
        """
        return the extra argument at `index`, or an empty Generic when out of range.
        """
        if not isinstance(index, int) or not 0 <= index < len(self._extras):
            return Generic("")
        return self._extras[index]

    def expand(self, index, /):
        """
        treat the extra argument at `index` as a wildcard and expand it on the filesystem.

        returns the sorted list of matching paths; empty when nothing matches, on error,
        or when the index is out of range.
        """
        if not isinstance(index, int) or not 0 <= index < len(self._extras):
            return []
        return wglob(self._extras[index].tostring())

    def exists(self, name, /):
        """
        return whether the option called `name` (or any of its aliases) occurred.
        """
        return self.index(name) is not None

    def index(self, name, start=0, /):
        """
        search the occurrences of an option and return its index, or None.

        direction
        - start >= 0: forward search from `start`; the result is non-negative.
        - start < 0: backward search from len + start (-1 is the last occurrence);
          the result is negative as well, so it can be passed to at() unchanged.
        """
        if (name := self._resolve(name)) is None or not isinstance(start, int):
            return None
        length = len(self._options)
        if start >= 0:
            for index in range(start, length):
                if self._options[index].name == name:
                    return index
        else:
            for index in range(length + start, -1, -1):
                if self._options[index].name == name:
                    return index - length
        return None

    def at(self, index, /):
        """
        return the occurrence at `index` (negative counts from the end), or None.
        """
        if not isinstance(index, int) or not -len(self._options) <= index < len(self._options):
            return None
        return self._options[index]

    def first(self, name, /):
        index = self.index(name)
        return None if index is None else self._options[index]

    def last(self, name, /):
        index = self.index(name, -1)
        return None if index is None else self._options[index]

    def count(self, name, /):
        """
        return how many times the option called `name` occurred.
        """
        if (name := self._resolve(name)) is None:
            return 0
        return sum(1 for argument in self._options if argument.name == name)

    def value(self, name, index=0, /):
        """
        return value `index` of the last occurrence of `name`, or None.

        convenience for the common "last one wins" reading of single-valued options.
        """
        argument = self.last(name)
        if argument is None or not isinstance(index, int) or not 0 <= index < len(argument.values):
            return None
        return argument.values[index]

    def __len__(self):
        return len(self._options)

    def __iter__(self):
        return iter(tuple(self._options))

    def __repr__(self):
        return "%s(program=%r, options=%d, extras=%d)" % (
            type(self).__name__, self._program, len(self._options), len(self._extras)
        )

    def __rich_repr__(self):
        yield "program", self._program
        yield "definitions", tuple(self._definitions)
        yield "options", tuple(self._options)
        yield "extras", tuple(self._extras)


__all__ = (
    "Parameter",
)
