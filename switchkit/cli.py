import os
import sys
import logging
import dataclasses as dt

from typing import Callable, Optional
from . import const, processor, vt100

_logger = logging.getLogger(__name__)

# --- Options ---------------------------------------------------------------- #


@dt.dataclass
class Options:
    """
    Options shared by every command.

    Attributes:
        prefix: Prefix patterns replacing the default ones.
        flag: Switches that take no value.
        option: Switches that take a value.
        operands: The tokens following "--", handed over to the processor.
    """

    prefix: list[str] = dt.field(default_factory=list)
    flag: list[str] = dt.field(default_factory=list)
    option: list[str] = dt.field(default_factory=list)
    ignoreCase: bool = False
    strict: bool = False
    output: Optional[str] = None
    view: bool = False
    verbose: bool = False
    operands: list[str] = dt.field(default_factory=list)


@dt.dataclass
class Option:
    shortName: Optional[str]
    longName: str
    attr: str
    expectsValue: bool = False
    description: str = ""

    def names(self) -> list[str]:
        if self.shortName:
            return [self.shortName, self.longName]
        return [self.longName]

    def putValue(self, opts: Options, value: Optional[str]):
        """Sets the option's value on the given options object."""
        field = getattr(opts, self.attr)
        if isinstance(field, list):
            field.append(value)
        elif self.expectsValue:
            setattr(opts, self.attr, value)
        else:
            setattr(opts, self.attr, True)

    def usage(self) -> str:
        flag = ""
        if self.shortName:
            flag += f"-{self.shortName}, "
        flag += f"--{self.longName}"
        if self.expectsValue:
            flag += f" <{self.attr}>"
        return flag


OPTIONS: list[Option] = [
    Option("p", "prefix", "prefix", True, "Add a prefix pattern, replacing the defaults"),
    Option("f", "flag", "flag", True, "Register a switch that takes no value"),
    Option("o", "option", "option", True, "Register a switch that takes a value"),
    Option("i", "ignore-case", "ignoreCase", False, "Match switch names case-insensitively"),
    Option("s", "strict", "strict", False, "Reject values given to flags"),
    Option(None, "output", "output", True, "Render the graph to this file"),
    Option(None, "view", "view", False, "Open the rendered graph"),
    Option("v", "verbose", "verbose", False, "Enable verbose logging"),
]


def _splitOperands(args: list[str]) -> tuple[list[str], list[str]]:
    """Splits the arguments at the first "--"."""
    if "--" in args:
        idx = args.index("--")
        return args[:idx], args[idx + 1 :]
    return args[:], []


def _checkOperands(args: list[str]):
    """Rejects bare tokens that are not the value of an option."""
    valued = {name for option in OPTIONS if option.expectsValue for name in option.names()}
    i = 0
    while i < len(args):
        tok = args[i]
        i += 1
        if not tok.startswith("-"):
            raise RuntimeError(f"Unexpected operand '{tok}'")

        name, sep, _ = tok[2:].partition("=") if tok.startswith("--") else tok[1:].partition("=")
        if name in valued and not sep:
            i += 1


def parseOptions(args: list[str]) -> Options:
    """Parses the command options, everything after "--" becomes an operand."""
    own, operands = _splitOperands(args)
    opts = Options(operands=operands)
    missing: list[Option] = []

    p = processor.Processor(prefixes=["--", "-"], strict=True)
    for option in OPTIONS:

        def put(e: processor.SwitchMatch, option: Option = option):
            if option.expectsValue and e.value is None:
                missing.append(option)
            else:
                option.putValue(opts, e.value)

        for name in option.names():
            p.registerHandler(name, put, option.expectsValue)

    p.process(own)

    if p.invalidArgs:
        raise RuntimeError(f"Unknown option '{p.invalidArgs[0]}'")

    if missing:
        raise RuntimeError(f"Expected value for option '--{missing[0].longName}'")

    _checkOperands(own)

    return opts


# --- Commands --------------------------------------------------------------- #


@dt.dataclass
class Command:
    shortName: Optional[str]
    longName: str
    description: str = ""
    callable: Optional[Callable[[Options], None]] = None


_commands: dict[str, Command] = {}


def command(shortName: Optional[str], longName: str, description: str = "") -> Callable:
    """
    Decorator for defining a command.

    Args:
        shortName: The short name of the command (e.g., "p" for "parse").
        longName: The long name of the command.
        description: A description of the command.
    """

    def wrap(fn: Callable[[Options], None]):
        _logger.debug(f"Registering command '{longName}'")
        if longName in _commands:
            raise ValueError(f"Command '{longName}' is already defined")

        _commands[longName] = Command(shortName, longName, description, fn)
        return fn

    return wrap


def lookup(name: str) -> Command:
    """Looks up a command by its long or short name."""
    if name in _commands:
        return _commands[name]
    for cmd in _commands.values():
        if cmd.shortName == name:
            return cmd
    raise RuntimeError(f"Unknown command '{name}'")


def usage():
    """Prints the usage message."""
    print(f"Usage: {const.ARGV0} <command> [options] [-- tokens...]")
    print()

    vt100.subtitle("Commands")
    for cmd in _commands.values():
        print(
            vt100.indent(
                f"{vt100.GREEN}{cmd.shortName or ' '}{vt100.RESET}  {cmd.longName} - {cmd.description}"
            )
        )
    print()

    vt100.subtitle("Options")
    for option in OPTIONS:
        print(vt100.indent(f"{option.usage()} {option.description}"))
    print()


def argv() -> list[str]:
    """Returns the command-line arguments, including the ones given through the environment."""
    args = sys.argv[1:]
    extra = os.environ.get(const.EXTRA_ARGS_ENV, None)
    if extra and args:
        return args[:1] + extra.split(" ") + args[1:]
    return args


def exec(args: list[str], setup: Optional[Callable[[Options], None]] = None):
    """Executes the command named by the first argument."""
    if len(args) == 0 or args[0] in ("-h", "--help"):
        usage()
        return

    cmd = lookup(args[0])
    opts = parseOptions(args[1:])

    if setup:
        setup(opts)

    _logger.info(f"Running command '{cmd.longName}'")
    if cmd.callable:
        cmd.callable(opts)
