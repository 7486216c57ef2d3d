import logging

from . import cli, vt100
from .processor import Processor, SwitchMatch

_logger = logging.getLogger(__name__)


def _trace(e: SwitchMatch):
    if e.isValidSwitch:
        _logger.info(f"Switch '{e.switch}' = {e.value!r}")
    else:
        _logger.info(f"Invalid argument {e.value!r}")


def build(opts: cli.Options) -> Processor:
    """Builds a processor from the switches and prefixes given on the command line."""
    p = Processor(
        prefixes=opts.prefix or None,
        ignoreCase=opts.ignoreCase,
        strict=opts.strict,
    )

    for name in opts.flag:
        p.registerHandler(name, _trace)

    for name in opts.option:
        p.registerHandler(name, _trace, expectsValue=True)

    p.onSwitchMatch(_trace)
    return p


def report(p: Processor):
    vt100.title("Switches")
    if p.argCount == 0:
        print(vt100.indent("No switches matched"))
    for name, value in p.switches.items():
        print(vt100.indent(f"{vt100.GREEN}{name}{vt100.RESET} = {vt100.value(value)}"))
    print()

    if p.invalidArgs:
        vt100.subtitle("Invalid arguments")
        for token in p.invalidArgs:
            print(vt100.indent(f"{vt100.RED}{token}{vt100.RESET}"))
        print()


@cli.command("p", "parse", "Process tokens against a switch table and show the result")
def parseCmd(opts: cli.Options):
    p = build(opts)
    p.process(opts.operands)
    report(p)

    if p.invalidArgs:
        vt100.warning(f"{len(p.invalidArgs)} invalid argument(s)")
