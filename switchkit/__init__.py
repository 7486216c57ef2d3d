import os
import logging

from . import (
    cli,
    cmds,  # noqa: F401 this is imported for side effects
    const,
    graph,  # noqa: F401 this is imported for side effects
    vt100,
)
from .processor import ConfigurationError, Handler, Processor, SwitchMatch

__all__ = [
    "ConfigurationError",
    "Handler",
    "Processor",
    "SwitchMatch",
    "main",
]


class logger:
    @staticmethod
    def setup(opts: cli.Options):
        if opts.verbose:
            logging.basicConfig(
                level=logging.DEBUG,
                format=f"{vt100.CYAN}%(asctime)s{vt100.RESET} {vt100.YELLOW}%(levelname)s{vt100.RESET} %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        else:
            os.makedirs(const.GLOBAL_DIR, exist_ok=True)

            logging.basicConfig(
                level=logging.INFO,
                filename=const.GLOBAL_LOG_FILE,
                filemode="w",
                format="%(asctime)s %(levelname)s %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )


@cli.command("u", "usage", "Show usage information")
def _(opts: cli.Options):
    cli.usage()


@cli.command(None, "version", "Show current version")
def _(opts: cli.Options):
    print(f"SwitchKit v{const.VERSION_STR}")


def main() -> int:
    try:
        cli.exec(cli.argv(), setup=logger.setup)
        return 0

    except (RuntimeError, ValueError) as e:
        logging.exception(e)
        vt100.error(str(e))
        cli.usage()
        return 1

    except KeyboardInterrupt:
        print()
        return 1
