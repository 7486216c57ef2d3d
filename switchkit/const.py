import os


VERSION = (0, 1, 0)
VERSION_STR = f"{VERSION[0]}.{VERSION[1]}.{VERSION[2]}{'-' +  str(VERSION[-1]) if len(VERSION) > 3 else ''}"


ARGV0 = "switchkit"
DESCRIPTION = "A prefix-driven command-line switch processor with callback dispatch"
DEFAULT_PREFIXES = ["-", "/"]
INVALID_SWITCH = "INVALID"
EXTRA_ARGS_ENV = "SWITCHKIT_EXTRA_ARGS"
GLOBAL_DIR = os.path.join(os.path.expanduser("~"), ".switchkit")
GLOBAL_LOG_FILE: str = os.path.join(GLOBAL_DIR, "switchkit.log")
