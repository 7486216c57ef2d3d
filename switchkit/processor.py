import re
import logging
import dataclasses as dt

from typing import Callable, Optional, Sequence, TypeVar
from . import const

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConfigurationError(ValueError):
    pass


# --- Events ----------------------------------------------------------------- #


@dt.dataclass(frozen=True)
class SwitchMatch:
    """
    Notification passed to switch callbacks.

    Attributes:
        switch: The registered switch name, or `const.INVALID_SWITCH` for an unknown switch.
        value: The switch value, the raw token for an unknown switch, or None.
        isValidSwitch: False when the token did not match a registered switch.
    """

    switch: str
    value: Optional[str]
    isValidSwitch: bool = True


Callback = Callable[[SwitchMatch], None]


@dt.dataclass
class Handler:
    name: str
    callback: Callback
    expectsValue: bool = False


# --- Processor -------------------------------------------------------------- #


class Processor:
    """
    A single pass command-line switch processor.

    Switches are recognized by their prefix (`-`, `/`, ...), looked up in the
    handler registry and dispatched to their callback in command-line order.
    Tokens without a prefix are values, they are consumed by the preceding
    switch or skipped.
    """

    ignoreCase: bool
    strict: bool

    _prefixes: list[re.Pattern]
    _handlers: dict[str, Handler]
    _listeners: list[Callback]
    _switches: dict[str, Optional[str]]
    _invalid: list[str]

    def __init__(
        self,
        prefixes: Optional[Sequence[str]] = None,
        ignoreCase: bool = False,
        strict: bool = False,
    ):
        """
        Args:
            prefixes: Prefix patterns to use instead of the defaults (`-` and `/`).
            ignoreCase: Match switch names and prefixes case-insensitively.
            strict: Reject switches that take no value when given one with `=`.
        """
        self.ignoreCase = ignoreCase
        self.strict = strict

        self._prefixes = []
        self._handlers = {}
        self._listeners = []
        self._switches = {}
        self._invalid = []

        for pattern in const.DEFAULT_PREFIXES if prefixes is None else prefixes:
            self.addPrefixPattern(pattern)

    # --- Configuration ------------------------------------------------------ #

    def addPrefixPattern(self, pattern: str):
        """Appends a regular expression matched against the start of each token."""
        if not isinstance(pattern, str) or len(pattern) == 0:
            raise ConfigurationError(f"Invalid prefix pattern {pattern!r}")

        try:
            self._prefixes.append(re.compile(pattern))
        except re.error as e:
            raise ConfigurationError(f"Invalid prefix pattern '{pattern}': {e}") from e

    def registerHandler(self, name: str, callback: Callback, expectsValue: bool = False):
        """
        Associates a switch name with a callback.

        Registering the same name again replaces the previous handler.
        """
        if not isinstance(name, str) or len(name) == 0:
            raise ConfigurationError(f"Invalid switch name {name!r}")

        if not callable(callback):
            raise ConfigurationError(f"Handler for switch '{name}' is not callable")

        key = self._lookup(self._handlers, name)
        if key is not None:
            _logger.info(f"Replacing handler for switch '{key}'")
            del self._handlers[key]
        else:
            _logger.debug(f"Registering handler for switch '{name}'")

        self._handlers[name] = Handler(name, callback, expectsValue)

    def onSwitchMatch(self, callback: Callback):
        """Subscribes a listener for matches that have no specific handler."""
        if not callable(callback):
            raise ConfigurationError("Switch match listener is not callable")
        self._listeners.append(callback)

    # --- Processing --------------------------------------------------------- #

    def _stripPrefix(self, token: str) -> Optional[str]:
        for prefix in self._prefixes:
            if self.ignoreCase:
                prefix = re.compile(prefix.pattern, prefix.flags | re.IGNORECASE)

            m = prefix.match(token)
            if m and m.end() > 0:
                return token[m.end() :]
        return None

    def _lookup(self, mapping: dict[str, T], name: str) -> Optional[str]:
        """Returns the key under which `name` is stored in `mapping`."""
        if name in mapping:
            return name

        if self.ignoreCase:
            folded = name.lower()
            for key in mapping:
                if key.lower() == folded:
                    return key

        return None

    def _dispatch(self, e: SwitchMatch):
        handler = self._handlers.get(e.switch) if e.isValidSwitch else None
        if handler:
            handler.callback(e)
        else:
            for listener in self._listeners:
                listener(e)

    def _reject(self, token: str, reason: str):
        _logger.info(f"Invalid argument '{token}': {reason}")
        self._invalid.append(token)
        self._dispatch(SwitchMatch(const.INVALID_SWITCH, token, False))

    def process(self, args: Sequence[str]):
        """
        Processes the command-line arguments and invokes the matching handlers.

        Unknown switches are collected in `invalidArgs`, nothing is raised for
        malformed input. Results accumulate across calls.
        """
        i = 0
        while i < len(args):
            token = args[i]
            i += 1

            raw = self._stripPrefix(token)
            if raw is None:
                _logger.debug(f"Skipping '{token}'")
                continue

            name, sep, inline = raw.partition("=")
            key = self._lookup(self._handlers, name)
            if key is None:
                self._reject(token, f"unknown switch '{name}'")
                continue

            handler = self._handlers[key]
            value: Optional[str] = None

            if handler.expectsValue:
                if sep:
                    value = inline
                elif i < len(args):
                    value = args[i]
                    i += 1
                else:
                    _logger.info(f"Switch '{key}' expects a value but none was given")
            elif sep:
                if self.strict:
                    self._reject(token, f"switch '{key}' takes no value")
                    continue
                _logger.info(f"Discarding value '{inline}' given to switch '{key}'")

            _logger.debug(f"Matched switch '{key}' with value {value!r}")
            self._switches[key] = value
            self._dispatch(SwitchMatch(key, value))

    # --- Results ------------------------------------------------------------ #

    @property
    def argCount(self) -> int:
        return len(self._switches)

    @property
    def invalidArgs(self) -> list[str]:
        return list(self._invalid)

    @property
    def switches(self) -> dict[str, Optional[str]]:
        return dict(self._switches)

    @property
    def handlers(self) -> dict[str, Handler]:
        return dict(self._handlers)

    @property
    def prefixPatterns(self) -> list[str]:
        return [p.pattern for p in self._prefixes]

    def _resolve(self, name: str) -> Optional[str]:
        raw = self._stripPrefix(name)
        return self._lookup(self._switches, name if raw is None else raw)

    def containsSwitch(self, name: str) -> bool:
        """Checks if a switch was parsed, `name` may carry a prefix (`-foo`) or not (`foo`)."""
        return self._resolve(name) is not None

    def get(self, name: str) -> Optional[str]:
        """Returns the value of a parsed switch, or None if it has none or was not given."""
        key = self._resolve(name)
        if key is None:
            return None
        return self._switches[key]

    def __contains__(self, name: str) -> bool:
        return self.containsSwitch(name)
