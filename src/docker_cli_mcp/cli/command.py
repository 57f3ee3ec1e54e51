"""Command-line lowering primitives.

A ``CommandSpec`` is the immutable token list for one container engine
invocation, without the binary name. ``CommandBuilder`` accumulates tokens in
call order using the four lowering rules shared by every tool:

- ``flag``: bare flag when enabled, nothing when false or absent
- ``option``: flag/value pair when the value is present
- ``repeat``: one flag/value pair per element, in input order
- ``positional``/``extend``: raw tokens (targets, service names, commands)
"""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class CommandSpec:
    """Tokens for one container engine invocation.

    Attributes:
        subcommand: Sub-command words (e.g. "ps", "volume ls", "compose up")
        tokens: Full argument list passed after the binary name
    """

    subcommand: str
    tokens: tuple[str, ...]

    def argv(self, binary: str) -> list[str]:
        """Return the process argument vector for the given binary."""
        return [binary, *self.tokens]

    def __str__(self) -> str:
        return " ".join(self.tokens)


class CommandBuilder:
    """Ordered accumulator that lowers tool parameters into command tokens.

    Example:
        >>> CommandBuilder("stop").option("-t", 5).positional("web1").build().tokens
        ('stop', '-t', '5', 'web1')
    """

    def __init__(self, *subcommand: str) -> None:
        self._subcommand: list[str] = list(subcommand)
        self._tokens: list[str] = list(subcommand)

    def subcommand(self, word: str) -> "CommandBuilder":
        """Append a sub-command word that follows global options (e.g. compose's ``up``)."""
        self._subcommand.append(word)
        self._tokens.append(word)
        return self

    def flag(self, token: str, enabled: bool | None) -> "CommandBuilder":
        """Append a bare flag when ``enabled`` is true."""
        if enabled:
            self._tokens.append(token)
        return self

    def option(self, token: str, value: str | int | None) -> "CommandBuilder":
        """Append ``token value`` when the value is present.

        ``None`` and the empty string count as absent; ``0`` does not.
        """
        if value is None or value == "":
            return self
        self._tokens.extend((token, str(value)))
        return self

    def repeat(self, token: str, values: Iterable[str] | None) -> "CommandBuilder":
        """Append one ``token value`` pair per element, preserving order."""
        for value in values or ():
            self._tokens.extend((token, str(value)))
        return self

    def positional(self, *values: str) -> "CommandBuilder":
        """Append positional tokens."""
        self._tokens.extend(str(value) for value in values)
        return self

    def extend(self, values: Iterable[str] | None) -> "CommandBuilder":
        """Append a sequence of positional tokens (nothing when ``None``)."""
        self._tokens.extend(str(value) for value in values or ())
        return self

    def build(self) -> CommandSpec:
        """Freeze the accumulated tokens into a ``CommandSpec``."""
        return CommandSpec(subcommand=" ".join(self._subcommand), tokens=tuple(self._tokens))
