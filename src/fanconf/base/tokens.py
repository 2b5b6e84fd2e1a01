"""Token extraction for the line-oriented configuration grammar.

A Token bounds a substring of a source line. Locating a token and
converting it to a typed value are separate steps: the caller checks
``found`` first, then asks for a conversion that either yields a new
value or hands back the value the caller already had.
"""

from typing import Callable, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

Predicate = Callable[[str], bool]

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


class TokenNotFoundError(LookupError):
    """Raised when converting a token that was never located."""


def parse_bool(text: str) -> bool:
    """Convert a boolean token.

    Raises:
        ValueError: If the text is not a recognised boolean word
    """
    word = text.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"Not a boolean: {text!r}")


def is_digit(ch: str) -> bool:
    """ASCII digits only; str.isdigit also accepts superscripts."""
    return "0" <= ch <= "9"


def is_not_space(ch: str) -> bool:
    return not ch.isspace()


def any_char(ch: str) -> bool:
    return True


class Token(BaseModel):
    """A bounded span ``line[begin:end]`` and whether it was located.

    Tokens are built by ``scan`` or ``after`` and consumed immediately;
    they hold the source line so the span can always be sliced back out.
    """

    model_config = ConfigDict(frozen=True)

    line: str = Field(description="Source line the span points into")
    begin: int = Field(ge=0, description="Start index of the span")
    end: int = Field(ge=0, description="End index (exclusive) of the span")
    found: bool = Field(description="Whether a non-empty span was located")

    @classmethod
    def scan(cls, line: str, start: int, predicate: Predicate) -> "Token":
        """Bound the run of characters satisfying ``predicate`` at ``start``.

        Args:
            line: Source line
            start: Index the run must begin at
            predicate: Returns True for characters that belong to the token

        Returns:
            Token whose ``found`` is False for an empty run or a start
            outside the line
        """
        if start < 0 or start >= len(line):
            position = min(max(start, 0), len(line))
            return cls(line=line, begin=position, end=position, found=False)

        end = start
        while end < len(line) and predicate(line[end]):
            end += 1
        return cls(line=line, begin=start, end=end, found=end > start)

    @classmethod
    def after(
        cls,
        line: str,
        separator: str,
        predicate: Predicate,
        start: int = 0,
    ) -> "Token":
        """Locate ``separator`` and bound the run of characters after it.

        Args:
            line: Source line
            separator: Single character or fixed substring to search for
            predicate: Returns True for characters that belong to the token
            start: Index the separator search begins at

        Returns:
            Token whose ``found`` is False if the separator is missing or
            nothing satisfying ``predicate`` follows it
        """
        position = line.find(separator, max(start, 0)) if separator else -1
        if position < 0:
            return cls(line=line, begin=len(line), end=len(line), found=False)
        return cls.scan(line, position + len(separator), predicate)

    @property
    def text(self) -> str:
        """Return the bounded substring."""
        return self.line[self.begin : self.end]

    def convert(self, kind: Callable[[str], T], current: T) -> T:
        """Convert the token text, keeping ``current`` if it won't parse.

        Args:
            kind: Converter such as ``int`` or ``parse_bool``
            current: Value the caller holds before conversion

        Returns:
            The converted value, or ``current`` unchanged when ``kind``
            rejects the text

        Raises:
            TokenNotFoundError: If the token was not found
        """
        if not self.found:
            raise TokenNotFoundError(
                f"Cannot convert a token that was not found in {self.line!r}"
            )
        try:
            return kind(self.text)
        except (OverflowError, TypeError, ValueError):
            return current

    def followed_by(self, symbol: str) -> bool:
        """Check whether ``symbol`` appears directly after the span."""
        return self.line.startswith(symbol, self.end)
