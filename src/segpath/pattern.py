"""Shell-style wildcard matching for a single file name.

Grammar
-------
- ordinary characters match themselves (case-sensitive);
- ``?`` matches exactly one character;
- ``*`` matches any run of characters, including the empty run;
- ``[...]`` matches one character from a set. A leading ``^`` or ``!``
  negates the set, ``]`` or ``-`` in first position are literal, ``a-z``
  is a range and ``[:class:]`` names a POSIX character class. A bracket
  with no closing ``]`` is a literal ``[``;
- ``\\x`` matches ``x`` literally.

Patterns know nothing about path separators; recursion belongs to the
walker.

Matching is tail-anchored: the run after the last ``*`` is pinned to the
end of the name, and the star-delimited runs before it are located left
to right, each sliding one character at a time. No ``*`` placement is
ever revisited, so a match costs at most pattern length times name
length.
"""

from __future__ import annotations

import enum
import functools
import string
import unicodedata
from dataclasses import dataclass
from typing import Callable, Final


def _is_blank(ch: str) -> bool:
    return ch in " \t"


def _is_cntrl(ch: str) -> bool:
    return unicodedata.category(ch) == "Cc"


def _is_digit(ch: str) -> bool:
    return ch in string.digits


def _is_graph(ch: str) -> bool:
    return ch.isprintable() and not ch.isspace()


def _is_punct(ch: str) -> bool:
    if ch.isascii():
        return ch in string.punctuation
    return unicodedata.category(ch)[0] in "PS"


def _is_xdigit(ch: str) -> bool:
    return ch in string.hexdigits


CHAR_CLASSES: Final[dict[str, Callable[[str], bool]]] = {
    "alnum": str.isalnum,
    "alpha": str.isalpha,
    "blank": _is_blank,
    "cntrl": _is_cntrl,
    "digit": _is_digit,
    "graph": _is_graph,
    "lower": str.islower,
    "print": str.isprintable,
    "punct": _is_punct,
    "space": str.isspace,
    "upper": str.isupper,
    "xdigit": _is_xdigit,
}


@dataclass(frozen=True, slots=True)
class BracketExpr:
    """A parsed ``[...]`` expression.

    Attributes:
        negated: Whether membership is inverted.
        chars: Literal member characters.
        ranges: Inclusive ``(low, high)`` ranges. An inverted range such
            as ``z-a`` adds no range; both of its ends land in ``chars``.
        classes: Named classes. Unknown names match nothing.
    """

    negated: bool = False
    chars: frozenset[str] = frozenset()
    ranges: tuple[tuple[str, str], ...] = ()
    classes: tuple[str, ...] = ()

    def contains(self, ch: str) -> bool:
        hit = (
            ch in self.chars
            or any(low <= ch <= high for low, high in self.ranges)
            or any(
                CHAR_CLASSES[name](ch) for name in self.classes if name in CHAR_CLASSES
            )
        )
        return hit != self.negated


class TokenKind(enum.Enum):
    LITERAL = "literal"
    ANY = "any"
    STAR = "star"
    BRACKET = "bracket"


@dataclass(frozen=True, slots=True)
class Token:
    """One matching unit of a pattern.

    Every kind except ``STAR`` consumes exactly one character.
    """

    kind: TokenKind
    char: str = ""
    bracket: BracketExpr | None = None

    def matches(self, ch: str) -> bool:
        if self.kind is TokenKind.LITERAL:
            return ch == self.char
        if self.kind is TokenKind.ANY:
            return True
        if self.kind is TokenKind.BRACKET and self.bracket is not None:
            return self.bracket.contains(ch)
        return False


_STAR_TOKEN: Final = Token(TokenKind.STAR)
_ANY_TOKEN: Final = Token(TokenKind.ANY)


def _find_bracket_end(pattern: str, start: int) -> int:
    """Return the index of the ``]`` closing the bracket at *start*.

    Args:
        pattern: Full pattern text.
        start: Index of the opening ``[``.

    Returns:
        int: Index of the closing ``]``, or ``-1`` when unterminated.
    """
    n = len(pattern)
    k = start + 1
    if k < n and pattern[k] in "^!":
        k += 1
    if k < n and pattern[k] == "]":
        k += 1
    while k < n and pattern[k] != "]":
        if pattern[k] == "[" and k + 1 < n and pattern[k + 1] in ":.=":
            close = pattern.find(pattern[k + 1] + "]", k + 2)
            if close < 0:
                return -1
            k = close + 2
            continue
        k += 1
    return k if k < n else -1


def _parse_bracket(body: str) -> BracketExpr:
    """Parse the text between ``[`` and its closing ``]``.

    *body* has already been delimited by :func:`_find_bracket_end`, so
    every ``[:``, ``[.`` and ``[=`` opener inside it is closed.
    """
    negated = False
    i = 0
    if body[:1] in ("^", "!") and body:
        negated = True
        i = 1

    chars: set[str] = set()
    ranges: list[tuple[str, str]] = []
    classes: list[str] = []
    prev: str | None = None

    # ] or - right after the opener (and optional negation) is literal
    if i < len(body) and body[i] in "]-":
        prev = body[i]
        chars.add(prev)
        i += 1

    while i < len(body):
        ch = body[i]
        if ch == "[" and i + 1 < len(body) and body[i + 1] in ":.=":
            delim = body[i + 1]
            close = body.find(delim + "]", i + 2)
            content = body[i + 2 : close]
            if delim == ":":
                classes.append(content)
                prev = None
            elif len(content) == 1:
                chars.add(content)
                prev = content
            i = close + 2
            continue
        if ch == "-" and prev is not None and i + 1 < len(body):
            high = body[i + 1]
            if prev <= high:
                ranges.append((prev, high))
            else:
                chars.add(high)
            prev = high
            i += 2
            continue
        chars.add(ch)
        prev = ch
        i += 1

    return BracketExpr(
        negated=negated,
        chars=frozenset(chars),
        ranges=tuple(ranges),
        classes=tuple(classes),
    )


def tokenize(pattern: str) -> tuple[Token, ...]:
    """Split *pattern* into matching units.

    Consecutive stars collapse into one ``STAR`` token.

    Args:
        pattern: Wildcard pattern text.

    Returns:
        tuple[Token, ...]: Tokens in pattern order.
    """
    tokens: list[Token] = []
    n = len(pattern)
    i = 0
    while i < n:
        ch = pattern[i]
        if ch == "\\" and i + 1 < n:
            tokens.append(Token(TokenKind.LITERAL, pattern[i + 1]))
            i += 2
            continue
        if ch == "[":
            end = _find_bracket_end(pattern, i)
            if end >= 0:
                bracket = _parse_bracket(pattern[i + 1 : end])
                tokens.append(Token(TokenKind.BRACKET, bracket=bracket))
                i = end + 1
                continue
            tokens.append(Token(TokenKind.LITERAL, "["))
        elif ch == "*":
            if not tokens or tokens[-1].kind is not TokenKind.STAR:
                tokens.append(_STAR_TOKEN)
        elif ch == "?":
            tokens.append(_ANY_TOKEN)
        else:
            tokens.append(Token(TokenKind.LITERAL, ch))
        i += 1
    return tuple(tokens)


def _match_run(run: tuple[Token, ...], name: str, start: int) -> bool:
    """Match *run* unit-for-unit against ``name[start:]``.

    The caller guarantees ``start + len(run) <= len(name)``.
    """
    return all(token.matches(name[start + offset]) for offset, token in enumerate(run))


def _find_run(run: tuple[Token, ...], name: str, start: int, stop: int) -> int:
    """Locate the first placement of *run* in ``name[start:stop]``.

    Returns:
        int: Index just past the matched run, or ``-1``.
    """
    for pos in range(start, stop - len(run) + 1):
        if _match_run(run, name, pos):
            return pos + len(run)
    return -1


class Pattern:
    """A compiled wildcard pattern.

    The pattern is split once into three parts: the *head* before the
    first ``*``, the *tail* after the last ``*``, and the star-delimited
    *components* in between.

    Example::

        >>> Pattern("*.tar.*").matches("backup.tar.gz")
        True
    """

    __slots__ = ("text", "_head", "_components", "_tail", "_has_star")

    def __init__(self, text: str) -> None:
        self.text = text
        tokens = tokenize(text)
        stars = [i for i, token in enumerate(tokens) if token.kind is TokenKind.STAR]
        self._has_star = bool(stars)

        if not stars:
            self._head = tokens
            self._tail: tuple[Token, ...] = ()
            self._components: tuple[tuple[Token, ...], ...] = ()
            return

        first, last = stars[0], stars[-1]
        self._head = tokens[:first]
        self._tail = tokens[last + 1 :]

        components: list[tuple[Token, ...]] = []
        run: list[Token] = []
        for token in tokens[first + 1 : last]:
            if token.kind is TokenKind.STAR:
                components.append(tuple(run))
                run = []
            else:
                run.append(token)
        if run:
            components.append(tuple(run))
        self._components = tuple(c for c in components if c)

    def matches(self, name: str) -> bool:
        """Return whether *name* matches this pattern.

        Args:
            name: A single file name (no separators are interpreted).

        Returns:
            bool: ``True`` on a full match.
        """
        head_len = len(self._head)
        if not self._has_star:
            return len(name) == head_len and _match_run(self._head, name, 0)

        if len(name) < head_len + len(self._tail):
            return False
        if not _match_run(self._head, name, 0):
            return False

        tail_start = len(name) - len(self._tail)
        if not _match_run(self._tail, name, tail_start):
            return False

        cursor = head_len
        for component in self._components:
            cursor = _find_run(component, name, cursor, tail_start)
            if cursor < 0:
                return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pattern):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)

    def __repr__(self) -> str:
        return f"Pattern({self.text!r})"


@functools.lru_cache(maxsize=256)
def compile_pattern(text: str) -> Pattern:
    """Compile *text*, reusing earlier compilations of the same text."""
    return Pattern(text)


def pattern_matches(pattern: str, name: str) -> bool:
    """Return whether file *name* matches wildcard *pattern*.

    Args:
        pattern: Wildcard pattern (see module docstring for grammar).
        name: A single file name.

    Returns:
        bool: ``True`` on a full, case-sensitive match.
    """
    return compile_pattern(pattern).matches(name)


def has_magic(text: str) -> bool:
    """Return whether *text* holds any unescaped wildcard construct."""
    return any(token.kind is not TokenKind.LITERAL for token in tokenize(text))
