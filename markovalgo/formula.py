"""
Substitution formulas and their textual definitions.

Definition syntax (one formula per line):
    pattern→replacement      simple formula
    pattern→⋅replacement     final formula
    →replacement             empty pattern: inserts at the start of the word

The delimiter and the final marker come from the alphabet, the defaults
are shown above. Pattern and replacement may each be empty.
"""

from typing import Dict, Optional

from .alphabet import Alphabet, DEFAULT_DELIMITER, DEFAULT_FINAL_MARKER
from .errors import (
    EmptyDefinition,
    InvalidCharacter,
    MissingDelimiter,
    MultipleDelimiters,
)


class Formula:
    """
    One rewrite rule: pattern, replacement, and whether it is final.

    A final formula ends the application of its scheme when it fires;
    a simple one lets the scheme continue.
    """

    __slots__ = ('_pattern', '_replacement', '_final')

    def __init__(self, pattern: str, replacement: str, final: bool = False):
        object.__setattr__(self, '_pattern', pattern)
        object.__setattr__(self, '_replacement', replacement)
        object.__setattr__(self, '_final', bool(final))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def replacement(self) -> str:
        return self._replacement

    @property
    def is_final(self) -> bool:
        return self._final

    @property
    def is_simple(self) -> bool:
        return not self._final

    def find(self, word: str) -> int:
        """Index of the leftmost occurrence of the pattern, or -1."""
        return word.find(self._pattern)

    def apply(self, word: str) -> Optional[str]:
        """
        Replace the leftmost occurrence of the pattern in word.

        Returns None if the pattern does not occur. An empty pattern
        occurs at position 0 of every word, including the empty one.

        Examples:
            Formula("a", "d").apply("abca") -> "dbca"
            Formula("", "x").apply("abc")   -> "xabc"
            Formula("x", "y").apply("abc")  -> None
        """
        position = word.find(self._pattern)
        if position < 0:
            return None
        return word[:position] + self._replacement + word[position + len(self._pattern):]

    def format(self, delimiter: str = DEFAULT_DELIMITER,
               final_marker: str = DEFAULT_FINAL_MARKER) -> str:
        """Textual definition of the formula."""
        marker = final_marker if self._final else ""
        return f"{self._pattern}{delimiter}{marker}{self._replacement}"

    def to_definition(self, alphabet: Alphabet) -> str:
        """Textual definition using the reserved characters of an alphabet."""
        return self.format(alphabet.delimiter, alphabet.final_marker)

    def to_dict(self) -> Dict:
        return {
            "pattern": self._pattern,
            "replacement": self._replacement,
            "final": self._final,
        }

    def __eq__(self, other):
        if isinstance(other, Formula):
            return (self._pattern == other._pattern
                    and self._replacement == other._replacement
                    and self._final == other._final)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._pattern, self._replacement, self._final))

    def __repr__(self) -> str:
        kind = "final" if self._final else "simple"
        return f"Formula({self._pattern!r} -> {self._replacement!r}, {kind})"

    def __str__(self) -> str:
        return self.format()


def check_formula_characters(formula: Formula, alphabet: Alphabet,
                             definition: Optional[str] = None) -> None:
    """Raise InvalidCharacter for the first pattern/replacement character outside the alphabet."""
    if definition is None:
        definition = formula.to_definition(alphabet)
    for position, character in enumerate(formula.pattern):
        if character not in alphabet:
            raise InvalidCharacter(definition, character, position)
    offset = len(definition) - len(formula.replacement)
    for position, character in enumerate(formula.replacement, offset):
        if character not in alphabet:
            raise InvalidCharacter(definition, character, position)


def parse_formula(line: str, alphabet: Alphabet) -> Formula:
    """
    Parse one definition line against an alphabet.

    Grammar: <pattern><delimiter>[<final marker>]<replacement>

    Raises:
        EmptyDefinition: line is empty, or only whitespace that is not in the alphabet.
        MissingDelimiter: no delimiter in the line.
        MultipleDelimiters: more than one delimiter in the line.
        InvalidCharacter: a character outside the alphabet in pattern or
            replacement, including a final marker anywhere other than right
            after the delimiter.

    Examples:
        parse_formula("ab→c", alphabet)   -> Formula("ab", "c")
        parse_formula("a→⋅d", alphabet)   -> Formula("a", "d", final=True)
        parse_formula("→⋅", alphabet)     -> Formula("", "", final=True)
    """
    if not line or (line.isspace() and alphabet.invalid_characters(line)):
        raise EmptyDefinition(line)

    delimiter = alphabet.delimiter
    count = line.count(delimiter)
    if count == 0:
        raise MissingDelimiter(line, delimiter)
    if count > 1:
        raise MultipleDelimiters(line, delimiter, count)

    pattern, rest = line.split(delimiter, 1)
    final = rest.startswith(alphabet.final_marker)
    replacement = rest[1:] if final else rest

    formula = Formula(pattern, replacement, final)
    check_formula_characters(formula, alphabet, line)
    return formula
