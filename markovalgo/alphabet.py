"""
Alphabets for Markov algorithms.

An alphabet is the set of characters words, patterns and replacements may
be composed of, together with two reserved characters that are used only
in textual definitions:

    delimiter     separates a pattern from its replacement   (default →)
    final marker  follows the delimiter of a final formula   (default ⋅)

Characters given when the alphabet is parsed form its base; characters
added later with extend() form its extension. Both are members of the
alphabet. The distinction lets a caller keep auxiliary characters out of
input words (see Scheme.apply(allow_extension=False)).

Example:
    alphabet = Alphabet.parse("abc").extend("|").extend("+")

    "a" in alphabet         # => True
    "|" in alphabet         # => True
    "|" in alphabet.base    # => False
"""

import string
from typing import FrozenSet, Iterable, Iterator, Optional

from .errors import (
    CharacterAlreadyPresent,
    DuplicateCharacter,
    EmptyAlphabet,
    InvalidReservedCharacter,
    ReservedCharacterConflict,
)

DEFAULT_DELIMITER = "→"
DEFAULT_FINAL_MARKER = "⋅"
DEFAULT_ALPHABET = string.ascii_letters + string.digits + "|"


def _check_single_character(value, role: str) -> str:
    if not isinstance(value, str) or len(value) != 1:
        raise InvalidReservedCharacter(value, role)
    return value


class Alphabet:
    """
    Immutable set of legal characters plus the reserved delimiter and final marker.

    Alphabets are values: equal members and equal reserved characters make
    equal alphabets, and every "modifying" method returns a new instance.
    """

    __slots__ = ('_base', '_extension', '_delimiter', '_final_marker')

    def __init__(self, base: Iterable[str], extension: Iterable[str] = (),
                 delimiter: str = DEFAULT_DELIMITER,
                 final_marker: str = DEFAULT_FINAL_MARKER):
        base = frozenset(base)
        extension = frozenset(extension) - base
        delimiter = _check_single_character(delimiter, "delimiter")
        final_marker = _check_single_character(final_marker, "final marker")

        if not base and not extension:
            raise EmptyAlphabet()
        for character in base | extension:
            _check_single_character(character, "alphabet member")
        if delimiter == final_marker:
            raise ReservedCharacterConflict(final_marker, "delimiter")

        members = base | extension
        if delimiter in members:
            raise ReservedCharacterConflict(delimiter, "delimiter")
        if final_marker in members:
            raise ReservedCharacterConflict(final_marker, "final marker")

        object.__setattr__(self, '_base', base)
        object.__setattr__(self, '_extension', extension)
        object.__setattr__(self, '_delimiter', delimiter)
        object.__setattr__(self, '_final_marker', final_marker)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ============================================================
    # Construction
    # ============================================================

    @classmethod
    def parse(cls, text: str, delimiter: str = DEFAULT_DELIMITER,
              final_marker: str = DEFAULT_FINAL_MARKER,
              strict: bool = False) -> 'Alphabet':
        """
        Build an alphabet from the distinct characters of a string.

        Args:
            text: Characters of the alphabet.
            delimiter: Reserved character separating pattern and replacement.
            final_marker: Reserved character marking final formulas.
            strict: If True, a character repeated in text raises
                DuplicateCharacter. If False (default), repeats are folded.

        Examples:
            Alphabet.parse("abc")
            Alphabet.parse("aab")               # same as "ab"
            Alphabet.parse("aab", strict=True)  # raises DuplicateCharacter
        """
        if strict:
            seen = set()
            duplicates = []
            for character in text:
                if character in seen and character not in duplicates:
                    duplicates.append(character)
                seen.add(character)
            if duplicates:
                raise DuplicateCharacter("".join(duplicates), text)
        return cls(text, delimiter=delimiter, final_marker=final_marker)

    @classmethod
    def from_characters(cls, characters: Iterable[str],
                        delimiter: str = DEFAULT_DELIMITER,
                        final_marker: str = DEFAULT_FINAL_MARKER) -> 'Alphabet':
        """Build an alphabet from any iterable of single characters."""
        return cls(characters, delimiter=delimiter, final_marker=final_marker)

    @classmethod
    def default(cls) -> 'Alphabet':
        """Latin letters, digits and '|', with the default reserved characters."""
        return cls(DEFAULT_ALPHABET)

    def extend(self, character: str) -> 'Alphabet':
        """
        Return a new alphabet with one more (extension) character.

        Raises:
            CharacterAlreadyPresent: character is already a member.
            ReservedCharacterConflict: character is the delimiter or final marker.
        """
        character = _check_single_character(character, "alphabet member")
        if character in self:
            raise CharacterAlreadyPresent(character)
        if character == self._delimiter:
            raise ReservedCharacterConflict(character, "delimiter")
        if character == self._final_marker:
            raise ReservedCharacterConflict(character, "final marker")
        return Alphabet(self._base, self._extension | {character},
                        self._delimiter, self._final_marker)

    def extend_all(self, characters: Iterable[str]) -> 'Alphabet':
        """Extend with each character in turn; fails on the first invalid one."""
        alphabet = self
        for character in characters:
            alphabet = alphabet.extend(character)
        return alphabet

    def with_reserved(self, delimiter: Optional[str] = None,
                      final_marker: Optional[str] = None) -> 'Alphabet':
        """Return the same members with a different delimiter and/or final marker."""
        return Alphabet(
            self._base, self._extension,
            self._delimiter if delimiter is None else delimiter,
            self._final_marker if final_marker is None else final_marker,
        )

    # ============================================================
    # Accessors
    # ============================================================

    @property
    def characters(self) -> FrozenSet[str]:
        """All members, base and extension."""
        return self._base | self._extension

    @property
    def base(self) -> FrozenSet[str]:
        return self._base

    @property
    def extension(self) -> FrozenSet[str]:
        return self._extension

    @property
    def delimiter(self) -> str:
        return self._delimiter

    @property
    def final_marker(self) -> str:
        return self._final_marker

    @property
    def final_delimiter(self) -> str:
        """Delimiter immediately followed by the final marker."""
        return self._delimiter + self._final_marker

    def invalid_characters(self, text: str, base_only: bool = False) -> str:
        """
        Characters of text that are not members, in order of first appearance.

        With base_only=True, extension characters count as invalid too.
        """
        allowed = self._base if base_only else self.characters
        found = []
        for character in text:
            if character not in allowed and character not in found:
                found.append(character)
        return "".join(found)

    # ============================================================
    # Container protocol
    # ============================================================

    def __contains__(self, character) -> bool:
        return character in self._base or character in self._extension

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.characters))

    def __len__(self) -> int:
        return len(self._base) + len(self._extension)

    def __eq__(self, other):
        if isinstance(other, Alphabet):
            return (self._base == other._base
                    and self._extension == other._extension
                    and self._delimiter == other._delimiter
                    and self._final_marker == other._final_marker)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._base, self._extension, self._delimiter, self._final_marker))

    def __repr__(self) -> str:
        base = "".join(sorted(self._base))
        if self._extension:
            extension = "".join(sorted(self._extension))
            return (f"Alphabet({base!r}, extension={extension!r}, "
                    f"delimiter={self._delimiter!r}, final_marker={self._final_marker!r})")
        return (f"Alphabet({base!r}, delimiter={self._delimiter!r}, "
                f"final_marker={self._final_marker!r})")
