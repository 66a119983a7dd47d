"""
Schemes of Markov algorithms and their builder.

A scheme is an ordered, non-empty list of formulas over one alphabet.
Order is priority: the first formula whose pattern occurs in the word is
the one applied.

Definition format (.markov files, UTF-8):
    One formula per line, in priority order. Empty lines are not allowed.

    a→b
    b→c
    c→⋅4

Example:
    scheme = Scheme.from_definitions(["a→b", "b→c", "c→⋅4"])

    result = scheme.apply("aaabc", max_steps=10)
    result.word      # => "4cccc"
    result.steps     # => 8
    result.outcome   # => Outcome.TERMINATED
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .alphabet import Alphabet
from .engine import Session, apply_once, apply_scheme
from .errors import EmptyScheme, FormulaParseError
from .formula import Formula, check_formula_characters, parse_formula

logger = logging.getLogger(__name__)

DefinitionsType = Union[str, Iterable[str]]


def _definition_lines(definitions: DefinitionsType) -> List[str]:
    if isinstance(definitions, str):
        return definitions.splitlines()
    return list(definitions)


def load_definitions(path: Union[str, Path], encoding: str = "utf-8") -> List[str]:
    """Read definition lines from a scheme file."""
    path = Path(path)
    lines = path.read_text(encoding=encoding).splitlines()
    logger.info(f"Read {len(lines)} definitions from {path}")
    return lines


class Scheme:
    """
    An immutable, ordered collection of formulas over one alphabet.

    Create schemes with SchemeBuilder, Scheme.from_definitions() or
    Scheme.from_file(). A scheme holds no per-application state: every
    apply()/steps() call works on its own copy of the word, so one scheme
    can serve many threads at once.
    """

    __slots__ = ('_alphabet', '_formulas')

    def __init__(self, alphabet: Alphabet, formulas: Iterable[Formula]):
        formulas = tuple(formulas)
        if not formulas:
            raise EmptyScheme()
        for formula in formulas:
            check_formula_characters(formula, alphabet)
        object.__setattr__(self, '_alphabet', alphabet)
        object.__setattr__(self, '_formulas', formulas)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_definitions(cls, definitions: DefinitionsType,
                         alphabet: Optional[Alphabet] = None) -> 'Scheme':
        """Build a scheme from definition text (one formula per line) or lines."""
        return SchemeBuilder(alphabet).add_definitions(definitions).build()

    @classmethod
    def from_file(cls, path: Union[str, Path], alphabet: Optional[Alphabet] = None,
                  encoding: str = "utf-8") -> 'Scheme':
        """Build a scheme from a definition file."""
        return cls.from_definitions(load_definitions(path, encoding), alphabet)

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def formulas(self) -> Tuple[Formula, ...]:
        return self._formulas

    # ============================================================
    # Application
    # ============================================================

    def apply(self, word: str, max_steps: int, trace: bool = False,
              strict: bool = False, allow_extension: bool = True):
        """
        Apply the scheme to a word until it terminates, halts, or runs out of steps.

        See engine.apply_scheme() for the arguments.

        Returns:
            ApplicationResult, or (ApplicationResult, RewriteTrace) if trace=True.
        """
        return apply_scheme(self, word, max_steps, trace=trace, strict=strict,
                            allow_extension=allow_extension)

    def apply_once(self, word: str, allow_extension: bool = True):
        """Apply at most one formula; returns the RewriteStep or None."""
        return apply_once(self, word, allow_extension=allow_extension)

    def steps(self, word: str, max_steps: int, allow_extension: bool = True) -> Session:
        """Return a new lazy Session that applies the scheme one step at a time."""
        return Session(self, word, max_steps, allow_extension)

    # ============================================================
    # Export
    # ============================================================

    def to_definitions(self) -> str:
        """Definition text of the scheme, one formula per line."""
        return "\n".join(f.to_definition(self._alphabet) for f in self._formulas)

    def list_formulas(self) -> List[str]:
        """Numbered formula definitions, in priority order."""
        return [f"{i}. {f.to_definition(self._alphabet)}"
                for i, f in enumerate(self._formulas, 1)]

    def __len__(self) -> int:
        return len(self._formulas)

    def __iter__(self) -> Iterator[Formula]:
        return iter(self._formulas)

    def __getitem__(self, index: int) -> Formula:
        return self._formulas[index]

    def __eq__(self, other):
        if isinstance(other, Scheme):
            return self._alphabet == other._alphabet and self._formulas == other._formulas
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._alphabet, self._formulas))

    def __repr__(self) -> str:
        return f"Scheme({len(self._formulas)} formulas)"


class SchemeBuilder:
    """
    Accumulates formulas and definition lines, then builds a Scheme.

    Definition lines are parsed by build(), against the alphabet and
    reserved characters in effect at that moment, in accumulation order.
    Without an alphabet the default one (Latin letters, digits, '|') is used.

    Example:
        scheme = (SchemeBuilder()
            .with_alphabet(Alphabet.parse("abc").extend("d"))
            .add_definition("a→⋅d")
            .build())

        scheme = (SchemeBuilder()
            .with_delimiter(">")
            .with_final_marker("!")
            .add_definitions("a>b\\nb>!c")
            .build())
    """

    def __init__(self, alphabet: Optional[Alphabet] = None):
        self._alphabet: Optional[Alphabet] = alphabet
        self._delimiter: Optional[str] = None
        self._final_marker: Optional[str] = None
        self._entries: List[Union[Formula, str]] = []

    def with_alphabet(self, alphabet: Alphabet) -> 'SchemeBuilder':
        """Set the alphabet; replaces any prior one."""
        self._alphabet = alphabet
        return self

    def with_delimiter(self, delimiter: str) -> 'SchemeBuilder':
        """Override the alphabet's delimiter."""
        self._delimiter = delimiter
        return self

    def with_final_marker(self, final_marker: str) -> 'SchemeBuilder':
        """Override the alphabet's final marker."""
        self._final_marker = final_marker
        return self

    def add_formula(self, formula: Formula) -> 'SchemeBuilder':
        self._entries.append(formula)
        return self

    def add_formulas(self, formulas: Iterable[Formula]) -> 'SchemeBuilder':
        self._entries.extend(formulas)
        return self

    def add_definition(self, line: str) -> 'SchemeBuilder':
        self._entries.append(line)
        return self

    def add_definitions(self, definitions: DefinitionsType) -> 'SchemeBuilder':
        """Add definition lines; a string is split into lines."""
        self._entries.extend(_definition_lines(definitions))
        return self

    def load_file(self, path: Union[str, Path], encoding: str = "utf-8") -> 'SchemeBuilder':
        """Add the definition lines of a scheme file."""
        return self.add_definitions(load_definitions(path, encoding))

    def alphabet(self) -> Alphabet:
        """The alphabet build() will use, reserved overrides applied."""
        alphabet = self._alphabet if self._alphabet is not None else Alphabet.default()
        if self._delimiter is not None or self._final_marker is not None:
            alphabet = alphabet.with_reserved(self._delimiter, self._final_marker)
        return alphabet

    def build(self) -> Scheme:
        """
        Build the scheme.

        Raises:
            ConfigurationError: the reserved overrides clash with the alphabet.
            FormulaParseError: a definition line is malformed; line_number is
                its 1-based position among the accumulated entries.
            InvalidCharacter: a directly added formula uses a character
                outside the alphabet.
            EmptyScheme: nothing was accumulated.
        """
        if not self._entries:
            raise EmptyScheme()

        alphabet = self.alphabet()
        formulas = []
        for number, entry in enumerate(self._entries, 1):
            try:
                if isinstance(entry, Formula):
                    check_formula_characters(entry, alphabet)
                    formulas.append(entry)
                else:
                    formulas.append(parse_formula(entry, alphabet))
            except FormulaParseError as e:
                raise e.at_line(number)

        logger.debug(f"Built scheme of {len(formulas)} formulas")
        return Scheme(alphabet, formulas)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SchemeBuilder({len(self._entries)} entries)"
