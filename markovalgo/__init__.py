"""
markovalgo - Markov normal algorithms

An interpreter for Markov algorithms: an ordered list of string rewrite
rules (formulas) is applied to a word, always using the first formula whose
pattern occurs in the word, on its leftmost occurrence, until a final
formula fires, no formula applies, or the step budget runs out.

Quick Start:
    from markovalgo import Alphabet, Scheme

    alphabet = Alphabet.parse("abc").extend("4")
    scheme = Scheme.from_definitions(["a→b", "b→c", "c→⋅4"], alphabet)

    result = scheme.apply("aaabc", max_steps=10)
    result.word      # => "4cccc"
    result.steps     # => 8
    result.outcome   # => Outcome.TERMINATED

Definition Syntax:
    pattern→replacement      simple formula
    pattern→⋅replacement     final formula, stops the algorithm
    →replacement             empty pattern, inserts at the start

Stepwise Application:
    for step in scheme.steps("aaabc", max_steps=10):
        print(step.formula, step.word)
"""

__version__ = "0.1.0"

from .alphabet import (
    Alphabet,
    DEFAULT_ALPHABET,
    DEFAULT_DELIMITER,
    DEFAULT_FINAL_MARKER,
)

from .formula import Formula, parse_formula

from .scheme import Scheme, SchemeBuilder, load_definitions

from .engine import (
    Outcome,
    Session,
    RewriteStep,
    RewriteTrace,
    ApplicationResult,
    rewrite_step,
    apply_scheme,
    apply_once,
)

from .errors import (
    MarkovError,
    # Configuration
    ConfigurationError,
    EmptyAlphabet,
    DuplicateCharacter,
    CharacterAlreadyPresent,
    ReservedCharacterConflict,
    InvalidReservedCharacter,
    # Parsing
    FormulaParseError,
    EmptyDefinition,
    MissingDelimiter,
    MultipleDelimiters,
    InvalidCharacter,
    # Construction
    SchemeConstructionError,
    EmptyScheme,
    # Application
    ApplicationError,
    WordContainsInvalidCharacter,
    WordContainsExtensionCharacter,
    InvalidStepLimit,
    StepLimitExceeded,
)

__all__ = [
    "__version__",
    # Alphabet
    "Alphabet",
    "DEFAULT_ALPHABET",
    "DEFAULT_DELIMITER",
    "DEFAULT_FINAL_MARKER",
    # Formulas
    "Formula",
    "parse_formula",
    # Schemes
    "Scheme",
    "SchemeBuilder",
    "load_definitions",
    # Engine
    "Outcome",
    "Session",
    "RewriteStep",
    "RewriteTrace",
    "ApplicationResult",
    "rewrite_step",
    "apply_scheme",
    "apply_once",
    # Errors
    "MarkovError",
    "ConfigurationError",
    "EmptyAlphabet",
    "DuplicateCharacter",
    "CharacterAlreadyPresent",
    "ReservedCharacterConflict",
    "InvalidReservedCharacter",
    "FormulaParseError",
    "EmptyDefinition",
    "MissingDelimiter",
    "MultipleDelimiters",
    "InvalidCharacter",
    "SchemeConstructionError",
    "EmptyScheme",
    "ApplicationError",
    "WordContainsInvalidCharacter",
    "WordContainsExtensionCharacter",
    "InvalidStepLimit",
    "StepLimitExceeded",
]
