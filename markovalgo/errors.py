"""
Exceptions for markovalgo.

Every error raised by the package derives from MarkovError, and also from
ValueError, since all of them describe bad input (a malformed alphabet,
definition or word) rather than a failure of the interpreter itself.

Hierarchy:
    MarkovError
        ConfigurationError        - alphabet and reserved characters
        FormulaParseError         - a single definition line
        SchemeConstructionError   - assembling a scheme
        ApplicationError          - running a scheme on a word
"""

from typing import Optional


class MarkovError(ValueError):
    """Base class for all markovalgo errors."""


# ============================================================
# Configuration
# ============================================================

class ConfigurationError(MarkovError):
    """The alphabet or its reserved characters are not valid."""


class EmptyAlphabet(ConfigurationError):
    def __init__(self):
        super().__init__("an alphabet cannot be empty")


class DuplicateCharacter(ConfigurationError):
    def __init__(self, duplicates: str, definition: str):
        self.duplicates = duplicates
        self.definition = definition
        super().__init__(
            f"the same character cannot be included in the alphabet multiple times "
            f"(definition: \"{definition}\", duplicates: \"{duplicates}\")"
        )


class CharacterAlreadyPresent(ConfigurationError):
    def __init__(self, character: str):
        self.character = character
        super().__init__(f"the character '{character}' already belongs to the alphabet")


class ReservedCharacterConflict(ConfigurationError):
    def __init__(self, character: str, role: str):
        self.character = character
        self.role = role
        super().__init__(f"the character '{character}' is reserved as the {role}")


class InvalidReservedCharacter(ConfigurationError):
    def __init__(self, value, role: str):
        self.value = value
        self.role = role
        super().__init__(f"the {role} must be a single character, got {value!r}")


# ============================================================
# Formula parsing
# ============================================================

class FormulaParseError(MarkovError):
    """A definition line could not be parsed as a formula."""

    def __init__(self, message: str, definition: str):
        self.message = message
        self.definition = definition
        self.line_number: Optional[int] = None
        super().__init__(message)

    def at_line(self, line_number: int) -> 'FormulaParseError':
        """Attach the 1-based number of the definition in its scheme."""
        self.line_number = line_number
        self.args = (f"definition {line_number}: {self.message}",)
        return self


class EmptyDefinition(FormulaParseError):
    def __init__(self, definition: str = ""):
        super().__init__("an empty line was encountered in the scheme definition", definition)


class MissingDelimiter(FormulaParseError):
    def __init__(self, definition: str, delimiter: str):
        self.delimiter = delimiter
        super().__init__(
            f"no delimiter '{delimiter}' found in the formula \"{definition}\"", definition
        )


class MultipleDelimiters(FormulaParseError):
    def __init__(self, definition: str, delimiter: str, count: int):
        self.delimiter = delimiter
        self.count = count
        super().__init__(
            f"{count} delimiters '{delimiter}' found in the formula \"{definition}\", "
            f"expected exactly one",
            definition,
        )


class InvalidCharacter(FormulaParseError):
    def __init__(self, definition: str, character: str, position: int):
        self.character = character
        self.position = position
        super().__init__(
            f"unsupported character '{character}' at position {position} "
            f"in the formula \"{definition}\"",
            definition,
        )


# ============================================================
# Scheme construction
# ============================================================

class SchemeConstructionError(MarkovError):
    """A scheme could not be assembled."""


class EmptyScheme(SchemeConstructionError):
    def __init__(self):
        super().__init__("a scheme must contain at least one formula")


# ============================================================
# Application
# ============================================================

class ApplicationError(MarkovError):
    """A scheme could not be applied to a word."""


class WordContainsInvalidCharacter(ApplicationError):
    def __init__(self, word: str, characters: str):
        self.word = word
        self.characters = characters
        super().__init__(
            f"unsupported characters are found in the input word "
            f"(unsupported characters: \"{characters}\")"
        )


class WordContainsExtensionCharacter(WordContainsInvalidCharacter):
    def __init__(self, word: str, characters: str):
        super().__init__(word, characters)
        self.args = (
            f"extension characters are found in the input word "
            f"(extension characters: \"{characters}\")",
        )


class InvalidStepLimit(ApplicationError):
    def __init__(self, limit):
        self.limit = limit
        super().__init__(f"the algorithm should be allowed to do at least one step, got {limit!r}")


class StepLimitExceeded(ApplicationError):
    def __init__(self, limit: int, result):
        self.limit = limit
        self.result = result
        super().__init__(f"the application is not completed after reaching step {limit}")
