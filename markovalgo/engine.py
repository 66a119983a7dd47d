"""
Rewrite engine for Markov algorithms.

A scheme is applied to a word one step at a time:

    1. Scan the formulas in order; the applicable formula is the first one
       whose pattern occurs anywhere in the word. Priority is formula order,
       never the position of the occurrence.
    2. If no formula occurs, the application halts without a rewrite.
    3. Otherwise the leftmost occurrence of the pattern is replaced and the
       step counter grows by one.
    4. If the formula was final, the application terminates.

Two surfaces are built on the step function:

    Session        - a lazy, non-restartable iterator of RewriteStep items
    apply_scheme() - drives a session to its end within a step budget

Step limit policy:
    Reaching max_steps while still running is a regular outcome,
    Outcome.STEP_LIMIT_REACHED. Pass strict=True to apply_scheme() to get a
    StepLimitExceeded error instead.

Tracing:
    Use apply_scheme(..., trace=True) to get a RewriteTrace of every step.
"""

import enum
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .alphabet import Alphabet
from .errors import (
    InvalidStepLimit,
    StepLimitExceeded,
    WordContainsExtensionCharacter,
    WordContainsInvalidCharacter,
)
from .formula import Formula

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    """State of an application. RUNNING is the only non-terminal state."""

    RUNNING = "running"
    TERMINATED = "terminated"
    HALTED = "halted"
    STEP_LIMIT_REACHED = "step-limit-reached"

    @property
    def is_terminal(self) -> bool:
        return self is not Outcome.RUNNING

    def __str__(self) -> str:
        return self.value


# ============================================================
# Step function
# ============================================================

def rewrite_step(formulas: Sequence[Formula], word: str) -> Tuple[str, Optional[int]]:
    """
    Perform one rewrite on word.

    Returns:
        (new_word, index) where index is the position of the applied formula
        in formulas, or (word, None) when no formula occurs in word.
    """
    for index, formula in enumerate(formulas):
        result = formula.apply(word)
        if result is not None:
            return result, index
    return word, None


def validate_word(alphabet: Alphabet, word: str, allow_extension: bool = True) -> None:
    """Reject words with characters outside the alphabet (or its base, if allow_extension=False)."""
    unknown = alphabet.invalid_characters(word)
    if unknown:
        raise WordContainsInvalidCharacter(word, unknown)
    if not allow_extension:
        extension = alphabet.invalid_characters(word, base_only=True)
        if extension:
            raise WordContainsExtensionCharacter(word, extension)


def validate_limit(max_steps) -> int:
    if isinstance(max_steps, bool) or not isinstance(max_steps, int) or max_steps < 1:
        raise InvalidStepLimit(max_steps)
    return max_steps


# ============================================================
# Results
# ============================================================

class RewriteStep:
    """A single rewrite: which formula turned which word into which."""

    __slots__ = ('number', 'formula_index', 'formula', 'before', 'after', 'outcome')

    def __init__(self, number: int, formula_index: int, formula: Formula,
                 before: str, after: str, outcome: Outcome):
        self.number = number
        self.formula_index = formula_index
        self.formula = formula
        self.before = before
        self.after = after
        self.outcome = outcome

    @property
    def word(self) -> str:
        """The word produced by this step."""
        return self.after

    def __eq__(self, other):
        if isinstance(other, RewriteStep):
            return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)
        return NotImplemented

    def __repr__(self) -> str:
        return (f"{self.number}. {self.formula}: "
                f"\"{self.before}\" → \"{self.after}\" ({self.outcome})")

    def to_dict(self) -> Dict:
        """Convert step to dictionary for serialization."""
        return {
            "number": self.number,
            "formula_index": self.formula_index,
            "formula": self.formula.to_dict(),
            "before": self.before,
            "after": self.after,
            "outcome": self.outcome.value,
        }


class ApplicationResult:
    """Final word, outcome and number of steps of one application."""

    __slots__ = ('word', 'outcome', 'steps')

    def __init__(self, word: str, outcome: Outcome, steps: int):
        self.word = word
        self.outcome = outcome
        self.steps = steps

    @property
    def completed(self) -> bool:
        """True if the algorithm finished on its own (terminated or halted)."""
        return self.outcome in (Outcome.TERMINATED, Outcome.HALTED)

    def __eq__(self, other):
        if isinstance(other, ApplicationResult):
            return (self.word, self.outcome, self.steps) == (other.word, other.outcome, other.steps)
        return NotImplemented

    def __repr__(self) -> str:
        return f"ApplicationResult(word={self.word!r}, outcome={self.outcome}, steps={self.steps})"

    def __str__(self) -> str:
        return (f"Application result is \"{self.word}\", reached after {self.steps} steps "
                f"({self.outcome}).")

    def to_dict(self) -> Dict:
        return {"word": self.word, "outcome": self.outcome.value, "steps": self.steps}


class RewriteTrace:
    """
    A trace of all rewriting steps applied.

    Provides multiple formatting options:
        - format("verbose"): one line per step with before/after (default)
        - format("compact"): single line showing the formula chain
        - format("rules"): just the formulas applied
        - format("chain"): word transformations as a chain
        - to_dict(): JSON-serializable dictionary
    """

    def __init__(self, initial: str, alphabet: Optional[Alphabet] = None):
        self.steps: List[RewriteStep] = []
        self.initial = initial
        self.final = initial
        self.outcome = Outcome.RUNNING
        self._alphabet = alphabet

    def add_step(self, step: RewriteStep):
        self.steps.append(step)
        self.final = step.after
        self.outcome = step.outcome

    def label(self, step: RewriteStep) -> str:
        """Textual definition of the formula a step applied."""
        if self._alphabet is None:
            return step.formula.format()
        return step.formula.to_definition(self._alphabet)

    def format(self, style: str = "verbose") -> str:
        """
        Format the trace in different styles.

        Args:
            style: One of "verbose", "compact", "rules", "chain"

        Returns:
            Formatted string representation of the trace.
        """
        if style == "compact":
            rules = [self.label(s) for s in self.steps]
            return f"\"{self.initial}\" --[{', '.join(rules)}]--> \"{self.final}\""

        elif style == "rules":
            rules = [self.label(s) for s in self.steps]
            return " ; ".join(rules) if rules else "(no formulas applied)"

        elif style == "chain":
            parts = [f"\"{self.initial}\""]
            for step in self.steps:
                parts.append(f"  --({self.label(step)})-->")
                parts.append(f"\"{step.after}\"")
            return "\n".join(parts)

        elif style == "verbose":
            return repr(self)

        raise ValueError(f"Unknown trace style: {style}. "
                         f"Valid options: verbose, compact, rules, chain")

    def __repr__(self) -> str:
        lines = [f"Initial: \"{self.initial}\""]
        for step in self.steps:
            lines.append(f"  {step.number}. {self.label(step)}: "
                         f"\"{step.before}\" → \"{step.after}\"")
        lines.append(f"Final: \"{self.final}\" ({self.outcome})")
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)

    def __bool__(self) -> bool:
        """True if any rewriting was done."""
        return len(self.steps) > 0

    def to_dict(self) -> Dict:
        return {
            "initial": self.initial,
            "final": self.final,
            "outcome": self.outcome.value,
            "steps": [step.to_dict() for step in self.steps],
            "step_count": len(self.steps),
        }

    def rule_counts(self) -> Dict[str, int]:
        """Count how many times each formula was applied."""
        counts: Dict[str, int] = {}
        for step in self.steps:
            name = self.label(step)
            counts[name] = counts.get(name, 0) + 1
        return counts

    def summary(self) -> str:
        if not self.steps:
            return "No rewriting performed"
        counts = self.rule_counts()
        most_used = max(counts.items(), key=lambda x: x[1])
        return (f"{len(self.steps)} steps using {len(counts)} unique formulas. "
                f"Most used: {most_used[0]} ({most_used[1]}x)")


# ============================================================
# Sessions
# ============================================================

class Session:
    """
    Stepwise application of a scheme to one word.

    A session is an iterator: every next() performs exactly one step and
    returns its RewriteStep. Iteration stops once the outcome is terminal:

        - a final formula fired: its step is the last item, TERMINATED
        - no formula occurs: no item is produced, HALTED
        - max_steps steps were taken: the last item carries STEP_LIMIT_REACHED

    Sessions are not restartable; ask the scheme for a new one instead.
    The scheme is only read, so any number of sessions may share it.

    Example:
        session = scheme.steps("aaabc", max_steps=10)
        for step in session:
            print(step.formula, step.word)
        print(session.outcome, session.steps_taken)
    """

    def __init__(self, scheme, word: str, max_steps: int, allow_extension: bool = True):
        validate_limit(max_steps)
        validate_word(scheme.alphabet, word, allow_extension)
        self._formulas: Tuple[Formula, ...] = tuple(scheme.formulas)
        self.initial = word
        self.word = word
        self.max_steps = max_steps
        self.steps_taken = 0
        self.outcome = Outcome.RUNNING

    def __iter__(self) -> 'Session':
        return self

    def __next__(self) -> RewriteStep:
        if self.outcome.is_terminal:
            raise StopIteration

        before = self.word
        after, index = rewrite_step(self._formulas, before)
        if index is None:
            self.outcome = Outcome.HALTED
            logger.debug("Halted after %d steps, no formula occurs in \"%s\"", self.steps_taken, before)
            raise StopIteration

        formula = self._formulas[index]
        self.steps_taken += 1
        self.word = after

        if formula.is_final:
            self.outcome = Outcome.TERMINATED
        elif self.steps_taken >= self.max_steps:
            self.outcome = Outcome.STEP_LIMIT_REACHED
        logger.debug("Step %d: formula %d rewrote \"%s\" to \"%s\"", self.steps_taken, index, before, after)

        return RewriteStep(self.steps_taken, index, formula, before, after, self.outcome)

    def result(self) -> ApplicationResult:
        """Current word, outcome and step count."""
        return ApplicationResult(self.word, self.outcome, self.steps_taken)

    def run(self) -> ApplicationResult:
        """Take all remaining steps and return the result."""
        for _ in self:
            pass
        return self.result()

    def __repr__(self) -> str:
        return (f"Session(word={self.word!r}, steps_taken={self.steps_taken}, "
                f"max_steps={self.max_steps}, outcome={self.outcome})")


# ============================================================
# Whole application
# ============================================================

def apply_scheme(scheme, word: str, max_steps: int, trace: bool = False,
                 strict: bool = False, allow_extension: bool = True):
    """
    Apply a scheme to a word until it terminates, halts, or runs out of steps.

    Never performs more than max_steps steps.

    Args:
        scheme: Scheme to apply.
        word: Input word, every character must belong to the scheme's alphabet.
        max_steps: Step budget, at least 1.
        trace: If True, return (result, trace) tuple.
        strict: If True, raise StepLimitExceeded instead of returning a
            STEP_LIMIT_REACHED result.
        allow_extension: If False, the word may only use base alphabet characters.

    Returns:
        ApplicationResult, or (ApplicationResult, RewriteTrace) if trace=True.

    Raises:
        WordContainsInvalidCharacter: the word uses a character outside the alphabet.
        InvalidStepLimit: max_steps is not a positive integer.
        StepLimitExceeded: strict=True and the budget ran out.
    """
    session = Session(scheme, word, max_steps, allow_extension)
    trace_obj = RewriteTrace(word, scheme.alphabet) if trace else None

    for step in session:
        if trace_obj is not None:
            trace_obj.add_step(step)

    result = session.result()
    if trace_obj is not None:
        trace_obj.outcome = result.outcome
    logger.debug("Application of \"%s\" finished: %r", word, result)

    if strict and result.outcome is Outcome.STEP_LIMIT_REACHED:
        raise StepLimitExceeded(max_steps, result)

    if trace:
        return result, trace_obj
    return result


def apply_once(scheme, word: str, allow_extension: bool = True) -> Optional[RewriteStep]:
    """
    Apply at most one formula to the word.

    Returns:
        The RewriteStep performed (outcome TERMINATED for a final formula,
        RUNNING otherwise), or None if no formula occurs in the word.

    Example:
        step = scheme.apply_once("abc")
        if step:
            print(f"Applied {step.formula}, got {step.word}")
    """
    validate_word(scheme.alphabet, word, allow_extension)
    after, index = rewrite_step(scheme.formulas, word)
    if index is None:
        return None
    formula = scheme.formulas[index]
    outcome = Outcome.TERMINATED if formula.is_final else Outcome.RUNNING
    return RewriteStep(1, index, formula, word, after, outcome)
