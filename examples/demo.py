#!/usr/bin/env python3
"""
markovalgo Feature Demonstration

This script walks through the main features of the markovalgo library.
"""

from pathlib import Path
from markovalgo import (
    Alphabet, Formula, Scheme, SchemeBuilder, Outcome,
    MarkovError,
)


def section(title: str):
    """Print a section header."""
    print(f"\n{'='*60}")
    print(f" {title}")
    print('='*60)


def demo_basic_usage():
    """Demonstrate applying a scheme to words."""
    section("Basic Usage")

    scheme = Scheme.from_definitions(["a→b", "b→c", "c→⋅4"])

    for word in ["aaabc", "c", "xyz"]:
        result = scheme.apply(word, max_steps=100)
        print(f"  {word!r} => {result.word!r} ({result.outcome}, {result.steps} steps)")


def demo_outcomes():
    """Demonstrate the three ways an application ends."""
    section("Outcomes")

    examples = [
        ("final formula", Scheme.from_definitions("a→⋅d"), "abc"),
        ("nothing applies", Scheme.from_definitions("x→y"), "abc"),
        ("step limit", Scheme.from_definitions("a→aa"), "a"),
    ]

    for desc, scheme, word in examples:
        result = scheme.apply(word, max_steps=3)
        print(f"  {desc}: {result}")


def demo_builder():
    """Demonstrate the scheme builder with a custom alphabet."""
    section("Scheme Builder")

    alphabet = Alphabet.parse("abc").extend("d")
    scheme = (SchemeBuilder()
        .with_alphabet(alphabet)
        .with_delimiter(">")
        .with_final_marker("!")
        .add_definition("d>!")
        .add_formula(Formula("a", "d"))
        .build())

    print(f"  Alphabet: {scheme.alphabet!r}")
    for line in scheme.list_formulas():
        print(f"    {line}")
    print(f"  'bab' => {scheme.apply('bab', 10).word!r}")

    try:
        scheme.apply("dab", 10, allow_extension=False)
    except MarkovError as e:
        print(f"  Base-only input rejected: {e}")


def demo_stepping():
    """Demonstrate lazy stepwise application."""
    section("Stepping")

    scheme = Scheme.from_definitions(["a→b", "b→c", "c→⋅4"])
    session = scheme.steps("abc", max_steps=10)

    for step in session:
        print(f"  {step.number}. {step.formula}: {step.before!r} -> {step.after!r}")
    print(f"  Outcome: {session.outcome} after {session.steps_taken} steps")


def demo_tracing():
    """Demonstrate trace formatting."""
    section("Tracing")

    scheme = Scheme.from_definitions(["a→b", "b→c", "c→⋅4"])
    result, trace = scheme.apply("aabc", 10, trace=True)

    print("  Verbose format (default):")
    for line in str(trace).split('\n'):
        print(f"    {line}")

    print(f"\n  Compact: {trace.format('compact')}")
    print(f"  Rules: {trace.format('rules')}")
    print(f"  Summary: {trace.summary()}")


def demo_file_loading():
    """Demonstrate loading schemes from files."""
    section("Loading Schemes from Files")

    examples_dir = Path(__file__).parent

    # Number of 'a' characters, digits and '|' are auxiliary
    alphabet = Alphabet.parse("abc").extend_all("0123456789|")
    counter = Scheme.from_file(examples_dir / "count_letters.markov", alphabet)
    print(f"  Loaded {len(counter)} formulas from count_letters.markov")
    for word in ["bccb", "aabaccb", "a" * 12]:
        result = counter.apply(word, 10_000)
        print(f"    {word} => {result.word}")

    alphabet = Alphabet.parse('aAbBcC"').extend_all("|+-;_e")
    capitalize = Scheme.from_file(examples_dir / "capitalize.markov", alphabet)
    print(f"\n  Loaded {len(capitalize)} formulas from capitalize.markov")
    for word in ['ac"bbb"ca', 'ac""ca"Ab"c']:
        result = capitalize.apply(word, 10_000)
        status = "ok" if result.outcome is Outcome.TERMINATED else str(result.outcome)
        print(f"    {word} => {result.word} ({status})")


def main():
    """Run all demonstrations."""
    print("markovalgo - Markov normal algorithms")
    print("Feature Demonstration")

    demo_basic_usage()
    demo_outcomes()
    demo_builder()
    demo_stepping()
    demo_tracing()
    demo_file_loading()

    print("\n" + "="*60)
    print(" Demo complete!")
    print("="*60)


if __name__ == "__main__":
    main()
