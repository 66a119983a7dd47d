"""Tests for schemes and the scheme builder."""

import pytest
from markovalgo import (
    Alphabet, Formula, Scheme, SchemeBuilder, load_definitions,
    EmptyScheme, EmptyDefinition, MissingDelimiter, InvalidCharacter,
    ReservedCharacterConflict, SchemeConstructionError,
)


class TestSchemeBuilder:
    """Tests for SchemeBuilder.build()."""

    def test_build_from_definitions(self):
        scheme = SchemeBuilder().add_definitions(["a→b", "b→c"]).build()
        assert scheme.formulas == (Formula("a", "b"), Formula("b", "c"))

    def test_build_from_text(self):
        """A string is split into lines."""
        scheme = SchemeBuilder().add_definitions("a→b\nb→c\nc→⋅4").build()
        assert len(scheme) == 3
        assert scheme[2] == Formula("c", "4", final=True)

    def test_fluent_interface(self):
        builder = SchemeBuilder()
        assert builder.with_alphabet(Alphabet.parse("ab")) is builder
        assert builder.add_definition("a→b") is builder
        assert builder.add_formula(Formula("b", "a")) is builder

    def test_mixed_entries_keep_order(self):
        """Formulas and definition lines keep their accumulation order."""
        scheme = (SchemeBuilder()
            .add_definition("a→b")
            .add_formula(Formula("b", "c", final=True))
            .add_definitions(["c→a"])
            .add_formulas([Formula("", "a")])
            .build())
        assert list(scheme) == [
            Formula("a", "b"),
            Formula("b", "c", final=True),
            Formula("c", "a"),
            Formula("", "a"),
        ]

    def test_empty_scheme(self):
        with pytest.raises(EmptyScheme):
            SchemeBuilder().build()

    def test_empty_scheme_is_construction_error(self):
        with pytest.raises(SchemeConstructionError):
            SchemeBuilder(Alphabet.parse("ab")).build()

    def test_duplicate_and_shadowed_patterns_are_legal(self):
        scheme = SchemeBuilder().add_definitions(["a→b", "a→c", "ab→c"]).build()
        assert len(scheme) == 3

    def test_default_alphabet(self):
        scheme = SchemeBuilder().add_definition("a→b").build()
        assert scheme.alphabet == Alphabet.default()

    def test_custom_alphabet(self):
        alphabet = Alphabet.parse("abc").extend("d")
        scheme = SchemeBuilder(alphabet).add_definition("a→⋅d").build()
        assert scheme.alphabet is alphabet

    def test_with_alphabet_replaces_prior(self):
        scheme = (SchemeBuilder(Alphabet.parse("ab"))
            .with_alphabet(Alphabet.parse("xy"))
            .add_definition("x→y")
            .build())
        assert "x" in scheme.alphabet

    def test_custom_delimiter_and_final_marker(self):
        scheme = (SchemeBuilder()
            .with_delimiter(">")
            .with_final_marker("!")
            .add_definitions(["a>b", "b>!c"])
            .build())
        assert scheme.formulas == (Formula("a", "b"), Formula("b", "c", final=True))
        assert scheme.alphabet.delimiter == ">"

    def test_delimiter_from_alphabet(self):
        """Overrides are applied when the scheme is built."""
        scheme = (SchemeBuilder()
            .add_definition("a=b")
            .with_delimiter("=")
            .build())
        assert scheme[0] == Formula("a", "b")

    def test_delimiter_conflicts_with_alphabet(self):
        with pytest.raises(ReservedCharacterConflict):
            SchemeBuilder().with_delimiter("a").add_definition("bab").build()

    def test_parse_error_reports_line_number(self):
        with pytest.raises(MissingDelimiter) as exc_info:
            SchemeBuilder().add_definitions(["a→b", "b→c", "cd"]).build()
        assert exc_info.value.line_number == 3
        assert "definition 3" in str(exc_info.value)

    def test_empty_line_in_the_middle(self):
        with pytest.raises(EmptyDefinition) as exc_info:
            SchemeBuilder().add_definitions("a→b\n\nb→c").build()
        assert exc_info.value.line_number == 2

    def test_trailing_newline_is_not_an_empty_line(self):
        scheme = SchemeBuilder().add_definitions("a→b\nb→c\n").build()
        assert len(scheme) == 2

    def test_added_formula_is_checked_against_alphabet(self):
        builder = SchemeBuilder(Alphabet.parse("ab")).add_formula(Formula("a", "z"))
        with pytest.raises(InvalidCharacter) as exc_info:
            builder.build()
        assert exc_info.value.character == "z"
        assert exc_info.value.line_number == 1

    def test_alphabet_preview(self):
        builder = SchemeBuilder(Alphabet.parse("ab")).with_final_marker("!")
        assert builder.alphabet().final_marker == "!"
        assert builder.alphabet().delimiter == "→"

    def test_len_and_repr(self):
        builder = SchemeBuilder().add_definitions(["a→b", "b→c"])
        assert len(builder) == 2
        assert repr(builder) == "SchemeBuilder(2 entries)"


class TestScheme:
    """Tests for the Scheme value."""

    def test_from_definitions(self):
        scheme = Scheme.from_definitions("a→b\nb→⋅c")
        assert scheme.formulas == (Formula("a", "b"), Formula("b", "c", final=True))

    def test_from_definitions_with_alphabet(self):
        alphabet = Alphabet.parse("ab")
        scheme = Scheme.from_definitions(["a→b"], alphabet)
        assert scheme.alphabet is alphabet

    def test_direct_construction(self):
        scheme = Scheme(Alphabet.parse("ab"), [Formula("a", "b")])
        assert len(scheme) == 1

    def test_direct_construction_empty(self):
        with pytest.raises(EmptyScheme):
            Scheme(Alphabet.parse("ab"), [])

    def test_direct_construction_checks_characters(self):
        with pytest.raises(InvalidCharacter):
            Scheme(Alphabet.parse("ab"), [Formula("a", "c")])

    def test_immutable(self):
        scheme = Scheme.from_definitions("a→b")
        with pytest.raises(AttributeError):
            scheme.formulas = ()
        assert isinstance(scheme.formulas, tuple)

    def test_to_definitions(self):
        text = "a→b\nb→c\nc→⋅4"
        assert Scheme.from_definitions(text).to_definitions() == text

    def test_to_definitions_custom_reserved(self):
        alphabet = Alphabet.parse("ab", delimiter="=", final_marker="!")
        scheme = Scheme.from_definitions(["a=!b", "b=a"], alphabet)
        assert scheme.to_definitions() == "a=!b\nb=a"

    def test_list_formulas(self):
        scheme = Scheme.from_definitions("a→b\nb→⋅c")
        assert scheme.list_formulas() == ["1. a→b", "2. b→⋅c"]

    def test_equality(self):
        assert Scheme.from_definitions("a→b") == Scheme.from_definitions(["a→b"])
        assert Scheme.from_definitions("a→b") != Scheme.from_definitions("a→⋅b")

    def test_repr(self):
        assert repr(Scheme.from_definitions("a→b\nb→a")) == "Scheme(2 formulas)"


class TestLoadFromFile:
    """Tests for reading scheme files."""

    def test_load_definitions(self, tmp_path):
        path = tmp_path / "scheme.markov"
        path.write_text("a→b\nb→⋅c\n", encoding="utf-8")
        assert load_definitions(path) == ["a→b", "b→⋅c"]

    def test_from_file(self, tmp_path):
        path = tmp_path / "scheme.markov"
        path.write_text("a→b\nb→c\nc→⋅4\n", encoding="utf-8")
        scheme = Scheme.from_file(path)
        assert scheme.apply("aaabc", 10).word == "4cccc"

    def test_from_file_crlf(self, tmp_path):
        path = tmp_path / "scheme.markov"
        path.write_bytes("a→b\r\nb→⋅c\r\n".encode("utf-8"))
        assert len(Scheme.from_file(str(path))) == 2

    def test_builder_load_file(self, tmp_path):
        path = tmp_path / "scheme.markov"
        path.write_text("a→b\n", encoding="utf-8")
        scheme = SchemeBuilder().add_definition("b→a").load_file(path).build()
        assert scheme.formulas == (Formula("b", "a"), Formula("a", "b"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Scheme.from_file(tmp_path / "missing.markov")
