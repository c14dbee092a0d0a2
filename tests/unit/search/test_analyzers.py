"""Unit tests for analyzer pipelines and the tokenize helper."""

import pytest

from tfidf_search.search import analyzers
from tfidf_search.search.analyzers import (
    AnalyzerPipeline,
    AsciiAlnumTokenizer,
    CaseSensitiveAnalyzer,
    SimpleAnalyzer,
    Token,
    get_analyzer,
    tokenize,
)


@pytest.fixture
def fresh_registry(monkeypatch):
    """Provide a temporary analyzer registry so tests stay isolated."""

    monkeypatch.setattr(analyzers, "_ANALYZER_FACTORIES", analyzers._ANALYZER_FACTORIES.copy())
    return analyzers._ANALYZER_FACTORIES


class TestAsciiAlnumTokenizer:
    """Tokenizer emits alphanumeric runs with positions and char offsets."""

    def test_emits_tokens_with_offsets(self):
        tokens = list(AsciiAlnumTokenizer()("Red fox, bit"))

        assert [t.text for t in tokens] == ["Red", "fox", "bit"]
        assert [t.position for t in tokens] == [0, 1, 2]
        assert (tokens[1].start_char, tokens[1].end_char) == (4, 7)
        assert (tokens[2].start_char, tokens[2].end_char) == (9, 12)

    def test_non_ascii_letters_are_separators(self):
        assert [t.text for t in AsciiAlnumTokenizer()("café au lait")] == ["caf", "au", "lait"]


class TestTokenize:
    """``tokenize`` lowercases and splits on anything but ASCII letters and digits."""

    def test_lowercases_and_splits_on_whitespace_runs(self):
        assert tokenize("  The   Brown\tFOX\n") == ["the", "brown", "fox"]

    def test_apostrophe_splits_possessive(self):
        assert tokenize("The fox's den") == ["the", "fox", "s", "den"]

    def test_digits_are_kept(self):
        assert tokenize("Route 66, exit 4B") == ["route", "66", "exit", "4b"]

    @pytest.mark.parametrize("text", ["", "   ", "!!! ... ???", "\t\n"])
    def test_empty_or_punctuation_only_yields_no_tokens(self, text):
        assert tokenize(text) == []

    def test_lowercasing_happens_before_filtering(self):
        # KELVIN SIGN lowercases to ASCII "k"
        assert tokenize("5\u212a run") == ["5k", "run"]

    def test_is_idempotent_on_normalized_output(self):
        for text in ["The brown fox's den!", "A-B-C 1,2,3", "MiXeD   case\ttext", ""]:
            terms = tokenize(text)
            assert tokenize(" ".join(terms)) == terms


class TestAnalyzerPipeline:
    """Pipelines apply the normalizer, tokenizer, then filters in order."""

    def test_filters_run_and_positions_are_renumbered(self):
        def drop_short(tokens):
            for token in tokens:
                if len(token.text) > 2:
                    yield token

        pipeline = AnalyzerPipeline(AsciiAlnumTokenizer(), [drop_short], normalizer=str.lower)

        tokens = pipeline("An OX and a FOX")

        assert [t.text for t in tokens] == ["and", "fox"]
        assert [t.position for t in tokens] == [0, 1]

    def test_simple_analyzer_returns_tokens(self):
        tokens = SimpleAnalyzer()("Lazy Dog")

        assert all(isinstance(token, Token) for token in tokens)
        assert [t.text for t in tokens] == ["lazy", "dog"]

    def test_case_sensitive_analyzer_keeps_case(self):
        assert [t.text for t in CaseSensitiveAnalyzer()("Lazy Dog")] == ["Lazy", "Dog"]


class TestAnalyzerRegistry:
    """Registry lookups are case-insensitive and reject unknown names."""

    def test_default_is_simple(self):
        assert isinstance(get_analyzer(None), SimpleAnalyzer)
        assert isinstance(get_analyzer("SIMPLE"), SimpleAnalyzer)

    def test_unknown_analyzer_raises(self):
        with pytest.raises(ValueError, match="Unknown analyzer 'porter'"):
            get_analyzer("porter")

    def test_registered_factory_is_used(self, fresh_registry):
        fresh_registry["upper"] = lambda: AnalyzerPipeline(AsciiAlnumTokenizer(), normalizer=str.upper)

        assert [t.text for t in get_analyzer("upper")("a b")] == ["A", "B"]
