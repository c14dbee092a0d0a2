"""Analyzer utilities for the in-memory search engine.

Analyzers follow a composable tokenizer/filter design: a tokenizer emits
``Token`` objects and filters transform the stream. The default "simple"
analyzer lowercases text and keeps only ASCII alphanumeric runs, so
``"fox's"`` yields the two terms ``"fox"`` and ``"s"``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol


@dataclass
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    position: int
    start_char: int
    end_char: int


class Analyzer(Protocol):
    """Protocol implemented by analyzers."""

    def __call__(self, text: str) -> list[Token]:  # pragma: no cover - interface definition
        ...


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class AsciiAlnumTokenizer:
    """Yield maximal runs of ASCII letters and digits.

    Every other character acts as a separator, which is equivalent to
    replacing it with a space, trimming, and splitting on whitespace runs.
    Text consisting only of separators yields no tokens.
    """

    _PATTERN = re.compile(r"[A-Za-z0-9]+")

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self._PATTERN.finditer(text)):
            yield Token(
                text=match.group(0),
                position=position,
                start_char=match.start(),
                end_char=match.end(),
            )


class AnalyzerPipeline:
    """Composable analyzer pipeline (optional pre-normalizer, tokenizer, filters)."""

    def __init__(
        self,
        tokenizer: Tokenizer,
        filters: Sequence[TokenFilter] | None = None,
        *,
        normalizer: Callable[[str], str] | None = None,
    ) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])
        self.normalizer = normalizer

    def __call__(self, text: str) -> list[Token]:
        if self.normalizer is not None:
            text = self.normalizer(text)
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        tokens = list(stream)
        for idx, token in enumerate(tokens):  # normalize positions post-filtering
            token.position = idx
        return tokens


class SimpleAnalyzer:
    """Default analyzer: lowercase the whole text, then split on non-alphanumerics.

    Lowercasing runs before tokenization so characters whose lowercase form
    is ASCII (for example the Kelvin sign) still produce terms. Character
    offsets refer to the lowercased text.
    """

    def __init__(self) -> None:
        self.pipeline = AnalyzerPipeline(AsciiAlnumTokenizer(), normalizer=str.lower)

    def __call__(self, text: str) -> list[Token]:
        return self.pipeline(text)


class CaseSensitiveAnalyzer:
    """Split on non-alphanumerics without normalizing case."""

    def __init__(self) -> None:
        self.pipeline = AnalyzerPipeline(AsciiAlnumTokenizer())

    def __call__(self, text: str) -> list[Token]:
        return self.pipeline(text)


_ANALYZER_FACTORIES: dict[str, Callable[[], Analyzer]] = {
    "default": lambda: SimpleAnalyzer(),
    "simple": lambda: SimpleAnalyzer(),
    "case-sensitive": lambda: CaseSensitiveAnalyzer(),
}


def get_analyzer(name: str | None) -> Analyzer:
    """Return analyzer by name, defaulting to the simple analyzer."""

    if name is None:
        return _ANALYZER_FACTORIES["default"]()
    normalized = name.lower()
    if normalized not in _ANALYZER_FACTORIES:
        msg = f"Unknown analyzer '{name}'. Available: {sorted(_ANALYZER_FACTORIES)}"
        raise ValueError(msg)
    return _ANALYZER_FACTORIES[normalized]()


_DEFAULT_ANALYZER = SimpleAnalyzer()


def tokenize(text: str) -> list[str]:
    """Return the normalized terms of ``text`` in order of appearance."""

    return [token.text for token in _DEFAULT_ANALYZER(text)]
