"""Analyzer utilities for the wiki search stack.

Wiki pages mix Latin identifiers (commands, versions, host names) with Chinese
prose that has no word boundaries. The default analyzer therefore runs two
tokenizers over the same lower-cased text: a word tokenizer for ASCII runs and
a character-bigram tokenizer for everything that is not whitespace,
punctuation or a symbol. Both streams share one token space.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol
import unicodedata


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


class RegexTokenizer:
    """Regex-based tokenizer that yields word tokens."""

    def __init__(self, pattern: str = r"[a-z0-9]+", flags: int = 0) -> None:
        self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self.pattern.finditer(text)):
            yield Token(
                text=match.group(0),
                position=position,
                start_char=match.start(),
                end_char=match.end(),
            )


def is_separator(char: str) -> bool:
    """Return True for whitespace, punctuation (P*) and symbol (S*) characters."""

    return char.isspace() or unicodedata.category(char)[0] in ("P", "S")


class BigramTokenizer:
    """Overlapping two-character windows over non-separator characters.

    Separators are removed before windowing, so "红石,限制" yields
    "红石", "石限", "限制". Offsets point into the original text.
    """

    def __init__(self, width: int = 2) -> None:
        self.width = width

    def __call__(self, text: str) -> Iterator[Token]:
        kept = [(idx, char) for idx, char in enumerate(text) if not is_separator(char)]
        for position in range(len(kept) - self.width + 1):
            window = kept[position : position + self.width]
            yield Token(
                text="".join(char for _, char in window),
                position=position,
                start_char=window[0][0],
                end_char=window[-1][0] + 1,
            )


class AnalyzerPipeline:
    """Lower-case the input, then concatenate the streams of several tokenizers."""

    def __init__(self, tokenizers: Sequence[Tokenizer]) -> None:
        self.tokenizers = list(tokenizers)

    def __call__(self, text: str) -> list[Token]:
        if not text:
            return []
        lowered = text.lower()
        tokens = [token for tokenizer in self.tokenizers for token in tokenizer(lowered)]
        for idx, token in enumerate(tokens):  # normalize positions across streams
            token.position = idx
        return tokens


class MixedScriptAnalyzer:
    """Default analyzer: ASCII word tokens followed by character bigrams."""

    def __init__(self) -> None:
        self.pipeline = AnalyzerPipeline([RegexTokenizer(), BigramTokenizer()])

    def __call__(self, text: str) -> list[Token]:
        return self.pipeline(text)


_ANALYZER_FACTORIES: dict[str, Callable[[], Analyzer]] = {
    "default": lambda: MixedScriptAnalyzer(),
    "mixed": lambda: MixedScriptAnalyzer(),
    "word": lambda: AnalyzerPipeline([RegexTokenizer()]),
    "bigram": lambda: AnalyzerPipeline([BigramTokenizer()]),
}


def get_analyzer(name: str | None) -> Analyzer:
    """Return analyzer by name, defaulting to the mixed-script analyzer."""

    if name is None:
        return _ANALYZER_FACTORIES["default"]()
    normalized = name.lower()
    if normalized not in _ANALYZER_FACTORIES:
        msg = f"Unknown analyzer '{name}'. Available: {sorted(_ANALYZER_FACTORIES)}"
        raise ValueError(msg)
    return _ANALYZER_FACTORIES[normalized]()


_DEFAULT_ANALYZER = MixedScriptAnalyzer()


def tokenize(text: str) -> list[str]:
    """Return the token texts produced by the default analyzer."""

    return [token.text for token in _DEFAULT_ANALYZER(text)]
