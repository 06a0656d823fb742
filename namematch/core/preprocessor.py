"""Name standardization and tokenization for name matching."""

from typing import Any, Dict, List, Optional, Type
from abc import ABC, abstractmethod
from unidecode import unidecode
import pandas as pd
import regex as re

from namematch.config.models import TokenizeStrategy, TokenSequence

DELIMITER_PATTERN = re.compile(r'[ \t\n\r\-_]+')
ALPHA_RUN_PATTERN = re.compile(r'[a-zA-Z]+')
PUNCT_PATTERN = re.compile(r'[\p{P}\p{S}]+')


def _is_null(value: Any) -> bool:
    """Check if value is null/empty."""
    if isinstance(value, str):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


class NameStandardizer:
    """Standardizes names: case, accents, punctuation and spacing."""

    def __init__(self, uppercase: bool = True, remove_accents: bool = True):
        self.uppercase = uppercase
        self.remove_accents = remove_accents

    def process(self, value: Any) -> str:
        if _is_null(value):
            return ''

        text = str(value)

        # Latin-to-ASCII also covers letters with no decomposition (Ø, Ł, Æ)
        if self.remove_accents:
            text = unidecode(text)

        if self.uppercase:
            text = text.upper()

        text = PUNCT_PATTERN.sub(' ', text)
        return ' '.join(text.split())


class BaseTokenizer(ABC):
    """Base class for tokenizers with the shared minimum length filter."""

    def __init__(self, min_length: int = 2):
        self.min_length = min_length

    @abstractmethod
    def candidates(self, name: str) -> List[str]:
        """Candidate tokens of a name, before length filtering."""
        pass

    def tokenize(self, name: Any) -> TokenSequence:
        if _is_null(name):
            return TokenSequence()

        return TokenSequence.from_texts([
            text for text in self.candidates(str(name))
            if len(text) >= self.min_length
        ])


class DelimiterTokenizer(BaseTokenizer):
    """Splits on whitespace, hyphens and underscores."""

    def candidates(self, name: str) -> List[str]:
        return [text for text in DELIMITER_PATTERN.split(name) if text]


class AlphaRunTokenizer(BaseTokenizer):
    """Extracts maximal runs of ASCII letters."""

    def candidates(self, name: str) -> List[str]:
        return ALPHA_RUN_PATTERN.findall(name)


class TokenizerRegistry:
    """Registry for tokenizer types keyed by strategy."""

    def __init__(self):
        self._tokenizers: Dict[TokenizeStrategy, Type[BaseTokenizer]] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default tokenizers."""
        self.register(TokenizeStrategy.DELIMITER, DelimiterTokenizer)
        self.register(TokenizeStrategy.ALPHA_RUN, AlphaRunTokenizer)

    def register(self, strategy: TokenizeStrategy, tokenizer_class: Type[BaseTokenizer]) -> None:
        """
        Register a tokenizer type.

        Args:
            strategy: Strategy to register the tokenizer under
            tokenizer_class: Tokenizer class to register
        """
        self._tokenizers[TokenizeStrategy(strategy)] = tokenizer_class

    def create(self, strategy: TokenizeStrategy, **kwargs: Any) -> BaseTokenizer:
        """
        Create a tokenizer instance.

        Args:
            strategy: Tokenization strategy
            **kwargs: Configuration parameters for the tokenizer

        Returns:
            BaseTokenizer: Configured tokenizer instance

        Raises:
            ValueError: If the strategy is not registered
        """
        try:
            tokenizer_class = self._tokenizers.get(TokenizeStrategy(strategy))
        except ValueError:
            tokenizer_class = None
        if not tokenizer_class:
            raise ValueError(f"Unknown tokenizer strategy: {strategy}")

        return tokenizer_class(**kwargs)


# Global registry instance
registry = TokenizerRegistry()


class NamePreprocessor:
    """Standardizes (optionally) and tokenizes names under one configuration."""

    def __init__(
        self,
        strategy: TokenizeStrategy = TokenizeStrategy.ALPHA_RUN,
        min_length: int = 2,
        standardizer: Optional[NameStandardizer] = None
    ):
        self.tokenizer = registry.create(strategy, min_length=min_length)
        self.standardizer = standardizer

    def standardize(self, value: Any) -> Any:
        if self.standardizer is None:
            return value
        return self.standardizer.process(value)

    def process(self, name: Any) -> TokenSequence:
        return self.tokenizer.tokenize(self.standardize(name))


def tokenize(
    name: Any,
    min_length: int = 2,
    strategy: TokenizeStrategy = TokenizeStrategy.ALPHA_RUN
) -> TokenSequence:
    """
    Tokenize a single name.

    Args:
        name: Raw name string
        min_length: Minimum number of characters a token must have
        strategy: Tokenization strategy

    Returns:
        TokenSequence: Tokens in their original order
    """
    return registry.create(strategy, min_length=min_length).tokenize(name)


def name_standardize(value: Any) -> str:
    """Standardize a name with the default standardizer settings."""
    return NameStandardizer().process(value)
