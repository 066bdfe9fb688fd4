"""Word set value object - the three words a session asks the user to recall."""

import random
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from minicog.domain.constants import WORD_CATALOG, WORDS_PER_SET


@dataclass(frozen=True)
class WordSet:
    """Ordered, immutable set of exactly three words."""

    words: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate word count and content."""
        if len(self.words) != WORDS_PER_SET:
            raise ValueError(f"WordSet needs {WORDS_PER_SET} words, got {len(self.words)}")
        if any(not word.strip() for word in self.words):
            raise ValueError("WordSet words must be non-empty")

    @classmethod
    def of(cls, *words: str) -> "WordSet":
        return cls(words=tuple(words))

    @classmethod
    def choose(
        cls,
        catalog: Sequence[Sequence[str]] = WORD_CATALOG,
        rng: random.Random | None = None,
    ) -> "WordSet":
        """Select a word set uniformly at random from the catalog.

        Args:
            catalog: Candidate word lists
            rng: Optional random source (module-level random when None)

        Returns:
            A new WordSet
        """
        if not catalog:
            raise ValueError("Word catalog is empty")
        chooser = rng or random
        return cls(words=tuple(chooser.choice(catalog)))

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)

    def __len__(self) -> int:
        return len(self.words)

    def __str__(self) -> str:
        return ", ".join(self.words)
