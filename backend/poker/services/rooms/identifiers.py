import random
from typing import Container, Sequence

from poker.errors import CapacityExhausted

COLORS = (
    'Azure', 'Bronze', 'Cobalt', 'Denim', 'Emerald', 'Fuchsia', 'Green', 'Indigo', 'Jade', 'Lilac',
    'Maroon', 'Orange', 'Pink', 'Quartz', 'Ruby', 'Sapphire', 'Tangerine', 'Violet', 'White', 'Yellow',
)
TRAITS = (
    'Active', 'Brave', 'Calm', 'Dreamer', 'Enthusiastic', 'Friendly', 'Gentle', 'Heroic', 'Industrious',
    'Joyful', 'Kind', 'Lucky', 'Mysterious', 'Neat', 'Organized', 'Polite', 'Quick', 'Respectful',
    'Smart', 'Tough', 'Understanding', 'Vivacious', 'Wise',
)
ANIMALS = (
    'Ant', 'Bear', 'Cat', 'Dog', 'Eel', 'Fox', 'Goat', 'Hyena', 'Ibis', 'Jellyfish', 'Kiwi', 'Lion', 'Mink',
    'Newt', 'Octopus', 'Pug', 'Quail', 'Reindeer', 'Seal', 'Tuna', 'Uguisu', 'Vulture', 'Wolf', 'Xerus',
    'Yak', 'Zebu',
)

DEFAULT_ATTEMPTS = 10


class IdentifierGenerator:
    """Draws memorable ``Color-Trait-Animal`` room names."""

    def __init__(
        self,
        colors: Sequence[str] = COLORS,
        traits: Sequence[str] = TRAITS,
        animals: Sequence[str] = ANIMALS,
        attempts: int = DEFAULT_ATTEMPTS,
        rng: random.Random = None,
    ):
        if not (colors and traits and animals):
            raise ValueError('Every word list needs at least one entry')
        if attempts < 1:
            raise ValueError('attempts must be positive')
        self.colors = tuple(colors)
        self.traits = tuple(traits)
        self.animals = tuple(animals)
        self.attempts = attempts
        self._rng = rng or random

    def draw(self) -> str:
        return '-'.join((
            self._rng.choice(self.colors),
            self._rng.choice(self.traits),
            self._rng.choice(self.animals),
        ))

    def generate(self, taken: Container[str] = ()) -> str:
        """Return a name not in ``taken``, giving up after ``attempts`` draws."""
        for _ in range(self.attempts):
            candidate = self.draw()
            if candidate not in taken:
                return candidate
        raise CapacityExhausted('Could not create free room name')
