"""Base generator class for sample data generators."""

from __future__ import annotations

import random
from abc import ABC

from faker import Faker


class BaseGenerator(ABC):
    """Base class for sample data generators.

    Provides common initialization: Faker instance creation and
    seed-based reproducibility.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_US``).
    """

    def __init__(self, seed: int | None = None, locale: str = "en_US") -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)

    def phone(self) -> str:
        """Ugandan mobile number, e.g. ``+256772123456``."""
        prefix = random.choice(["70", "71", "72", "74", "75", "76", "77", "78"])
        return f"+256{prefix}{random.randint(0, 9_999_999):07d}"
