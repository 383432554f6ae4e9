"""Plural number systems and the language registry."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterator, List, Sequence, Tuple

from .errors import UnknownLanguageError


class NumberSystem(ABC):
    """Maps quantities to the plural categories of one language.

    Subclasses declare their category labels and implement
    ``_category_of_integer`` for non-negative integers. Everything else
    (negative, fractional, NaN or infinite quantities) is normalised here so
    that ``category_of`` is total.
    """

    labels: Tuple[str, ...] = ("other",)

    @property
    def category_count(self) -> int:
        return len(self.labels)

    @property
    def fractional_category(self) -> int:
        """Category used for quantities that are not whole numbers."""

        return self.category_count - 1

    def label(self, category: int) -> str:
        return self.labels[category]

    def category_of(self, quantity) -> int:
        if isinstance(quantity, bool):
            quantity = int(quantity)
        if isinstance(quantity, int):
            return self._category_of_integer(abs(quantity))
        try:
            value = float(quantity)
        except (TypeError, ValueError):
            return self.fractional_category
        if math.isnan(value) or math.isinf(value) or not value.is_integer():
            return self.fractional_category
        return self._category_of_integer(abs(int(value)))

    @abstractmethod
    def _category_of_integer(self, n: int) -> int:
        """Return the category for a non-negative integer."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SingleFormNumberSystem(NumberSystem):
    """Languages that never inflect for number (Japanese, Chinese, ...)."""

    labels = ("other",)

    def _category_of_integer(self, n: int) -> int:
        return 0


class OneOtherNumberSystem(NumberSystem):
    """English and most Germanic/Romance languages: 1 vs everything else."""

    labels = ("one", "other")

    def _category_of_integer(self, n: int) -> int:
        return 0 if n == 1 else 1


class FrenchNumberSystem(NumberSystem):
    """French and Brazilian Portuguese: 0 and 1 share the singular."""

    labels = ("one", "other")

    def _category_of_integer(self, n: int) -> int:
        return 0 if n in (0, 1) else 1


class EastSlavicNumberSystem(NumberSystem):
    labels = ("one", "few", "many")

    def _category_of_integer(self, n: int) -> int:
        if n % 10 == 1 and n % 100 != 11:
            return 0
        if 2 <= n % 10 <= 4 and not 12 <= n % 100 <= 14:
            return 1
        return 2


class PolishNumberSystem(NumberSystem):
    labels = ("one", "few", "many")

    def _category_of_integer(self, n: int) -> int:
        if n == 1:
            return 0
        if 2 <= n % 10 <= 4 and not 12 <= n % 100 <= 14:
            return 1
        return 2


class CzechNumberSystem(NumberSystem):
    """Czech and Slovak."""

    labels = ("one", "few", "other")

    def _category_of_integer(self, n: int) -> int:
        if n == 1:
            return 0
        if 2 <= n <= 4:
            return 1
        return 2


class LithuanianNumberSystem(NumberSystem):
    labels = ("one", "few", "other")

    def _category_of_integer(self, n: int) -> int:
        if n % 10 == 1 and not 11 <= n % 100 <= 19:
            return 0
        if 2 <= n % 10 <= 9 and not 11 <= n % 100 <= 19:
            return 1
        return 2


@dataclass(frozen=True)
class LanguageInfo:
    """Describes one language known to the registry."""

    code: str
    english_name: str
    native_name: str
    number_system: NumberSystem


class LanguageRegistry:
    """Looks up languages and their number systems by identifier.

    Identifiers are matched case-insensitively and ``_`` is treated as ``-``,
    so ``pt_BR`` and ``pt-br`` name the same language.
    """

    def __init__(self, languages: Sequence[LanguageInfo] = ()) -> None:
        self._languages: Dict[str, LanguageInfo] = {}
        for info in languages:
            self.register(info)

    @staticmethod
    def _normalise(code: str) -> str:
        return code.strip().lower().replace("_", "-")

    def register(self, info: LanguageInfo) -> None:
        self._languages[self._normalise(info.code)] = info

    def get(self, code: str) -> LanguageInfo:
        try:
            return self._languages[self._normalise(code)]
        except KeyError:
            raise UnknownLanguageError(f"Unknown language '{code}'.") from None

    def number_system(self, code: str) -> NumberSystem:
        return self.get(code).number_system

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self._normalise(code) in self._languages

    def __iter__(self) -> Iterator[LanguageInfo]:
        return iter(self._languages.values())

    def __len__(self) -> int:
        return len(self._languages)


def _builtin_languages() -> List[LanguageInfo]:
    single = SingleFormNumberSystem()
    one_other = OneOtherNumberSystem()
    french = FrenchNumberSystem()
    east_slavic = EastSlavicNumberSystem()
    czech = CzechNumberSystem()
    return [
        LanguageInfo("en", "English", "English", one_other),
        LanguageInfo("de", "German", "Deutsch", one_other),
        LanguageInfo("nl", "Dutch", "Nederlands", one_other),
        LanguageInfo("sv", "Swedish", "Svenska", one_other),
        LanguageInfo("da", "Danish", "Dansk", one_other),
        LanguageInfo("nb", "Norwegian Bokmål", "Norsk bokmål", one_other),
        LanguageInfo("fi", "Finnish", "Suomi", one_other),
        LanguageInfo("es", "Spanish", "Español", one_other),
        LanguageInfo("it", "Italian", "Italiano", one_other),
        LanguageInfo("pt", "Portuguese", "Português", one_other),
        LanguageInfo("pt-BR", "Brazilian Portuguese", "Português do Brasil", french),
        LanguageInfo("el", "Greek", "Ελληνικά", one_other),
        LanguageInfo("hu", "Hungarian", "Magyar", one_other),
        LanguageInfo("et", "Estonian", "Eesti", one_other),
        LanguageInfo("bg", "Bulgarian", "Български", one_other),
        LanguageInfo("eo", "Esperanto", "Esperanto", one_other),
        LanguageInfo("tr", "Turkish", "Türkçe", one_other),
        LanguageInfo("fr", "French", "Français", french),
        LanguageInfo("ru", "Russian", "Русский", east_slavic),
        LanguageInfo("uk", "Ukrainian", "Українська", east_slavic),
        LanguageInfo("be", "Belarusian", "Беларуская", east_slavic),
        LanguageInfo("pl", "Polish", "Polski", PolishNumberSystem()),
        LanguageInfo("cs", "Czech", "Čeština", czech),
        LanguageInfo("sk", "Slovak", "Slovenčina", czech),
        LanguageInfo("lt", "Lithuanian", "Lietuvių", LithuanianNumberSystem()),
        LanguageInfo("ja", "Japanese", "日本語", single),
        LanguageInfo("zh", "Chinese", "中文", single),
        LanguageInfo("ko", "Korean", "한국어", single),
        LanguageInfo("vi", "Vietnamese", "Tiếng Việt", single),
        LanguageInfo("th", "Thai", "ไทย", single),
        LanguageInfo("id", "Indonesian", "Bahasa Indonesia", single),
    ]


def default_registry() -> LanguageRegistry:
    """Return a new registry populated with the built-in languages."""

    return LanguageRegistry(_builtin_languages())
