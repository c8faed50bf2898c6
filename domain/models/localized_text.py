"""
Localized text value object.

Exercise names and descriptions are authored in several languages. Hebrew
is the canonical authoring language; English and Spanish are optional.
"""

from enum import Enum
from typing import List, Union

from pydantic import BaseModel, Field


class AppLanguage(str, Enum):
    """Languages the catalog is authored in, canonical language first."""

    HE = "he"
    EN = "en"
    ES = "es"


LANGUAGE_ORDER = (AppLanguage.HE, AppLanguage.EN, AppLanguage.ES)


class LocalizedText(BaseModel):
    """
    Value object holding one text per language.

    Missing languages are stored as empty strings, never as null.

    Examples:
        >>> name = LocalizedText(he="שכיבות סמיכה", en="Push-up")
        >>> name.get("es")
        'שכיבות סמיכה'
        >>> name.populated_languages()
        ['he', 'en']
    """

    he: str = Field(default="", description="Hebrew text (canonical)")
    en: str = Field(default="", description="English text")
    es: str = Field(default="", description="Spanish text")

    def get(self, language: Union[AppLanguage, str] = AppLanguage.HE) -> str:
        """
        Get the text for a language, falling back to the other languages.

        Args:
            language: Preferred language

        Returns:
            The preferred text, else the first populated language in
            canonical order, else an empty string.
        """
        code = language.value if isinstance(language, AppLanguage) else language
        preferred = getattr(self, code, "") if code in ("he", "en", "es") else ""
        if preferred and preferred.strip():
            return preferred
        for lang in LANGUAGE_ORDER:
            text = getattr(self, lang.value)
            if text and text.strip():
                return text
        return ""

    def populated_languages(self) -> List[str]:
        """Languages with non-blank text, in canonical order."""
        return [
            lang.value
            for lang in LANGUAGE_ORDER
            if getattr(self, lang.value).strip()
        ]

    def __str__(self) -> str:
        return self.get()

    model_config = {"frozen": True}
