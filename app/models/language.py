from enum import Enum


class Language(str, Enum):
    ENGLISH = "en"
    SPANISH = "es"
    HINDI = "hi"
    BENGALI = "bn"
    TAMIL = "ta"
    TELUGU = "te"
    MARATHI = "mr"
    GUJARATI = "gu"

    @property
    def display_name(self) -> str:
        return LANGUAGE_DISPLAY_NAMES[self]

    def for_prompt(self) -> str:
        """Language as written into system instructions, e.g. 'Hindi (hi)'."""
        return f"{self.display_name} ({self.value})"


LANGUAGE_DISPLAY_NAMES = {
    Language.ENGLISH: "English",
    Language.SPANISH: "Spanish",
    Language.HINDI: "Hindi",
    Language.BENGALI: "Bengali",
    Language.TAMIL: "Tamil",
    Language.TELUGU: "Telugu",
    Language.MARATHI: "Marathi",
    Language.GUJARATI: "Gujarati",
}
