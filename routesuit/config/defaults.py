"""Default clothing messages per language."""

from routesuit.config.schema import ClothingMessages, Language

DEFAULT_CLOTHING_MESSAGES: dict[Language, ClothingMessages] = {
    Language.ENGLISH: ClothingMessages(),
    Language.SWEDISH: ClothingMessages(
        level_1="Shorts och t-shirt",
        level_2="T-shirt med lätt jacka",
        level_3="Långärmat och lätt jacka",
        level_4="Tröja och jacka",
        level_5="Tjock jacka och lager",
        level_6="Vinterjacka och varma lager viktigt",
        level_7="Tung vinterutrustning krävs",
    ),
}


def default_clothing_messages(language: str) -> ClothingMessages:
    """Default messages for a language code, falling back to English."""
    try:
        return DEFAULT_CLOTHING_MESSAGES[Language(language.lower())]
    except ValueError:
        return DEFAULT_CLOTHING_MESSAGES[Language.ENGLISH]
