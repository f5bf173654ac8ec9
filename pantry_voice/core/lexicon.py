"""Locale tables for voice command interpretation.

Every keyword, number word and user-facing sentence the interpreter relies on
lives here as ordered, declarative data. The extractor, the intent classifier
and the renderers only read these tables, so a test (or a new locale) can swap
them without touching the algorithms.

Table order is significant: where two entries could match, the earlier one wins.
"""

from dataclasses import dataclass

from pantry_voice.domain.food import FoodCategory, StorageLocation


@dataclass(frozen=True)
class ResponseTemplates:
    """User-facing sentences, formatted with ``str.format``."""

    # Query answers
    nothing_today: str
    nothing_today_summary: str
    today_list: str
    today_summary: str
    nothing_tomorrow: str
    nothing_tomorrow_summary: str
    tomorrow_list: str
    tomorrow_summary: str
    all_fresh: str
    all_fresh_summary: str
    general_today_line: str
    general_tomorrow_line: str
    general_soon_line: str
    general_summary: str
    query_error: str
    query_error_summary: str

    # Session outcomes
    capability_unavailable: str
    capability_unavailable_suggestion: str
    recognition_failed: str
    recognition_failed_suggestion: str
    unrecognized: str
    unrecognized_suggestion: str

    # Status badges
    expired_badge: str
    expiring_badge: str
    fresh_badge: str

    # Reminders
    reminder_today_title: str
    reminder_today_body: str
    reminder_tomorrow_title: str
    reminder_tomorrow_body: str

    # Inventory summary
    missing_category: str

    list_separator: str = ", "
    line_separator: str = "\n\n"


@dataclass(frozen=True)
class Lexicon:
    """Ordered keyword tables for one locale."""

    locale: str
    number_words: tuple[tuple[str, int], ...]
    month_unit: str
    day_unit: str
    duration_cues: tuple[str, ...]
    food_names: tuple[str, ...]
    stop_words: frozenset[str]
    categories: tuple[tuple[str, FoodCategory], ...]
    location_groups: tuple[tuple[tuple[str, ...], StorageLocation], ...]
    query_templates: tuple[str, ...]
    today_keywords: tuple[str, ...]
    tomorrow_keywords: tuple[str, ...]
    responses: ResponseTemplates

    def category_for(self, name: str) -> FoodCategory:
        """Look up the category of a food name, defaulting to OTHER."""
        return dict(self.categories).get(name, FoodCategory.OTHER)


ITALIAN = Lexicon(
    locale="it-IT",
    number_words=(
        ("uno", 1),
        ("una", 1),
        ("due", 2),
        ("tre", 3),
        ("quattro", 4),
        ("cinque", 5),
        ("sei", 6),
        ("sette", 7),
        ("otto", 8),
        ("nove", 9),
        ("dieci", 10),
        ("quindici", 15),
        ("venti", 20),
        ("trenta", 30),
    ),
    month_unit=r"(?:mesi?|mese)",
    day_unit=r"(?:giorni?|giorno|gg)",
    duration_cues=("scadenza", "tra", "fra"),
    food_names=(
        "latte", "pane", "mele", "pomodori", "carne", "pesce", "formaggio", "yogurt", "pasta", "riso",
        "insalata", "lattuga", "verdure", "carote", "patate", "cipolle", "aglio",
        "prosciutto", "salame", "mortadella", "bresaola",
        "banana", "arance", "limoni", "kiwi", "fragole", "uva",
        "pollo", "manzo", "maiale", "vitello",
        "salmone", "tonno", "orata", "branzino",
        "mozzarella", "parmigiano", "gorgonzola", "ricotta",
        "biscotti", "crackers", "grissini",
        "olio", "aceto", "sale", "zucchero", "farina",
        "uova", "burro", "margarina",
    ),
    stop_words=frozenset({
        "che", "tra", "per", "con", "nel", "dal", "del", "della", "delle", "dei", "degli",
        "scade", "scadenza", "giorni", "giorno", "aggiungi", "inserisci",
    }),
    categories=(
        ("latte", FoodCategory.DAIRY), ("formaggio", FoodCategory.DAIRY), ("yogurt", FoodCategory.DAIRY),
        ("mozzarella", FoodCategory.DAIRY), ("parmigiano", FoodCategory.DAIRY),
        ("gorgonzola", FoodCategory.DAIRY), ("ricotta", FoodCategory.DAIRY),
        ("burro", FoodCategory.DAIRY), ("margarina", FoodCategory.DAIRY),
        ("carne", FoodCategory.MEAT), ("pollo", FoodCategory.MEAT), ("manzo", FoodCategory.MEAT),
        ("maiale", FoodCategory.MEAT), ("vitello", FoodCategory.MEAT), ("prosciutto", FoodCategory.MEAT),
        ("salame", FoodCategory.MEAT), ("mortadella", FoodCategory.MEAT), ("bresaola", FoodCategory.MEAT),
        ("pesce", FoodCategory.FISH), ("salmone", FoodCategory.FISH), ("tonno", FoodCategory.FISH),
        ("orata", FoodCategory.FISH), ("branzino", FoodCategory.FISH),
        ("mele", FoodCategory.FRUIT), ("banana", FoodCategory.FRUIT), ("arance", FoodCategory.FRUIT),
        ("limoni", FoodCategory.FRUIT), ("kiwi", FoodCategory.FRUIT), ("fragole", FoodCategory.FRUIT),
        ("uva", FoodCategory.FRUIT),
        ("pomodori", FoodCategory.VEGETABLES), ("insalata", FoodCategory.VEGETABLES),
        ("lattuga", FoodCategory.VEGETABLES), ("verdure", FoodCategory.VEGETABLES),
        ("carote", FoodCategory.VEGETABLES), ("patate", FoodCategory.VEGETABLES),
        ("cipolle", FoodCategory.VEGETABLES), ("aglio", FoodCategory.VEGETABLES),
        ("pane", FoodCategory.GRAINS), ("pasta", FoodCategory.GRAINS), ("riso", FoodCategory.GRAINS),
        ("biscotti", FoodCategory.GRAINS), ("crackers", FoodCategory.GRAINS),
        ("grissini", FoodCategory.GRAINS), ("farina", FoodCategory.GRAINS),
        ("uova", FoodCategory.OTHER), ("olio", FoodCategory.OTHER), ("aceto", FoodCategory.OTHER),
        ("sale", FoodCategory.OTHER), ("zucchero", FoodCategory.OTHER),
    ),
    location_groups=(
        (("frigorifero", "frigo"), StorageLocation.FRIDGE),
        (("freezer", "congelatore"), StorageLocation.FREEZER),
        (("dispensa", "credenza"), StorageLocation.PANTRY),
        # Known approximation: any drawer is assumed to be the fridge drawer.
        (("cassetto",), StorageLocation.FRIDGE),
    ),
    query_templates=(
        r"cosa.*scade.*oggi",
        r"quali.*scade.*oggi",
        r"quali.*alimenti.*scade",
        r"quali.*alimenti.*scadono",
        r"cosa.*scadenza.*oggi",
        r"alimenti.*scade.*oggi",
        r"cosa.*sta.*scadendo",
        r"quali.*stanno.*scadendo",
        r"cosa.*scade.*domani",
        r"cosa.*scade.*fra",
        r"quali.*scade.*fra",
        r"quali.*scadono.*fra",
        r"alimenti.*scadenza",
        r"lista.*scadenza",
        r"controlla.*scadenza",
        r"dimmi.*cosa.*scade",
        r"dimmi.*quali.*scade",
    ),
    today_keywords=("oggi",),
    tomorrow_keywords=("domani",),
    responses=ResponseTemplates(
        nothing_today="✅ Nessun alimento scade oggi!",
        nothing_today_summary="Nessuna scadenza oggi",
        today_list="⚠️ Oggi scade: {names}",
        today_summary="{count} alimento/i in scadenza oggi",
        nothing_tomorrow="✅ Nessun alimento scade domani!",
        nothing_tomorrow_summary="Nessuna scadenza domani",
        tomorrow_list="⚠️ Domani scade: {names}",
        tomorrow_summary="{count} alimento/i scade domani",
        all_fresh="✅ Tutti gli alimenti sono freschi!",
        all_fresh_summary="Nessuna scadenza imminente",
        general_today_line="⚠️ Oggi: {names}",
        general_tomorrow_line="📅 Domani: {names}",
        general_soon_line="⏰ Prossimi giorni: {names}",
        general_summary="{count} alimento/i in scadenza",
        query_error="Errore nel controllare le scadenze. Riprova più tardi.",
        query_error_summary="Errore di connessione",
        capability_unavailable="Il riconoscimento vocale non è supportato in questo browser",
        capability_unavailable_suggestion="Usa un browser con riconoscimento vocale o inserisci l'alimento a mano.",
        recognition_failed="Errore riconoscimento",
        recognition_failed_suggestion="Riprova a parlare più chiaramente",
        unrecognized='Non riconosciuto: "{transcript}"',
        unrecognized_suggestion='Prova a dire qualcosa come "latte che scade tra 5 giorni" o "cosa scade oggi?"',
        expired_badge="🚫 SCADUTO da {days} giorni",
        expiring_badge="⚠️ Scade tra {days} giorni",
        fresh_badge="✅ Fresco ({days} giorni rimanenti)",
        reminder_today_title="🚨 Alimento in scadenza oggi!",
        reminder_today_body="{name} scade oggi. Consumalo presto!",
        reminder_tomorrow_title="⚠️ Alimento scade domani",
        reminder_tomorrow_body="{name} scade domani. Pianifica di consumarlo!",
        missing_category="Senza categoria",
    ),
)

_LEXICONS: dict[str, Lexicon] = {ITALIAN.locale: ITALIAN}


def get_lexicon(locale: str) -> Lexicon:
    """Resolve the lexicon for a configured locale.

    Raises:
        ValueError: If no table is registered for the locale
    """
    try:
        return _LEXICONS[locale]
    except KeyError:
        msg = f"Unsupported locale: {locale}. Available: {', '.join(sorted(_LEXICONS))}"
        raise ValueError(msg) from None
