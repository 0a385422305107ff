"""Pattern tables for parsing wine journal, receipt and label text."""

import re

# Plausible vintage range for four-digit years. Later years (e.g. "NOW-2030+")
# are drinking windows, not vintages.
MIN_VINTAGE = 1980
MAX_VINTAGE = 2025

# Plausible bottle price range for bare numbers
MIN_PRICE = 15
MAX_PRICE = 500

MIN_RATING = 1
MAX_RATING = 10

# Descriptions this short are OCR noise
MIN_DESCRIPTION_LENGTH = 10

FOUR_DIGIT_VINTAGE = re.compile(r"\b(19[89]\d|200\d|201\d|202[0-5])\b")

# Date fragment shared by header and tasting lines: "10/14/25", "4/20", "3/26/2024"
DATE_FRAGMENT = r"\d{1,2}/\d{1,2}(?:/\d{2,4})?"

DIVIDER = "//"

# Lines to skip entirely: order totals, section banners, placeholders
SKIP_PATTERNS = [
    re.compile(r"^see above", re.IGNORECASE),
    re.compile(r"^xx+$", re.IGNORECASE),
    re.compile(r"^—+$"),
    re.compile(r"TOTAL:", re.IGNORECASE),
    re.compile(r"^\d+\s+TOTAL", re.IGNORECASE),
    re.compile(r"^Number\s+Price", re.IGNORECASE),
    re.compile(r"^(Whites|Reds) you recommend", re.IGNORECASE),
    re.compile(r"^Sancerre\s+\d", re.IGNORECASE),
    re.compile(r"^\d+\s+Frank family", re.IGNORECASE),
    re.compile(r"^Value Full Reds$", re.IGNORECASE),
    re.compile(r"^EU (Whites|Reds)$", re.IGNORECASE),
    re.compile(r"^Top Reds$", re.IGNORECASE),
    re.compile(r"^Medium Body Reds$", re.IGNORECASE),
    re.compile(r"^Italian/Iberian$", re.IGNORECASE),
    re.compile(r"^Portuguese Wines$", re.IGNORECASE),
    re.compile(r"^(CHARDONNAY|CABERNET)$", re.IGNORECASE),
    re.compile(r"^BIG REDS & PORT$", re.IGNORECASE),
    re.compile(r"^STONY WHITES$", re.IGNORECASE),
    re.compile(r"^Here's the cleaned", re.IGNORECASE),
    re.compile(r"^ABOVE TO", re.IGNORECASE),
    # Orphaned ": 8, notes" continuation of a wrapped tasting
    re.compile(r"^:\s*\d"),
]

# Lines that read like seller copy rather than a wine entry
DESCRIPTION_STARTERS = [
    re.compile(
        r"^(FROM |MADE BY|THIS IS|WE |WE'VE |IN A BLIND|FIRST TASTE|HAVING BEEN|USING "
        r"|CALLED |BASED ON|FEW AMERICAN|THOUGH |IF YOU|LAVISHLY|FAMOUS |BEAUTIFULLY"
        r"|MODERN |NICELY |MILDLY |SHOWING |STYLED |REPLICATING|PRE-\d|NOSE:|SEE ABOVE"
        r"|HERE'S|HERE IS|IT'S|AN AMERICAN)",
        re.IGNORECASE,
    ),
    # ALL CAPS sentence ending with a period (case-sensitive on purpose)
    re.compile(r"^[A-Z]{2,}[A-Z\s,.']+\.\s*$"),
    re.compile(r"^THE\s+\d{4}\s", re.IGNORECASE),
    re.compile(r"^(THE|A|AN)\s+[A-Z][a-z]+\s+(IS|WAS|HAS|MAKES|COMES)", re.IGNORECASE),
    re.compile(
        r"\bIS\s+(A|AN|THE|AS|ONE|PERHAPS|MAYBE|EXCELLENT|ON|NOT|REGARDED)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\bWAS\s+(A|AN|THE|MY|OUR|EXCELLENT)\b", re.IGNORECASE),
    re.compile(r"\bHIS\s+\d{4}\b", re.IGNORECASE),
    re.compile(r"BEST\s+NOW", re.IGNORECASE),
    re.compile(r"NOW-\d{4}\+?\.?\s*$", re.IGNORECASE),
    re.compile(r"\bTHAT\s+(OWNS|CAPTURES|COMES|MAKES|IS|WAS)\b", re.IGNORECASE),
    re.compile(r"\bPRETTY\s+MUCH\b", re.IGNORECASE),
    re.compile(r"\bIT'S\s+(A|THE|AS|ENTIRELY|BASED|FROM|MADE)\b", re.IGNORECASE),
    re.compile(r"\bFOR\s+ME,?\s+THIS\b", re.IGNORECASE),
    re.compile(r"-type\s+\w+\.\s+For", re.IGNORECASE),
    re.compile(r"^\d{4}\s+IS\s+", re.IGNORECASE),
    re.compile(r"^IS\s+(A|AN|THE|LAVISHLY|FAIRLY|VERY|RATHER|QUITE)", re.IGNORECASE),
]

# Color keyword checks, applied in this order to accent-stripped lower-case text.
# Sparkling and rose come first: "Brut Pinot Noir" is sparkling, not red.
SPARKLING_PATTERN = re.compile(
    r"champagne|prosecco|cremant|cava|brut(?!\s+nature)|sparkling|spumante"
    r"|blancs?\s+de\s+blancs?|methode|mousseux|agnes"
)

ROSE_PATTERN = re.compile(r"\brose\b|pink\b")
# "Rose de Loire" style region names are not rose wine
ROSE_EXCLUSION_PATTERN = re.compile(r"rose\s*(de|di|du)")

WHITE_PATTERN = re.compile(
    r"chardonnay|sauvignon\s*blanc|riesling|pinot\s*gri[os]|viognier|gewurz|muscadet"
    r"|albarino|alvarinho|chenin|sancerre|chablis|pouilly|meursault|montrachet|puligny"
    r"|chassagne|vire|macon|fuisse|gruner|pecorino|arneis|vermentino|greco|falanghina"
    r"|fiano|soave|gavi|vouvray|white|blanc\b|bianco|weiss|stoan|godello|furmint"
    r"|marsanne|roussanne"
)

RED_PATTERN = re.compile(
    r"cabernet|merlot|pinot\s*noir|syrah|shiraz|malbec|zinfandel|zin\b|sangiovese"
    r"|nebbiolo|tempranillo|grenache|barolo|barbaresco|brunello|chianti|valpolicella"
    r"|amarone|rioja|ribera|douro|chateauneuf|gigondas|bandol|cotes?\s*du\s*rhone"
    r"|hermitage|crozes|st[.\s]*julien|margaux|pauillac|st[.\s]*estephe|pomerol|medoc"
    r"|graves|pessac|fronsac|bourg|blaye|tannat|aglianico|primitivo|nero\s*d'avola"
    r"|montepulciano|barbera|dolcetto|lagrein|petite?\s*sirah|mourvedre|carignan|gamay"
    r"|beaujolais|fleurie|morgon|moulin|touriga|tinta|sfursat|rosso|rouge|tinto|rot\b"
    r"|susumaniello|madiran|taurasi|baga|cab\b|cab/|meunier"
)

# Tokens whose trailing number is part of the wine's identity ("BIN 389")
NAME_NUMBER_GUARD = re.compile(r"\b(BIN|CRU|OPUS|LOT|BLOCK|NO|NUMBER|#)\s+\d{2,3}", re.IGNORECASE)

# Label mode: producer keywords and varietal/cuvee keywords
WINERY_PATTERN = re.compile(
    r"château|chateau|domaine|bodega|cave|cantina|weingut|tenuta|fattoria|podere"
    r"|vignoble|vigneron|cellars?|winery|vineyards?|estate",
    re.IGNORECASE,
)

VARIETAL_PATTERN = re.compile(
    r"cabernet|merlot|pinot|syrah|shiraz|chardonnay|sauvignon|riesling|malbec|zinfandel"
    r"|sangiovese|nebbiolo|tempranillo|grenache|viognier|reserve|gran?\s*reserva"
    r"|cuvée|cuvee|grand\s*cru|premier\s*cru|selection|single\s*vineyard",
    re.IGNORECASE,
)

# Label lines that never contribute to the wine name
LABEL_NOISE_PATTERNS = [
    re.compile(r"^\d+$"),
    re.compile(r"\d+(\.\d+)?%?\s*(alc|vol|alcohol)", re.IGNORECASE),
    re.compile(r"\balc\.?\s*\d", re.IGNORECASE),
    re.compile(r"\d+\s*ml", re.IGNORECASE),
    re.compile(r"contains?\s*sulfites", re.IGNORECASE),
    re.compile(r"government\s*warning", re.IGNORECASE),
    re.compile(r"^product\s+of", re.IGNORECASE),
    re.compile(
        r"^(estate\s+bottled|bottled\s+by|produced?\s+(by|and)|imported\s+by)",
        re.IGNORECASE,
    ),
    re.compile(r"^(19|20)\d{2}$"),
]

BARCODE_PATTERN = re.compile(r"^\d{8,}$")

LABEL_MIN_LINE_LENGTH = 3
LABEL_MAX_NAME_LENGTH = 100
LABEL_DEFAULT_VINTAGE_AGE = 2
UNKNOWN_WINE_NAME = "Unknown Wine"
