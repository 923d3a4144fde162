"""
Configuration constants and default settings for ttsnorm.
"""

# Rule Priorities
# Lower numbers run first. Pre-processing lives below 100, content
# rules between 100 and 499, clean-up rules from 500 upwards.
BASIC_SANITIZATION_PRIORITY = 10
URL_PRIORITY = 20
EMOJI_PRIORITY = 100
CURRENCY_PRIORITY = 200
ABBREVIATION_PRIORITY = 300
NUMBER_PRIORITY = 400
EXCESSIVE_PUNCTUATION_PRIORITY = 500
LETTER_REPETITION_PRIORITY = 510
WHITESPACE_PRIORITY = 9000

# Matching Settings
# Upper bound (seconds) for a single regex pass over one message
REGEX_TIMEOUT: float = 0.15

# Language passed to num2words
NUM2WORDS_LANGUAGE = "en"

# Spoken digits, used for decimals and version-like numbers
DIGIT_WORDS: tuple[str, ...] = (
    "zero",
    "one",
    "two",
    "three",
    "four",
    "five",
    "six",
    "seven",
    "eight",
    "nine",
)

# URL Settings
DEFAULT_URL_PLACEHOLDER = " link "
ALLOWED_URL_SCHEMES = frozenset({"http", "https"})

# Characters replaced during basic sanitization
FANCY_CHAR_MAP: dict[str, str] = {
    "“": '"',  # left double quote
    "”": '"',  # right double quote
    "‘": "'",  # left single quote
    "’": "'",  # right single quote / apostrophe
    "«": '"',  # guillemets
    "»": '"',
    "‹": "'",  # single guillemets
    "›": "'",
    "…": "...",  # ellipsis
    "—": "-",  # em dash
    "–": "-",  # en dash
}

# Currency Settings
# ISO code -> (singular, plural, fraction singular, fraction plural).
# Only currencies listed here are ever spoken.
CURRENCY_NAMES: dict[str, tuple[str, str, str, str]] = {
    "USD": ("dollar", "dollars", "cent", "cents"),
    "CAD": ("Canadian dollar", "Canadian dollars", "cent", "cents"),
    "AUD": ("Australian dollar", "Australian dollars", "cent", "cents"),
    "GBP": ("pound", "pounds", "penny", "pence"),
    "EUR": ("euro", "euros", "cent", "cents"),
    "JPY": ("yen", "yen", "sen", "sen"),
    "INR": ("rupee", "rupees", "paisa", "paise"),
    "BRL": ("real", "reais", "centavo", "centavos"),
    "CNY": ("yuan", "yuan", "fen", "fen"),
    "RUB": ("ruble", "rubles", "kopek", "kopeks"),
    "MXN": ("Mexican peso", "Mexican pesos", "centavo", "centavos"),
}

# Symbols claimed by several regions always resolve to these codes
CURRENCY_SYMBOL_PRIORITY: dict[str, str] = {
    "$": "USD",
    "¥": "JPY",
}

# Region -> (ISO code, local currency symbol).
# Snapshot of common CLDR region data; regions whose currency has no
# entry in CURRENCY_NAMES are dropped when the registry is built.
LOCALE_CURRENCY_DATA: dict[str, tuple[str, str]] = {
    "US": ("USD", "$"),
    "PR": ("USD", "$"),
    "EC": ("USD", "$"),
    "CA": ("CAD", "$"),
    "AU": ("AUD", "$"),
    "NZ": ("NZD", "$"),
    "MX": ("MXN", "$"),
    "GB": ("GBP", "£"),
    "IE": ("EUR", "€"),
    "DE": ("EUR", "€"),
    "FR": ("EUR", "€"),
    "ES": ("EUR", "€"),
    "IT": ("EUR", "€"),
    "NL": ("EUR", "€"),
    "AT": ("EUR", "€"),
    "BE": ("EUR", "€"),
    "PT": ("EUR", "€"),
    "FI": ("EUR", "€"),
    "GR": ("EUR", "€"),
    "CN": ("CNY", "¥"),
    "JP": ("JPY", "￥"),
    "IN": ("INR", "₹"),
    "BR": ("BRL", "R$"),
    "RU": ("RUB", "₽"),
    "KR": ("KRW", "₩"),
    "CH": ("CHF", "CHF"),
    "SE": ("SEK", "kr"),
    "NO": ("NOK", "kr"),
    "DK": ("DKK", "kr."),
    "PL": ("PLN", "zł"),
    "TR": ("TRY", "₺"),
    "IL": ("ILS", "₪"),
    "ZA": ("ZAR", "R"),
}

# Abbreviation Settings
# Chat, gaming and streaming slang. Keys are matched case-insensitively.
DEFAULT_ABBREVIATIONS: dict[str, str] = {
    # General chat
    "lol": "laughing out loud",
    "rofl": "rolling on the floor laughing",
    "brb": "be right back",
    "bbl": "be back later",
    "bbs": "be back soon",
    "omg": "oh my god",
    "omw": "on my way",
    "btw": "by the way",
    "fyi": "for your information",
    "ttyl": "talk to you later",
    "tyt": "take your time",
    "idk": "I don't know",
    "idc": "I don't care",
    "imo": "in my opinion",
    "imho": "in my humble opinion",
    "thx": "thanks",
    "ty": "thank you",
    "tyvm": "thank you very much",
    "np": "no problem",
    "yw": "you're welcome",
    "pls": "please",
    "plz": "please",
    "sry": "sorry",
    "afaik": "as far as I know",
    "smh": "shaking my head",
    "tbh": "to be honest",
    "fomo": "fear of missing out",
    "gtg": "got to go",
    "g2g": "got to go",
    "irl": "in real life",
    "rn": "right now",
    "fr": "for real",
    "cmon": "come on",
    # Gaming / streaming
    "gg": "good game",
    "ggwp": "good game well played",
    "glhf": "good luck have fun",
    "afk": "away from keyboard",
    "ez": "easy",
    "noob": "newbie",
    "kekw": "kek double u",
    "omegalul": "omega lol",
    "w": "dub",
    "l": "el",
    "dc": "d c",
    "ig": "in game",
    "yt": "youtube",
    "twf": "then we fight",
    # Technical / setup
    "os": "o s",
    "cpu": "c p u",
    "gpu": "g p u",
}
