"""Word tables used by the blocklist and venue classifiers.

Entries are lower-case substrings; callers lower-case the text they match.
"""

# Adult-content and noise venues/titles. Matched as substrings.
BLOCKED_WORDS: tuple[str, ...] = (
    "erotik",
    "sex",
    "sexy",
    "adult",
    "porno",
    "porn",
    "blue movie",
    "fkk",
    "bordell",
    "strip",
    "peepshow",
    "escort",
    "privatclub",
    "sauna club",
    "sauna",
    "massage",
    "erdbeermund",
    "kino hole",
    "hole kino",
    "sexkino",
    "adult kino",
)

# Generic words that mark a venue title as a cinema
CINEMA_WORDS: tuple[str, ...] = (
    "kino",
    "kinos",
    "cinema",
    "cine",
    "movie theater",
    "movie theatre",
    "filmtheater",
    "lichtspiele",
    "filmhaus",
    "programmkino",
    "arthouse",
    "filmkunst",
    "kinocenter",
)

# German cinema chains and well-known multiplex brands
CINEMA_BRANDS: tuple[str, ...] = (
    "cinedom",
    "cinemaxx",
    "uci",
    "cineplex",
    "cinestar",
    "kinopolis",
    "filmpalast",
    "metropolis",
)

# Tokens in the provider's category/type fields that confirm a cinema
CINEMA_CATEGORY_TOKENS: tuple[str, ...] = (
    "movie",
    "cinema",
    "theater",
)

# Nightlife words that need a positive cinema signal to be accepted
BAD_VENUE_WORDS: tuple[str, ...] = (
    "club",
    "bar",
    "lounge",
    "massage",
    "sauna",
    "bordell",
)
