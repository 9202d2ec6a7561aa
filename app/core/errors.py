import random

ERROR_MARKERS = (
    "<:mdmd:957638205442773063>",
    "<:chokbar:1145416431547203684>",
    "<:cas:1038561443185958972>",
    "<:bonkline:1082746112714227773>",
    "<:rireline:935485562687750175>",
    "<:wumboflush:931195078133821521>",
    "<:commentcamonreuf:1099314723255754844>",
)


class InvalidPost(ValueError):
    """Raised before any query when a post has neither comment nor attachment."""


def pick_marker(rng=random) -> str:
    return rng.choice(ERROR_MARKERS)


def friendly(message: str, rng=random) -> str:
    return f"{pick_marker(rng)} {message}"


def get_rng():
    return random
