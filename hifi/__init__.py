"""Building blocks for finding internal APIs and routes in web app bytes."""

__version__ = "0.1.0"

__all__ = [
    "grep",
    "hash",
    "jsonscan",
    "literal",
    "nextparser",
    "policies",
    "render",
    "resolve",
    "site",
]