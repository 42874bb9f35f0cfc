"""Single-letter time units."""

from types import MappingProxyType

from src.criteria.exceptions import UnknownTimeUnit

SECONDS_PER_UNIT = MappingProxyType({
    's': 1,
    'm': 60,
    'h': 3600,
    'd': 86400,
    'w': 604800,
    'y': 31536000,  # 365 days
})


def seconds_per_unit(token: str) -> int:
    """Number of seconds in one `token` unit.

    Raises:
        UnknownTimeUnit: If the token is not a known unit letter
    """
    try:
        return SECONDS_PER_UNIT[token]
    except KeyError:
        raise UnknownTimeUnit(token) from None
