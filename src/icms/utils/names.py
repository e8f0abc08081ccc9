import re

_SPACES = re.compile(r"\s+")


def build_full_name(first: str | None, middle: str | None = None, last: str | None = None) -> str:
    """
    'John', None, 'Doe' -> 'John Doe'; '  John ', ' Q ', 'Doe' -> 'John Q Doe'.
    Blank parts are skipped and inner whitespace collapses to one space.
    """
    parts = [p for p in (first, middle, last) if p is not None and str(p).strip()]
    return _SPACES.sub(" ", " ".join(str(p).strip() for p in parts)).strip()
