from datetime import datetime
from typing import Optional
from ..core.config import settings

DEFAULT_POSTER_SIZE = "w500"
DEFAULT_BACKDROP_SIZE = "w1280"


def image_url(path: Optional[str], size: str = DEFAULT_POSTER_SIZE,
              base_url: Optional[str] = None) -> Optional[str]:
    """Full TMDB image URL for a poster/profile path"""
    if not path:
        return None
    base = (base_url or settings.TMDB_IMAGE_BASE_URL).rstrip("/")
    return f"{base}/{size}{path}"


def backdrop_url(path: Optional[str], size: str = DEFAULT_BACKDROP_SIZE,
                 base_url: Optional[str] = None) -> Optional[str]:
    return image_url(path, size=size, base_url=base_url)


def _parse_date(date_string: Optional[str]) -> Optional[datetime]:
    if not date_string:
        return None
    try:
        return datetime.strptime(date_string[:10], "%Y-%m-%d")
    except ValueError:
        return None


def format_rating(rating: Optional[float]) -> Optional[str]:
    """7 -> '7.0'"""
    if rating is None:
        return None
    return f"{float(rating):.1f}"


def format_year(date_string: Optional[str]) -> Optional[int]:
    parsed = _parse_date(date_string)
    return parsed.year if parsed else None


def format_date(date_string: Optional[str]) -> Optional[str]:
    """'2010-07-16' -> 'July 16, 2010'"""
    parsed = _parse_date(date_string)
    if parsed is None:
        return None
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def format_runtime(minutes: Optional[int]) -> Optional[str]:
    """148 -> '2h 28m'"""
    if not minutes:
        return None
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m"


def format_currency(amount: Optional[int]) -> Optional[str]:
    """USD with thousands separators and no cents"""
    if not amount:
        return None
    return f"${amount:,.0f}"
