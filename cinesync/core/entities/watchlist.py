"""
Entites de la watchlist.

WatchlistItem est identifie par la cle composite (id, media_type) : au plus
un element par cle dans la watchlist.
"""

import math
import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Optional

from loguru import logger

from cinesync.core.errors import ValidationError
from cinesync.core.value_objects.media import MediaType

MIN_RATING = 0.0
MAX_RATING = 10.0

# Cle composite unique d'un element de watchlist
WatchlistKey = tuple[str, MediaType]

# Les horodatages RFC3339 du service peuvent porter des nanosecondes
_FRACTION_PATTERN = re.compile(r"(\.\d{6})\d+")


def make_key(item_id: str | int, media_type: "str | MediaType") -> WatchlistKey:
    """Construit la cle composite normalisee (id en chaine, type en enum)."""
    return (str(item_id), MediaType.parse(media_type))


def validate_rating(rating: Any) -> float:
    """
    Valide une note utilisateur.

    Raises:
        ValidationError: Si la note n'est pas un nombre fini entre 0 et 10
    """
    try:
        value = float(rating)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Rating must be a number, got {rating!r}") from e
    if math.isnan(value) or not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(f"Rating must be between 0 and 10, got {rating!r}")
    return value


def coerce_rating(rating: Any) -> float:
    """
    Ramene une note hors domaine a 0 (non notee) au lieu de la rejeter.

    Args:
        rating: Note saisie (nombre, chaine ou None)

    Returns:
        La note en float si valide, 0.0 sinon
    """
    if rating is None or rating == "":
        return 0.0
    try:
        return validate_rating(rating)
    except ValidationError:
        logger.warning("Note hors domaine ramenee a 0", rating=rating)
        return 0.0


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    normalized = _FRACTION_PATTERN.sub(r"\1", value.replace("Z", "+00:00"))
    try:
        return datetime.fromisoformat(normalized)
    except ValueError:
        logger.debug("Horodatage illisible ignore", added_at=value)
        return None


@dataclass(frozen=True)
class WatchlistItem:
    """
    Element de la watchlist personnelle.

    Attributs:
        id: Identifiant du contenu chez le fournisseur
        media_type: Type de contenu (film ou serie)
        title: Titre affiche
        poster_path: Reference du poster
        watched: Contenu marque comme vu
        rating: Note utilisateur 0-10 (0 = non note)
        added_at: Date d'ajout (renseignee par le service)
    """

    id: str
    media_type: MediaType
    title: str = ""
    poster_path: Optional[str] = None
    watched: bool = False
    rating: float = 0.0
    added_at: Optional[datetime] = None

    @property
    def key(self) -> WatchlistKey:
        return (self.id, self.media_type)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "WatchlistItem":
        """Construit un element depuis le JSON renvoye par ``GET /watchlist``."""
        return cls(
            id=str(data["id"]),
            media_type=MediaType.parse(data.get("type", "movie")),
            title=data.get("title") or "",
            poster_path=data.get("poster_path") or None,
            watched=bool(data.get("watched", False)),
            rating=float(data.get("rating") or 0.0),
            added_at=_parse_timestamp(data.get("added_at")),
        )

    def to_payload(self) -> dict[str, Any]:
        """Serialise l'element pour ``POST /watchlist``."""
        return {
            "id": self.id,
            "type": self.media_type.value,
            "title": self.title,
            "poster_path": self.poster_path or "",
            "watched": self.watched,
            "rating": self.rating,
        }

    def confirmed(self) -> "WatchlistItem":
        """Copie horodatee a la confirmation du service si la date manque."""
        if self.added_at is not None:
            return self
        return replace(self, added_at=datetime.now(timezone.utc))


@dataclass(frozen=True)
class WatchlistStats:
    """Statistiques agregees de la watchlist (``GET /watchlist/stats``)."""

    total_items: int = 0
    movies: int = 0
    tv_shows: int = 0
    watched_items: int = 0
    unwatched_items: int = 0
    average_rating: float = 0.0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "WatchlistStats":
        return cls(
            total_items=int(data.get("total_items") or 0),
            movies=int(data.get("movies") or 0),
            tv_shows=int(data.get("tv_shows") or 0),
            watched_items=int(data.get("watched_items") or 0),
            unwatched_items=int(data.get("unwatched_items") or 0),
            average_rating=float(data.get("average_rating") or 0.0),
        )


class WatchlistFilter(str, Enum):
    """Filtre d'affichage de la watchlist."""

    ALL = "all"
    WATCHED = "watched"
    UNWATCHED = "unwatched"

    def apply(self, items: Iterable[WatchlistItem]) -> list[WatchlistItem]:
        if self is WatchlistFilter.WATCHED:
            return [item for item in items if item.watched]
        if self is WatchlistFilter.UNWATCHED:
            return [item for item in items if not item.watched]
        return list(items)

    @property
    def empty_message(self) -> str:
        if self is WatchlistFilter.WATCHED:
            return "Aucun contenu vu pour l'instant"
        if self is WatchlistFilter.UNWATCHED:
            return "Aucun contenu a voir"
        return "Votre watchlist est vide"
