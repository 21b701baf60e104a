"""
Contenu de repli de la recherche quand le service est injoignable.

Le jeu de repli est rendu avec le statut UNAVAILABLE pour que
l'utilisateur distingue "service indisponible" de "aucun resultat".
"""

from cinesync.core.value_objects import MediaSummary, MediaType, SearchPage

FALLBACK_MOVIES: tuple[MediaSummary, ...] = (
    MediaSummary(
        id="550",
        media_type=MediaType.MOVIE,
        title="Fight Club",
        year=1999,
        vote_average=8.4,
        overview=(
            "A ticking-time-bomb insomniac and a slippery soap salesman channel "
            "primal male aggression into a shocking new form of therapy."
        ),
    ),
    MediaSummary(
        id="13",
        media_type=MediaType.MOVIE,
        title="Forrest Gump",
        year=1994,
        vote_average=8.5,
        overview=(
            "A man with a low IQ has accomplished great things in his life and "
            "been present during significant historic events."
        ),
    ),
    MediaSummary(
        id="27205",
        media_type=MediaType.MOVIE,
        title="Inception",
        year=2010,
        vote_average=8.4,
        overview=(
            "Cobb, a skilled thief who commits corporate espionage by "
            "infiltrating the subconscious of his targets."
        ),
    ),
)


def build_fallback_page(query: str, media_type: MediaType) -> SearchPage:
    """
    Construit la page de repli pour une requete.

    Les films de repli contenant la requete (insensible a la casse) sont
    retenus ; si aucun ne correspond, tout le jeu est affiche. Les series
    n'ont pas de jeu de repli.
    """
    if media_type is not MediaType.MOVIE:
        return SearchPage(page=1)

    needle = query.lower()
    matches = tuple(movie for movie in FALLBACK_MOVIES if needle in movie.title.lower())
    return SearchPage(
        page=1,
        results=matches or FALLBACK_MOVIES,
        total_pages=1,
        total_results=len(FALLBACK_MOVIES),
    )
