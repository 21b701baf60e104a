"""
Moteur de pagination : fonction pure (page courante, total) -> PageModel.

La fenetre visible couvre ``[page - rayon, page + rayon]`` bornee a
``[1, total]``. La premiere et la derniere page restent toujours
accessibles, separees de la fenetre par une ellipse quand un trou existe.

Le total de pages est borne par l'appelant (limite du fournisseur) AVANT
l'appel : voir clamp_total_pages().
"""

from cinesync.core.value_objects import ELLIPSIS, PageButton, PageModel

DEFAULT_WINDOW_RADIUS = 2
PROVIDER_MAX_PAGES = 500


def clamp_total_pages(total_pages: int, maximum: int = PROVIDER_MAX_PAGES) -> int:
    """Borne le nombre de pages annonce a la limite imposee par le fournisseur."""
    return max(0, min(total_pages, maximum))


def compute_page_model(
    current_page: int,
    total_pages: int,
    window_radius: int = DEFAULT_WINDOW_RADIUS,
) -> PageModel:
    """
    Calcule la barre de pagination.

    Args:
        current_page: Page affichee (1-indexee)
        total_pages: Nombre total de pages, deja borne
        window_radius: Nombre de pages visibles de part et d'autre de la courante

    Returns:
        PageModel sans bouton si total_pages <= 1

    Example:
        >>> compute_page_model(7, 20).labels
        ['1', '…', '5', '6', '7', '8', '9', '…', '20']
    """
    has_prev = current_page > 1
    has_next = current_page < total_pages

    if total_pages <= 1:
        return PageModel(
            current_page=current_page,
            total_pages=total_pages,
            buttons=(),
            has_prev=has_prev,
            has_next=has_next,
        )

    start = max(1, current_page - window_radius)
    end = min(total_pages, current_page + window_radius)

    buttons: list[PageButton] = []
    if start > 1:
        buttons.append(PageButton(number=1))
        if start > 2:
            buttons.append(ELLIPSIS)

    buttons.extend(
        PageButton(number=page, current=page == current_page)
        for page in range(start, end + 1)
    )

    if end < total_pages:
        if end < total_pages - 1:
            buttons.append(ELLIPSIS)
        buttons.append(PageButton(number=total_pages))

    return PageModel(
        current_page=current_page,
        total_pages=total_pages,
        buttons=tuple(buttons),
        has_prev=has_prev,
        has_next=has_next,
    )
