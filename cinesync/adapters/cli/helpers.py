"""
Utilitaires partages pour les commandes CLI de CineSync.

Ce module fournit :
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container et fermant la passerelle
- parse_media_type : choix film/serie depuis l'option --tv
"""

from contextlib import contextmanager
from functools import wraps

from loguru import logger as loguru_logger

from cinesync.container import Container
from cinesync.logging_config import LOGGER_NAME
from cinesync.core.value_objects import MediaType


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable(LOGGER_NAME)
    try:
        yield
    finally:
        loguru_logger.enable(LOGGER_NAME)


def with_container():
    """
    Decorateur qui injecte un container en premier argument.

    Le client HTTP de la passerelle est ferme a la fin de la commande.

    Usage:
        @with_container()
        async def my_command(container, ...):
            store = container.watchlist_store()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            try:
                return await func(container, *args, **kwargs)
            finally:
                await container.gateway().close()
        return wrapper
    return decorator


def parse_media_type(tv: bool) -> MediaType:
    return MediaType.TV if tv else MediaType.MOVIE
