"""
Jetons d'annulation cooperatifs pour les appels reseau.

Un jeton annule fait resoudre l'appel qu'il garde en RequestCancelled.
L'annulation est consultative : la requete sous-jacente est abandonnee si
elle est encore en cours, mais une reponse deja recue est simplement ignoree.

Usage:
    token = gateway.new_token()
    task = asyncio.create_task(gateway.call("/api/v1/search/movies", token=token))
    token.cancel("superseded")
    await task  # -> RequestCancelled
"""

import asyncio
from typing import Awaitable, Optional, TypeVar

from cinesync.core.errors import RequestCancelled

T = TypeVar("T")


class CancellationToken:
    """
    Jeton d'annulation a usage unique.

    Attributes:
        reason: Motif de l'annulation (None tant que le jeton est actif)
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self.reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str = "cancelled") -> None:
        """Annule le jeton (idempotent, le premier motif est conserve)."""
        if not self._event.is_set():
            self.reason = reason
            self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelled(self.reason)

    async def wait(self) -> None:
        await self._event.wait()

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """
        Execute un awaitable en le mettant en concurrence avec l'annulation.

        Args:
            awaitable: Operation a garder (typiquement l'envoi HTTP)

        Returns:
            Le resultat de l'operation si le jeton n'a pas ete annule

        Raises:
            RequestCancelled: Si le jeton est annule avant ou pendant l'operation
        """
        self.raise_if_cancelled()
        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task not in done:
            task.cancel()
            raise RequestCancelled(self.reason)

        if self.cancelled:
            # Reponse arrivee trop tard : elle est ignoree
            if not task.cancelled():
                task.exception()
            raise RequestCancelled(self.reason)

        return task.result()
