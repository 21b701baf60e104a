"""
Primitives d'ordonnancement cooperatif : anti-rebond et arbitrage de course.

- Debouncer : retarde une action jusqu'a un silence de ``delay`` secondes.
  Seul le dernier declenchement non remplace emet l'action. Remplacer un
  minuteur n'interrompt jamais une action deja emise.
- LatestRequestGuard : attribue un jeton de sequence monotone a chaque
  requete emise. Seule la reponse portant le dernier jeton emis est
  applicable ("la derniere requete gagne", pas "la derniere reponse").
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from cinesync.core.cancellation import CancellationToken


class Debouncer:
    """
    Anti-rebond asynchrone d'une action coroutine.

    Example:
        debouncer = Debouncer(0.5, controller._run_search)
        debouncer.trigger("i")
        debouncer.trigger("in")
        debouncer.trigger("inc")   # seul "inc" sera recherche
        await debouncer.drain()
    """

    def __init__(self, delay: float, action: Callable[..., Awaitable[Any]]) -> None:
        """
        Args:
            delay: Periode de silence en secondes
            action: Coroutine a executer avec les arguments du dernier declenchement
        """
        self.delay = delay
        self._action = action
        self._timer: Optional[asyncio.Task] = None
        self._running: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        """Un minuteur attend encore son expiration."""
        return self._timer is not None and not self._timer.done()

    def trigger(self, *args: Any) -> None:
        """Remplace le minuteur en attente par un nouveau."""
        self.cancel()
        self._timer = asyncio.create_task(self._fire_later(args))

    def fire_now(self, *args: Any) -> asyncio.Task:
        """Annule le minuteur et emet l'action immediatement."""
        self.cancel()
        return self._start(args)

    def cancel(self) -> None:
        """Annule le minuteur en attente (les actions emises continuent)."""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def drain(self) -> None:
        """Attend l'expiration des minuteurs et la fin des actions emises."""
        while True:
            waiting = [task for task in (self._timer, *self._running) if task and not task.done()]
            if not waiting:
                return
            await asyncio.gather(*waiting, return_exceptions=True)

    async def _fire_later(self, args: tuple) -> None:
        await asyncio.sleep(self.delay)
        self._timer = None
        self._start(args)

    def _start(self, args: tuple) -> asyncio.Task:
        task = asyncio.create_task(self._action(*args))
        self._running.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._running.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.opt(exception=task.exception()).error("Action differee en echec")


class LatestRequestGuard:
    """
    Arbitre de course par jeton de sequence monotone.

    Emettre une requete remplace la precedente : son jeton d'annulation est
    annule (annulation consultative) et sa reponse sera ignoree.
    """

    def __init__(self) -> None:
        self._latest = 0
        self._token: Optional[CancellationToken] = None

    @property
    def latest(self) -> int:
        """Dernier jeton de sequence emis."""
        return self._latest

    def issue(self, token: Optional[CancellationToken] = None) -> int:
        """
        Emet un nouveau jeton de sequence.

        Args:
            token: Jeton d'annulation de la nouvelle requete (optionnel)

        Returns:
            Le numero de sequence attribue
        """
        self._cancel_current("superseded")
        self._latest += 1
        self._token = token
        return self._latest

    def is_latest(self, seq: int) -> bool:
        return seq == self._latest

    def invalidate(self) -> None:
        """Rend obsolete toute requete en cours sans en emettre de nouvelle."""
        self._cancel_current("invalidated")
        self._latest += 1

    def _cancel_current(self, reason: str) -> None:
        if self._token is not None:
            self._token.cancel(reason)
            self._token = None
