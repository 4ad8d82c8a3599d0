#!/usr/bin/env python3
"""
Side Effects - Best-effort work scheduled after a match changes state.

Greeting generation, notifications and SLA recomputation run on a small
thread pool once the primary transaction has committed. Failures are
logged and never reach the caller.
"""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait as futures_wait
from typing import Any, Callable, ContextManager, Optional, Set

from core.llm.interfaces import LLMProvider
from core.llm.system_prompts import fallback_greeting
from core.swipes.sla import SlaService
from notification.message_builder import MATCH_CREATED, MATCH_ACCEPTED, MATCH_REJECTED

logger = logging.getLogger(__name__)


class SideEffectRunner:
    """
    Bounded executor for fire-and-forget jobs.

    With inline=True jobs run on the calling thread; tests use this to
    observe effects deterministically. shutdown() waits at most
    timeout_seconds for queued jobs and abandons whatever is left.
    """

    def __init__(self, max_workers: int = 4, inline: bool = False, timeout_seconds: float = 30.0):
        self.inline = inline
        self.timeout_seconds = timeout_seconds
        self._pending: Set[Future] = set()
        self._lock = threading.Lock()
        self._executor = None if inline else ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="side-effect"
        )

    def submit(self, name: str, fn: Callable[..., Any], *args: Any) -> Optional[Future]:
        def _run():
            try:
                return fn(*args)
            except Exception:
                logger.exception(f"Side effect '{name}' failed")
                return None

        if self._executor is None:
            _run()
            return None

        future = self._executor.submit(_run)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._discard)
        return future

    def _discard(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    def shutdown(self, wait: bool = True) -> None:
        if self._executor is None:
            return
        if wait:
            with self._lock:
                pending = list(self._pending)
            _, not_done = futures_wait(pending, timeout=self.timeout_seconds)
            if not_done:
                logger.warning(
                    f"Abandoning {len(not_done)} side effect(s) still running "
                    f"after {self.timeout_seconds}s"
                )
        self._executor.shutdown(wait=False, cancel_futures=True)


class MatchSideEffects:
    """Schedules the follow-up work for match creation, acceptance and rejection."""

    def __init__(
        self,
        uow_factory: Callable[[], ContextManager[Any]],
        runner: SideEffectRunner,
        sla_service: SlaService,
        llm: Optional[LLMProvider] = None,
        notifier: Optional[Any] = None
    ):
        self.uow_factory = uow_factory
        self.runner = runner
        self.sla_service = sla_service
        self.llm = llm
        self.notifier = notifier

    def on_match_created(self, match_id: Any) -> None:
        self.runner.submit(MATCH_CREATED, self._notify, MATCH_CREATED, match_id)

    def on_match_accepted(self, match_id: Any, organisation_id: Any) -> None:
        self.runner.submit("greeting", self._post_greeting, match_id)
        self.runner.submit(MATCH_ACCEPTED, self._notify, MATCH_ACCEPTED, match_id)
        self.runner.submit("sla", self.sla_service.recompute, organisation_id)

    def on_match_rejected(self, match_id: Any, organisation_id: Any) -> None:
        self.runner.submit(MATCH_REJECTED, self._notify, MATCH_REJECTED, match_id)
        self.runner.submit("sla", self.sla_service.recompute, organisation_id)

    def _post_greeting(self, match_id: Any) -> None:
        with self.uow_factory() as repos:
            match = repos.matches.get_with_parties(match_id)
            if match is None or match.conversation is None:
                logger.warning(f"No conversation for match {match_id}, skipping greeting")
                return

            vacancy = match.vacancy
            text = ""
            if self.llm is not None:
                try:
                    text = self.llm.generate_greeting(
                        match.volunteer.name or "Volunteer",
                        vacancy.title,
                        vacancy.organisation.name
                    )
                except Exception as e:
                    logger.warning(f"Greeting generation failed for match {match_id}: {e}")

            repos.matches.add_system_message(
                match.conversation.id, text or fallback_greeting(vacancy.title)
            )

    def _notify(self, event: str, match_id: Any) -> None:
        if self.notifier is None:
            return

        with self.uow_factory() as repos:
            match = repos.matches.get_with_parties(match_id)
            if match is None:
                logger.warning(f"Match {match_id} vanished before {event} notification")
                return
            context = {
                'match_id': str(match.id),
                'volunteer_name': match.volunteer.name or "Volunteer",
                'volunteer_email': match.volunteer.email,
                'vacancy_title': match.vacancy.title,
                'organisation_name': match.vacancy.organisation.name,
                'organisation_email': match.vacancy.organisation.email,
                'conversation_id': str(match.conversation.id) if match.conversation else None,
            }

        self.notifier.notify_match_event(event, context)
