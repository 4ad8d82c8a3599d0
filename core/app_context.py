import functools
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.orm import Session

from core.config_loader import AppConfig, LlmConfig
from core.llm.interfaces import LLMProvider
from core.llm.openai_service import OpenAIService
from core.retrieval.embeddings import EmbeddingService
from core.retrieval.pipeline import CandidateRetrievalPipeline
from core.retrieval.strategies import SemanticRetriever, RecencyRetriever
from core.scorer.service import ScoringService
from core.scorer.weights import ScoringWeightsStore
from core.swipes.match_service import MatchService
from core.swipes.side_effects import MatchSideEffects, SideEffectRunner
from core.swipes.sla import SlaService
from core.swipes.swipe_service import SwipeService
from database.repositories.settings import DatabaseWeightsBackend
from database.uow import swipe_uow
from notification.service import NotificationService


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Services share one weights store (and so one weights cache) and one
    side-effect runner. DB access is obtained per operation via
    swipe_uow() bound to session_factory.
    """
    config: AppConfig
    session_factory: Callable[[], Session]
    weights_store: ScoringWeightsStore
    scoring_service: ScoringService
    retrieval_pipeline: CandidateRetrievalPipeline
    swipe_service: SwipeService
    match_service: MatchService
    side_effect_runner: SideEffectRunner
    llm: Optional[LLMProvider] = None
    embedding_service: Optional[EmbeddingService] = None
    notification_service: Optional[NotificationService] = None

    def uow(self):
        return swipe_uow(self.session_factory)

    @classmethod
    def build(
        cls,
        config: AppConfig,
        session_factory: Callable[[], Session],
        llm: Optional[LLMProvider] = None,
        inline_side_effects: bool = False
    ) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration
            session_factory: Callable returning a new Session
            llm: Override for the LLM provider (tests)
            inline_side_effects: Run post-commit work on the calling thread

        Returns:
            Fully wired AppContext instance
        """
        uow_factory = functools.partial(swipe_uow, session_factory)
        matching = config.matching

        weights_store = ScoringWeightsStore(
            DatabaseWeightsBackend(session_factory),
            defaults=matching.weights,
            ttl_seconds=matching.weights_cache_ttl_seconds
        )

        retrieval = matching.retrieval
        pipeline = CandidateRetrievalPipeline([
            SemanticRetriever(
                retrieval.semantic_pool_size,
                pool_multiplier=retrieval.pool_multiplier,
                enabled=retrieval.semantic_enabled
            ),
            RecencyRetriever(retrieval.pool_multiplier),
        ])

        if llm is None and config.llm.api_key:
            llm = cls._build_llm(config.llm)

        notification_service = None
        if config.notifications.enabled:
            notification_service = cls._build_notification_service(config)

        runner = SideEffectRunner(
            config.side_effects.max_workers,
            inline=inline_side_effects,
            timeout_seconds=config.side_effects.timeout_seconds
        )
        side_effects = MatchSideEffects(
            uow_factory=uow_factory,
            runner=runner,
            sla_service=SlaService(uow_factory, config.sla),
            llm=llm,
            notifier=notification_service
        )

        return cls(
            config=config,
            session_factory=session_factory,
            weights_store=weights_store,
            scoring_service=ScoringService(weights_store),
            retrieval_pipeline=pipeline,
            swipe_service=SwipeService(config.swipes, uow_factory, side_effects),
            match_service=MatchService(uow_factory, side_effects),
            side_effect_runner=runner,
            llm=llm,
            embedding_service=EmbeddingService(llm) if llm is not None else None,
            notification_service=notification_service
        )

    @staticmethod
    def _build_llm(llm_config: LlmConfig) -> OpenAIService:
        """Build OpenAI service from LLM configuration."""
        model_config = {
            'greeting_model': llm_config.greeting_model,
            'greeting_temperature': llm_config.greeting_temperature,
            'embedding_model': llm_config.embedding_model,
            'embedding_dimensions': llm_config.embedding_dimensions,
            'max_input_chars': llm_config.max_input_chars,
        }
        return OpenAIService(
            api_key=llm_config.api_key,
            base_url=llm_config.base_url,
            model_config=model_config
        )

    @staticmethod
    def _build_notification_service(config: AppConfig) -> NotificationService:
        notifications = config.notifications
        channels = [
            name for name, channel in notifications.channels.items() if channel.enabled
        ] or ['email']
        return NotificationService(
            channels=channels,
            base_url=notifications.base_url,
            redis_url=notifications.redis_url,
            use_async_queue=notifications.use_async_queue
        )
