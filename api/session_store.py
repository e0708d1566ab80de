"""
Wizard Session Store - in-memory sessions and completed documents.

One GenerationPipeline per session. Sessions do not share state.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional

from config.logging_config import get_logger
from leadgen.document import StructuredDocument
from leadgen.pipeline import CampaignInput, GenerationPipeline

logger = get_logger(__name__)

PipelineFactory = Callable[[str], GenerationPipeline]


class SessionNotFoundError(KeyError):
    """No session with this id (never created, or deleted)."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(session_id)

    def __str__(self) -> str:
        return f"Session not found: {self.session_id}"


@dataclass
class WizardSession:
    """A user's pass through the wizard."""
    session_id: str
    user_id: str
    pipeline: GenerationPipeline
    created_at: datetime = field(default_factory=datetime.now)
    record_id: Optional[str] = None  # set once the completed document is stored


class SessionStore:
    """
    In-memory session registry.

    Usage:
        store = SessionStore(lambda user_id: GenerationPipeline(gen, lookup, user_id))
        session = store.create("user-1")
        store.get(session.session_id).pipeline.state
    """

    def __init__(self, pipeline_factory: PipelineFactory):
        self._pipeline_factory = pipeline_factory
        self._sessions: Dict[str, WizardSession] = {}

    def create(self, user_id: str) -> WizardSession:
        session = WizardSession(
            session_id=uuid.uuid4().hex,
            user_id=user_id,
            pipeline=self._pipeline_factory(user_id),
        )
        self._sessions[session.session_id] = session
        logger.info(f"Session created: {session.session_id} for {user_id}")
        return session

    def get(self, session_id: str) -> Optional[WizardSession]:
        return self._sessions.get(session_id)

    def require(self, session_id: str) -> WizardSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def restart(self, session_id: str) -> WizardSession:
        """Replace the session's pipeline with a fresh one (start over)."""
        session = self.require(session_id)
        session.pipeline = self._pipeline_factory(session.user_id)
        session.record_id = None
        logger.info(f"Session restarted: {session_id}")
        return session

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)


@dataclass
class CampaignRecord:
    record_id: str
    user_id: str
    campaign: CampaignInput
    document: StructuredDocument
    created_at: datetime = field(default_factory=datetime.now)


class InMemoryCampaignSink:
    """DocumentSink that keeps completed documents in memory."""

    def __init__(self):
        self._records: Dict[str, CampaignRecord] = {}

    async def persist_document(
        self,
        campaign: CampaignInput,
        document: StructuredDocument,
        user_id: str = "",
    ) -> str:
        record = CampaignRecord(
            record_id=uuid.uuid4().hex,
            user_id=user_id,
            campaign=campaign,
            document=document,
        )
        self._records[record.record_id] = record
        logger.info(f"Stored campaign {record.record_id} ({document.title_page.title!r})")
        return record.record_id

    def get(self, record_id: str) -> Optional[CampaignRecord]:
        return self._records.get(record_id)

    def list_for_user(self, user_id: str) -> List[CampaignRecord]:
        return [r for r in self._records.values() if r.user_id == user_id]
