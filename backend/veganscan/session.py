"""
Caller-owned scan context: retains the last raw text and result so a scan can be
re-run against an extended lexicon without re-running OCR.
In-memory only; scan history is not persisted.
"""
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional
import logging
import threading
import uuid

from veganscan.lexicon.lexicon_schema import Lexicon
from veganscan.lexicon.merger import merge_lexicons, valid_fragments
from veganscan.models.scan_result import ScanResult
from veganscan.scanner import classify

logger = logging.getLogger(__name__)


@dataclass
class ScanSession:
    """One user's scan state. `lexicon` starts as the base lexicon and only grows via merges."""
    session_id: str
    lexicon: Optional[Lexicon] = None
    last_text: Optional[str] = None
    last_result: Optional[ScanResult] = None
    extension_count: int = 0
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def scan(self, text: str) -> ScanResult:
        with self._lock:
            self.last_text = text
            self.last_result = classify(text, self.lexicon)
            return self.last_result

    def apply_extensions(self, fragments: Iterable[Any]) -> ScanResult:
        """
        Merge fragments into this session's lexicon and re-classify the retained text.
        Without a base lexicon nothing is merged: fragments alone cannot vouch for a label,
        so the re-scan stays Unclear.
        """
        accepted = valid_fragments(fragments)
        with self._lock:
            if self.lexicon is None:
                logger.warning(
                    "SESSION extensions ignored session_id=%s reason=no base lexicon",
                    self.session_id,
                )
            elif accepted:
                self.lexicon = merge_lexicons(self.lexicon, *accepted)
                self.extension_count += len(accepted)
            logger.info(
                "SESSION extensions applied session_id=%s accepted=%d total=%d has_text=%s",
                self.session_id, len(accepted), self.extension_count, self.last_text is not None,
            )
            return self.scan(self.last_text or "")

    def reset(self) -> None:
        with self._lock:
            self.last_text = None
            self.last_result = None


@dataclass
class SessionStore:
    """Thread-safe in-memory map of session_id -> ScanSession."""
    base_lexicon: Optional[Lexicon] = None
    _sessions: dict[str, ScanSession] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def create(self) -> ScanSession:
        session = ScanSession(session_id=uuid.uuid4().hex, lexicon=self.base_lexicon)
        with self._lock:
            self._sessions[session.session_id] = session
        return session

    def get(self, session_id: Optional[str]) -> Optional[ScanSession]:
        if not session_id:
            return None
        with self._lock:
            return self._sessions.get(session_id)

    def get_or_create(self, session_id: Optional[str]) -> ScanSession:
        return self.get(session_id) or self.create()

    def discard(self, session_id: str) -> bool:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is not None:
            session.reset()
        return session is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
