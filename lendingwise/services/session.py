import logging
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Sequence

from fastapi import UploadFile

from lendingwise.errors import AnalysisInProgressError
from lendingwise.models import AnalysisResult, FileAttachment
from lendingwise.services.analysis import analyze
from lendingwise.services.intake import encode_uploads, partition_uploads

logger = logging.getLogger("lendingwise.session")

GENERIC_FAILURE = "Analysis failed. Ensure documents are valid and API key is set."

Analyzer = Callable[[Sequence[FileAttachment], str], Awaitable[AnalysisResult]]


class SessionView(str, Enum):
    WAITING = "waiting"
    ANALYZING = "analyzing"
    RESULT = "result"
    ERROR = "error"


class AuditSession:
    """
    The underwriter's working state: pending files, the note, and the
    outcome of the last analysis. One per process.

    ``generation`` changes on every reset so a response that lands after a
    reset is dropped instead of resurrecting the old audit.
    """

    def __init__(self):
        self.attachments: List[FileAttachment] = []
        self.context_note = ""
        self.is_analyzing = False
        self.result: Optional[AnalysisResult] = None
        self.error: Optional[str] = None
        self.rejected_files: List[str] = []
        self.generation = 0

    @property
    def view(self) -> SessionView:
        if self.is_analyzing:
            return SessionView.ANALYZING
        if self.result is not None:
            return SessionView.RESULT
        if self.error:
            return SessionView.ERROR
        return SessionView.WAITING

    async def add_files(self, uploads: Sequence[UploadFile]) -> List[FileAttachment]:
        generation = self.generation
        _, self.rejected_files = partition_uploads(uploads)

        def keep(attachment: FileAttachment):
            # Encodes finishing after a reset belong to the discarded audit.
            if generation == self.generation:
                self.attachments.append(attachment)

        return await encode_uploads(uploads, on_encoded=keep)

    def remove_attachment(self, index: int) -> FileAttachment:
        if not 0 <= index < len(self.attachments):
            raise IndexError(f"No attachment at position {index}")
        return self.attachments.pop(index)

    def set_context_note(self, note: str):
        self.context_note = note or ""

    def reset(self):
        self.attachments = []
        self.context_note = ""
        self.result = None
        self.error = None
        self.rejected_files = []
        self.is_analyzing = False
        self.generation += 1
        logger.info(f"Session reset (generation {self.generation})")

    async def run_analysis(self, analyzer: Optional[Analyzer] = None) -> Optional[AnalysisResult]:
        if not self.attachments:
            return self.result
        if self.is_analyzing:
            raise AnalysisInProgressError("An analysis is already running for this session.")

        generation = self.generation
        submitted = list(self.attachments)
        self.is_analyzing = True
        self.error = None

        try:
            result = await (analyzer or analyze)(submitted, self.context_note)
        except Exception as e:
            if generation == self.generation:
                logger.error(f"Analysis failed: {e}")
                self.error = str(e) or GENERIC_FAILURE
            else:
                logger.info(f"Dropping failure from generation {generation}: {e}")
        else:
            if generation == self.generation:
                self.result = result
            else:
                logger.info(f"Dropping result from generation {generation}")
        finally:
            if generation == self.generation:
                self.is_analyzing = False

        return self.result


audit_session = AuditSession()


def get_session() -> AuditSession:
    return audit_session
