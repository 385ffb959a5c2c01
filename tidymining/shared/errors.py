# usage: exception types shared by every pipeline stage
from typing import Optional


class TidyMiningError(Exception):
    """
    Base error for the text-mining pipeline.

    Carries the stage name and, when known, the offending document id so a
    failure can be traced without inspecting partial output.
    """

    def __init__(self, message: str, *, stage: Optional[str] = None, document_id: Optional[str] = None):
        self.stage = stage
        self.document_id = document_id
        context = []
        if stage:
            context.append(f"stage={stage}")
        if document_id is not None:
            context.append(f"document={document_id!r}")
        full = f"{message} ({', '.join(context)})" if context else message
        super().__init__(full)


class MissingReferenceDataError(TidyMiningError, LookupError):
    """A stop-word set, lexicon or corpus could not be loaded."""


class MalformedConfigurationError(TidyMiningError, ValueError):
    """An option was rejected before any processing started."""


class PipelineStageError(TidyMiningError):
    """Unexpected failure inside a stage, re-raised with its context."""
