"""
Error kinds for the lead magnet generation flow.

Every error is scoped to one wizard session and is recoverable by the user
(fix a field, retry a stage, or start over). None of them is fatal to the
process.
"""

from typing import List, Optional


class LeadGenError(Exception):
    """Base error for the lead magnet flow"""
    pass


class ValidationError(LeadGenError):
    """
    Malformed user-supplied values (campaign input, outline, customization).

    Raised locally, before any collaborator is called, and never causes a
    stage transition. `field` names the first offending field; `errors`
    lists every problem found.
    """

    def __init__(self, field: str, message: str, errors: Optional[List[str]] = None):
        self.field = field
        self.message = message
        self.errors = errors or [f"{field}: {message}"]
        super().__init__(f"Invalid {field}: {message}")


class GenerationFailure(LeadGenError):
    """Content collaborator failed or returned malformed data."""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        self.message = message
        super().__init__(f"Generation failed during {stage}: {message}")


class EntitlementLookupFailure(LeadGenError):
    """Subscription lookup failed; the gate treats this as blocked."""

    def __init__(self, user_id: str, message: str):
        self.user_id = user_id
        self.message = message
        super().__init__(f"Subscription lookup failed for {user_id}: {message}")


class StaleSelectionError(LeadGenError):
    """A concept or outline no longer matches the current pipeline state."""
    pass


class InvalidTransitionError(LeadGenError):
    """Operation not allowed from the current stage."""

    def __init__(self, operation: str, stage: str):
        self.operation = operation
        self.stage = stage
        super().__init__(f"Cannot {operation} from stage '{stage}'")


class PipelineBusyError(LeadGenError):
    """Another transition is still awaiting its collaborator."""
    pass
