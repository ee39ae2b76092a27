"""
Question paper wizard (client side)

upload → details → config → generate → preview, as immutable state
transitions, plus the HTTP client and CLI that drive them.
"""

from .state import (
    UploadedDocument,
    WizardError,
    WizardState,
    WizardStep,
    complete_generation,
    default_question_config,
    go_back,
    start_over,
    submit_config,
    submit_details,
    submit_uploads,
)

__all__ = [
    "UploadedDocument",
    "WizardError",
    "WizardState",
    "WizardStep",
    "complete_generation",
    "default_question_config",
    "go_back",
    "start_over",
    "submit_config",
    "submit_details",
    "submit_uploads",
]
