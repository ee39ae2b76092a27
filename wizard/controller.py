"""
Generate step of the wizard.

Mirrors what the browser client does once the user reaches "generate":
check the server, collect extracted texts, ask for questions, then move to
preview. Run it as a single task; to cancel, cancel the task. A failed run
leaves the wizard on the generate step and the whole step is retried.
"""

import logging
from typing import Callable, Optional

from wizard.api_client import ApiError, PaperApiClient
from wizard.state import (
    WizardError,
    WizardState,
    WizardStep,
    complete_generation,
    report_progress,
)

log = logging.getLogger(__name__)

ProgressCallback = Callable[[WizardState], None]


async def run_generation(
    state: WizardState,
    client: PaperApiClient,
    on_progress: Optional[ProgressCallback] = None,
) -> WizardState:
    """
    Run the generate step and return the preview state.

    Raises:
        WizardError: wrong step, server offline, no text, or generation failed
    """
    if state.step != WizardStep.GENERATE:
        raise WizardError(f"Cannot generate from the '{state.step.value}' step")

    def _advance(current: WizardState, progress: int, message: str) -> WizardState:
        log.info(f"[{progress:3d}%] {message}")
        current = report_progress(current, progress, message)
        if on_progress is not None:
            on_progress(current)
        return current

    state = _advance(state, 10, "Checking server connection...")
    if not await client.check_health():
        raise WizardError("Unable to connect to the server. Please ensure the backend is running.")

    state = _advance(state, 20, "Preparing content...")
    extracted_texts = state.extracted_texts
    if not extracted_texts:
        raise WizardError("No valid content found in uploaded files")

    state = _advance(state, 50, "Generating questions with AI...")
    try:
        questions = await client.generate_questions(
            state.exam_details,
            state.question_config,
            extracted_texts,
        )
    except ApiError as e:
        raise WizardError(str(e)) from e

    state = _advance(state, 90, "Finalizing question paper...")
    state = complete_generation(state, questions)
    if on_progress is not None:
        on_progress(state)
    return state
