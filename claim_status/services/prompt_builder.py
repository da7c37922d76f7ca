"""
Prompt construction for claim summarization.

Pure functions only: the same claim and note set always render the
same system and user text.
"""

from typing import Tuple

from claim_status.schemas import Claim, ClaimNoteSet

SYSTEM_PROMPT = (
    "You are an insurance claims assistant. Create: "
    "(1) a concise general summary "
    "(2) a simple customer-facing summary "
    "(3) a more detailed adjuster summary with any missing info callouts "
    "(4) a single recommended next step phrase. "
    "Return JSON with keys summary, customerSummary, adjusterSummary, nextStep."
)


def render_notes(note_set: ClaimNoteSet) -> str:
    """One `- author: text` line per note, in note-set order."""
    return "\n".join(f"- {note.author}: {note.text}" for note in note_set.notes)


def build_prompt(claim: Claim, note_set: ClaimNoteSet) -> Tuple[str, str]:
    """
    Render the (system, user) message pair for a claim.

    The notes block is always present, even when empty.
    """
    user_text = (
        f"Claim: {claim.id} Type: {claim.type} Status: {claim.status} "
        f"LossDate: {claim.loss_date.isoformat()} Notes:\n{render_notes(note_set)}"
    )
    return SYSTEM_PROMPT, user_text
