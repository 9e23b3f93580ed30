"""Prompt construction for each debate round."""

import json

from versus.config.settings import DebateConfig

from .models import Entity, Transcript


def _describe_details(entity: Entity) -> str:
    if entity.details is None:
        return "No verified details available."
    return json.dumps(entity.details, ensure_ascii=False)


class PromptBuilder:
    """Builds role-based prompts for representatives and the moderator."""

    def __init__(self, config: DebateConfig):
        self.config = config

    def opening(self, entity: Entity, competitors: list[str]) -> str:
        rivals = ", ".join(competitors) if competitors else "none"
        return f"""You are the representative for {entity.name}.
PRODUCT DETAILS: {_describe_details(entity)}
COMPETITORS: {rivals}

YOUR TASK: Give a short, punchy opening statement introducing your product and why it is the best choice. Be biased but professional.

CRITICAL CONSTRAINT: Write exactly ONE short paragraph (max {self.config.opening_sentence_limit} sentences). No lists. No filler. Be high-energy."""

    def pros_cons(self, entity: Entity) -> str:
        return f"""You are the representative for {entity.name}.
PRODUCT DETAILS: {_describe_details(entity)}

YOUR TASK: Highlight your killer features and confidently address one trade-off.

CRITICAL CONSTRAINT: Write exactly ONE short paragraph (max {self.config.pros_cons_sentence_limit} sentences). Do NOT use bullet points. Make it flow as one powerful statement."""

    def criticism(self, entity: Entity, transcript: Transcript) -> str:
        return f"""You are the representative for {entity.name}.
DEBATE HISTORY:
{transcript.render()}

YOUR TASK: Critically attack the claims your competitors made in the history above. Point out flaws, pricing issues or missing features, and reference their specific claims. Be aggressive but strategic.

CRITICAL CONSTRAINT: Write exactly ONE short paragraph (max {self.config.criticism_sentence_limit} sentences). Be direct."""

    def rebuttal(self, entity: Entity, transcript: Transcript) -> str:
        return f"""You are the representative for {entity.name}.
DEBATE HISTORY:
{transcript.render()}

YOUR TASK: Rebut the criticisms leveled against you in the last round and defend your product's value. Explain why the competitors are wrong or nitpicking.

CRITICAL CONSTRAINT: Write exactly ONE short paragraph (max {self.config.rebuttal_sentence_limit} sentences). Dismiss them effectively."""

    def conclusion(self, entity_names: list[str], transcript: Transcript) -> str:
        return f"""You are a neutral moderator.
PRODUCTS DEBATED: {", ".join(entity_names)}
DEBATE TRANSCRIPT:
{transcript.render()}

YOUR TASK: Deliver the final verdict.
1. Best Overall.
2. Best Value (if applicable).
3. Winner for specific use cases.
Be objective and base the verdict only on the arguments presented.

CRITICAL CONSTRAINT: Keep the verdict concise. Use one short bullet per category. Max {self.config.verdict_word_limit} words total."""
