from __future__ import annotations

from pydantic import BaseModel, Field


class CheckoutPrincipal(BaseModel):
    checkout_token: str
    intent_ids: list[str] = Field(default_factory=list)

    def owns_intent(self, intent_id: str) -> bool:
        return intent_id in self.intent_ids
