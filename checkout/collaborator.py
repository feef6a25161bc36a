from __future__ import annotations

from typing import Any, Protocol

from checkout.types import ConfirmResult


class FieldHandle(Protocol):
    def mount(self, target: Any) -> None:
        ...


class ElementsHandle(Protocol):
    def create(self, kind: str, options: dict[str, Any]) -> FieldHandle:
        ...


class ClientHandle(Protocol):
    def elements(self, *, appearance: dict[str, Any], client_secret: str) -> ElementsHandle:
        ...

    async def confirm_payment(self, *, elements: ElementsHandle, redirect: str) -> ConfirmResult:
        ...


class ClientLoader(Protocol):
    async def load(self, publishable_key: str) -> ClientHandle | None:
        ...


class IntentSource(Protocol):
    async def request_intent(self, amount: int) -> dict[str, Any]:
        ...
