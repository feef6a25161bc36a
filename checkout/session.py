from __future__ import annotations

import logging
from typing import Any

from checkout.collaborator import ClientHandle, ClientLoader, ElementsHandle, IntentSource
from checkout.types import (
    APPEARANCE,
    CLIENT_INIT_FAILED_MESSAGE,
    HANDLES_NOT_READY_MESSAGE,
    PAYMENT_ELEMENT_KIND,
    PAYMENT_ELEMENT_OPTIONS,
    REDIRECT_IF_REQUIRED,
    SETUP_FAILED_MESSAGE,
    CheckoutError,
    CheckoutStatus,
    CheckoutView,
    ConfirmResult,
)

logger = logging.getLogger(__name__)


class CheckoutSession:
    """State holder for one mounted checkout form.

    ``uninitialized -> waiting_for_user -> succeeded``, with ``loading`` and
    ``error`` orthogonal to the status. A client that fails to load ends in
    ``failed``. Handles live on the instance and are dropped by ``unmount``.
    """

    def __init__(
        self,
        *,
        loader: ClientLoader,
        intent_source: IntentSource,
        publishable_key: str,
        amount: int,
        mount_target: Any = None,
    ) -> None:
        self._loader = loader
        self._intent_source = intent_source
        self._publishable_key = publishable_key
        self.amount = amount
        self.mount_target = mount_target

        self.client_handle: ClientHandle | None = None
        self.elements_handle: ElementsHandle | None = None
        self.intent_id: str | None = None
        self.status = CheckoutStatus.UNINITIALIZED
        self.error: CheckoutError | None = None
        self.loading = False
        self._mounted = False
        self._unmounted = False

    async def mount(self) -> None:
        if self._mounted or self._unmounted:
            return
        self._mounted = True
        if await self.setup_client():
            await self.prepare_checkout()

    async def setup_client(self) -> bool:
        try:
            handle = await self._loader.load(self._publishable_key)
        except Exception as err:
            logger.exception("Payment client failed to load")
            self._fail_initialization(CheckoutError.from_collaborator(err))
            return False

        if self._unmounted:
            return False
        if handle is None:
            logger.error("Payment client loader returned no client handle")
            self._fail_initialization(CheckoutError(CLIENT_INIT_FAILED_MESSAGE))
            return False

        self.client_handle = handle
        self.status = CheckoutStatus.WAITING_FOR_USER
        return True

    def _fail_initialization(self, cause: CheckoutError) -> None:
        if self._unmounted:
            return
        self.status = CheckoutStatus.FAILED
        self.error = CheckoutError(CLIENT_INIT_FAILED_MESSAGE, code=cause.code, type=cause.type)

    async def prepare_checkout(self) -> None:
        try:
            intent = await self._intent_source.request_intent(self.amount)
            if self._unmounted:
                return

            client_secret = intent.get("client_secret")
            if not (client_secret and self.client_handle is not None and self.mount_target is not None):
                raise ValueError(SETUP_FAILED_MESSAGE)

            elements = self.client_handle.elements(appearance=APPEARANCE, client_secret=client_secret)
            self.elements_handle = elements
            self.intent_id = intent.get("id")
            elements.create(PAYMENT_ELEMENT_KIND, PAYMENT_ELEMENT_OPTIONS).mount(self.mount_target)
        except Exception as err:
            logger.warning("Checkout setup failed: %s", err)
            if not self._unmounted:
                self.error = CheckoutError.from_collaborator(err)

    async def submit(self) -> None:
        if self.status is not CheckoutStatus.WAITING_FOR_USER or self.loading:
            return

        self.loading = True
        if self.client_handle is None or self.elements_handle is None:
            self.error = CheckoutError(HANDLES_NOT_READY_MESSAGE)
            self.loading = False
            return

        try:
            result = await self.client_handle.confirm_payment(
                elements=self.elements_handle,
                redirect=REDIRECT_IF_REQUIRED,
            )
        except Exception as err:
            logger.warning("Payment confirmation raised: %s", err)
            result = ConfirmResult(error=CheckoutError.from_collaborator(err))

        if self._unmounted:
            return
        if result.error is not None:
            self.error = result.error
        if result.intent_status == "succeeded":
            self.error = None
            self.status = CheckoutStatus.SUCCEEDED
        self.loading = False

    def unmount(self) -> None:
        self._unmounted = True
        self.client_handle = None
        self.elements_handle = None
        self.mount_target = None

    def view(self) -> CheckoutView:
        show_form = self.status is CheckoutStatus.WAITING_FOR_USER
        show_error = show_form or self.status is CheckoutStatus.FAILED
        return CheckoutView(
            show_processing=self.loading,
            show_success=self.status is CheckoutStatus.SUCCEEDED,
            show_form=show_form,
            error_message=self.error.message if (show_error and self.error) else None,
        )
