"""Application service: Place Order (checkout) use case.

Turns the caller's cart into an order in one pass through
FORM_ENTRY -> VALIDATING -> PRICING -> PERSISTING -> COMPLETED.

Persisting is three writes: the order row, its lines, then clearing
the cart. The store only guarantees each call on its own, so the
writes after the order row are retried against the same order id and,
if they still fail, the order is deleted again. Only when that delete
also fails does the attempt end PARTIALLY_COMMITTED with a
PartialCommitError naming the order. Submitting again with the same
submission id picks that order up and finishes it; otherwise the
reconciler removes it.

Stock is never checked or decremented here, so a product can be
oversold.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from storefront.application.cart_aggregator import CartAggregator
from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import (
    DomainException,
    LoadError,
    PartialCommitError,
    PersistError,
    TotalMismatchError,
)
from storefront.domain.model.caller import CallerContext
from storefront.domain.model.checkout import CheckoutForm, CheckoutState
from storefront.domain.model.order import Order
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.data_store import StoreError
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)

CHECKOUT_FIELDS = (
    "address",
    "city",
    "zip_code",
    "card_number",
    "card_name",
    "expiry",
    "cvv",
)

DEFAULT_MAX_RETRIES = 2


class PlaceOrderHandler:
    """Runs checkout attempts and records where the last one ended.

    ``state`` and ``order_id`` describe the most recent call to
    ``handle``; a failed attempt that left no order behind has
    ``order_id`` None.
    """

    def __init__(
        self,
        cart_aggregator: CartAggregator,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        self._cart_aggregator = cart_aggregator
        self._order_repo = order_repo
        self._cart_repo = cart_repo
        self._max_retries = max_retries
        self.state = CheckoutState.FORM_ENTRY
        self.order_id: str | None = None

    def handle(
        self,
        ctx: CallerContext,
        fields: dict[str, str],
        expected_total: str | Decimal | Money | None = None,
        submission_id: str | None = None,
    ) -> OrderDTO:
        """Place an order for everything in the caller's cart.

        Steps:
        1. Validate the checkout form (no store access).
        2. Return the existing order if *submission_id* was already used
           and that checkout finished.
        3. Re-read the cart, refuse an empty one, price it.
        4. Write order, lines, cart clear, compensating on failure. An
           unfinished order from the same submission is reused instead
           of writing a new one.
        """
        self.state = CheckoutState.FORM_ENTRY
        self.order_id = None
        try:
            self.state = CheckoutState.VALIDATING
            CheckoutForm(**{name: _field_text(fields, name) for name in CHECKOUT_FIELDS})

            self.state = CheckoutState.PRICING
            existing = self._find_submission(ctx, submission_id) if submission_id else None
            if existing is not None and not self._is_unfinished(existing):
                logger.info(
                    "Duplicate checkout submission",
                    user_id=ctx.user_id,
                    order_id=existing.id,
                    submission_id=submission_id,
                )
                self.order_id = existing.id
                self.state = CheckoutState.COMPLETED
                return OrderDTO.from_order(existing)

            cart = self._cart_aggregator.load_cart(ctx)
            if existing is not None and cart.is_empty:
                self.order_id = existing.id
                raise PartialCommitError(existing.id, "order_items")
            order = Order.from_cart(cart, submission_id=submission_id)
            if expected_total is not None:
                shown = (
                    expected_total
                    if isinstance(expected_total, Money)
                    else Money.of(expected_total)
                )
                if shown != order.total_price:
                    raise TotalMismatchError(shown, order.total_price)

            self.state = CheckoutState.PERSISTING
            if existing is None:
                self._persist(ctx, order)
            else:
                self._resume(ctx, existing, order)
        except PartialCommitError:
            self.state = CheckoutState.PARTIALLY_COMMITTED
            raise
        except DomainException:
            self.state = CheckoutState.FAILED
            raise

        self.state = CheckoutState.COMPLETED
        logger.info(
            "Order placed",
            user_id=ctx.user_id,
            order_id=order.id,
            total=str(order.total_price.amount),
            line_count=len(order.items),
        )
        return OrderDTO.from_order(order)

    # --- Persisting -----------------------------------------------------------

    def _find_submission(self, ctx: CallerContext, submission_id: str) -> Order | None:
        try:
            return self._order_repo.find_by_submission(ctx.user_id, submission_id)
        except StoreError as exc:
            raise LoadError("Failed to load orders") from exc

    def _is_unfinished(self, order: Order) -> bool:
        try:
            return self._order_repo.is_unfinished(order)
        except StoreError as exc:
            raise LoadError("Failed to load orders") from exc

    def _persist(self, ctx: CallerContext, order: Order) -> None:
        try:
            order_id = self._order_repo.add(order)
        except StoreError as exc:
            logger.warning("Order insert failed", user_id=ctx.user_id, error=str(exc))
            raise PersistError("Failed to process order") from exc
        self.order_id = order_id
        self._complete(ctx, order)

    def _resume(self, ctx: CallerContext, existing: Order, order: Order) -> None:
        """Finish an earlier attempt's order with the current cart."""
        order.id = existing.id
        order.created_at = existing.created_at
        self.order_id = existing.id
        logger.info(
            "Resuming unfinished checkout",
            user_id=ctx.user_id,
            order_id=existing.id,
            submission_id=existing.submission_id,
        )
        try:
            self._order_repo.reset_lines(existing.id, order.total_price)
        except StoreError as exc:
            logger.error(
                "Order left partially committed",
                order_id=existing.id,
                step="order_items",
                error=str(exc),
            )
            raise PartialCommitError(existing.id, "order_items") from exc
        self._complete(ctx, order)

    def _complete(self, ctx: CallerContext, order: Order) -> None:
        order_id = order.id
        step = "order_items"
        error: StoreError | None = None
        for attempt in range(self._max_retries + 1):
            try:
                step = "order_items"
                self._order_repo.add_lines(order_id, order.items)
                step = "cart"
                self._cart_repo.clear(ctx.user_id)
                return
            except StoreError as exc:
                error = exc
                logger.warning(
                    "Checkout step failed",
                    order_id=order_id,
                    step=step,
                    attempt=attempt + 1,
                    error=str(exc),
                )

        self._roll_back(order_id, step, error)

    def _roll_back(self, order_id: str, step: str, cause: StoreError | None) -> None:
        try:
            self._order_repo.remove(order_id)
        except StoreError as exc:
            logger.error(
                "Order left partially committed",
                order_id=order_id,
                step=step,
                error=str(exc),
            )
            raise PartialCommitError(order_id, step) from exc

        logger.warning("Order rolled back", order_id=order_id, step=step)
        self.order_id = None
        raise PersistError("Failed to process order") from cause


def _field_text(fields: dict, name: str) -> str:
    value = fields.get(name)
    return "" if value is None else str(value)
