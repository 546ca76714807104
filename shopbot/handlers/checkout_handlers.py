from telegram import Update
from telegram.ext import ContextTypes
from ..api.client import ApiError
from ..checkout import CheckoutBlocked, CheckoutState
from ..utils.constants import EMOJIS
from ..utils.formatters import format_checkout_summary, format_order_confirmation
from ..utils.keyboards import create_checkout_keyboard, create_order_placed_keyboard
from .common_handlers import get_session, reply


async def show_checkout(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    session = get_session(update, context)
    flow = session.checkout
    if flow.state in (CheckoutState.PLACED, CheckoutState.FAILED):
        flow.reset()

    text = format_checkout_summary(session.cart.items, flow.totals, session.addresses.selected)
    reason = flow.blocked_reason
    if reason:
        text += f"\n\n{EMOJIS['WARNING']} {reason}"
    await reply(update, text, create_checkout_keyboard(flow.can_submit), session)


async def place_order(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    session = get_session(update, context)
    flow = session.checkout
    address = session.addresses.selected

    try:
        order = await flow.submit()
    except CheckoutBlocked as e:
        await reply(update, f"{EMOJIS['WARNING']} {e}", create_checkout_keyboard(False), session)
        return
    except ApiError:
        # Cart is untouched; the user can try again
        await reply(
            update,
            f"{EMOJIS['ERROR']} {flow.error}",
            create_checkout_keyboard(flow.can_submit),
            session,
        )
        return

    # Drop the "Cart cleared" notice, the confirmation says enough
    session.alerts.clear()
    await reply(update, format_order_confirmation(order, address), create_order_placed_keyboard(), session)
