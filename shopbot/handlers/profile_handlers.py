import logging
from telegram import Update
from telegram.ext import ContextTypes
from ..api.client import ApiError
from ..models.models import Order
from ..utils.constants import EMOJIS
from ..utils.formatters import format_address, format_order_history
from ..utils.keyboards import create_main_menu_keyboard
from .common_handlers import get_session, reply

logger = logging.getLogger(__name__)


async def show_profile(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    session = get_session(update, context)
    api = context.bot_data['api']

    notice = ''
    try:
        orders = [Order.from_dict(o) for o in await api.get_orders() if isinstance(o, dict)]
        orders.sort(key=lambda o: o.created_at, reverse=True)
    except ApiError as e:
        logger.error(f"Error fetching orders: {e.message}")
        notice = f"{EMOJIS['ERROR']} Failed to fetch orders: {e.message}\nShowing orders saved on this device.\n\n"
        orders = session.orders.history()

    default = session.addresses.default
    text = (
        f"{EMOJIS['PROFILE']} Your profile\n"
        f"{EMOJIS['CART']} Cart: {session.cart.count} items · "
        f"{EMOJIS['HEART']} Wishlist: {session.wishlist.count} · "
        f"{EMOJIS['PACKAGE']} Orders: {len(orders)}\n\n"
    )
    if default:
        text += f"{EMOJIS['LOCATION']} Default address:\n{format_address(default)}\n\n"
    text += notice + format_order_history(orders)
    await reply(update, text, create_main_menu_keyboard(), session)
