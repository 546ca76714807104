from telegram import Update
from telegram.ext import ContextTypes
from ..utils.formatters import format_cart_text, format_wishlist_text
from ..utils.keyboards import create_cart_keyboard, create_wishlist_keyboard
from .common_handlers import callback_arg, get_session, reply


async def show_cart(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    session = get_session(update, context)
    cart = session.cart
    await reply(update, format_cart_text(cart.items, cart.total), create_cart_keyboard(cart.items), session)


async def increase_quantity(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    cart = get_session(update, context).cart
    item = cart.get(callback_arg(update))
    if item:
        cart.set_quantity(item.id, item.quantity + 1)
    await show_cart(update, context)


async def decrease_quantity(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    cart = get_session(update, context).cart
    item = cart.get(callback_arg(update))
    if item:
        # Dropping to zero removes the line
        cart.set_quantity(item.id, item.quantity - 1)
    await show_cart(update, context)


async def remove_from_cart(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    get_session(update, context).cart.remove(callback_arg(update))
    await show_cart(update, context)


async def move_to_wishlist(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    session = get_session(update, context)
    item = session.cart.get(callback_arg(update))
    if item:
        if not session.wishlist.contains(item.id):
            session.wishlist.add(item.product)
        session.cart.remove(item.id)
    await show_cart(update, context)


async def clear_cart(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    get_session(update, context).cart.clear()
    await show_cart(update, context)


async def show_wishlist(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    session = get_session(update, context)
    items = session.wishlist.items
    await reply(update, format_wishlist_text(items), create_wishlist_keyboard(items), session)


async def remove_from_wishlist(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    get_session(update, context).wishlist.remove(callback_arg(update))
    await show_wishlist(update, context)


async def move_to_cart(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    session = get_session(update, context)
    session.wishlist.move_to_cart(callback_arg(update), session.cart)
    await show_wishlist(update, context)


async def clear_wishlist(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    get_session(update, context).wishlist.clear()
    await show_wishlist(update, context)
