import logging
from typing import Optional
from telegram import Update, InlineKeyboardMarkup
from telegram.ext import ContextTypes, ConversationHandler
from ..catalog import Catalog
from ..session import Session
from ..utils.constants import EMOJIS
from ..utils.keyboards import create_main_menu_keyboard

logger = logging.getLogger(__name__)


def get_session(update: Update, context: ContextTypes.DEFAULT_TYPE) -> Session:
    """Return the user's session, loading their stores on first use."""
    session = context.user_data.get('session')
    if session is None:
        session = Session(context.bot_data['db'], update.effective_user.id, context.bot_data['api'])
        context.user_data['session'] = session
    return session


def get_catalog(context: ContextTypes.DEFAULT_TYPE) -> Catalog:
    return context.bot_data['catalog']


def callback_arg(update: Update) -> str:
    return update.callback_query.data.split(':', 1)[1]


async def reply(
    update: Update,
    text: str,
    reply_markup: Optional[InlineKeyboardMarkup] = None,
    session: Optional[Session] = None,
) -> None:
    """Answer a command or a button press, prefixed with any pending alerts."""
    if session is not None:
        alerts = session.drain_alerts()
        if alerts:
            text = f"{alerts}\n\n{text}"

    # Handle both direct command and callback query
    if update.callback_query:
        await update.callback_query.answer()
        message = update.callback_query.message
    else:
        message = update.message
    await message.reply_text(text, reply_markup=reply_markup)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    commands = [
        ('start', 'Open the main menu'),
        ('products', 'Browse products'),
        ('categories', 'Browse categories'),
        ('search', 'Search products'),
        ('cart', 'View your cart'),
        ('wishlist', 'View your wishlist'),
        ('addresses', 'Manage delivery addresses'),
        ('checkout', 'Checkout'),
        ('profile', 'Your orders'),
    ]
    await context.bot.set_my_commands(commands)

    session = get_session(update, context)
    await reply(
        update,
        f"{EMOJIS['WAVE']} Welcome to the store!\n"
        f"{EMOJIS['CART']} Cart: {session.cart.count} items · "
        f"{EMOJIS['HEART']} Wishlist: {session.wishlist.count}\n"
        f"{EMOJIS['ARROW']} What would you like to do?",
        create_main_menu_keyboard(),
        session,
    )
    return ConversationHandler.END


async def show_menu(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    session = get_session(update, context)
    await reply(update, f"{EMOJIS['ARROW']} What would you like to do?", create_main_menu_keyboard(), session)


def clear_forms(context: ContextTypes.DEFAULT_TYPE) -> None:
    context.user_data.pop('address_form', None)
    context.user_data.pop('address_edit_id', None)


async def end_conversation(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Drop a half-filled form without replying; the update's own screen answers it."""
    clear_forms(context)
    return ConversationHandler.END


async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE):
    clear_forms(context)
    await update.message.reply_text(f"{EMOJIS['ERROR']} Operation cancelled.", reply_markup=create_main_menu_keyboard())
    return ConversationHandler.END


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    logger.error(f"Unhandled error while processing update: {context.error}", exc_info=context.error)
    if isinstance(update, Update) and update.effective_message:
        await update.effective_message.reply_text(f"{EMOJIS['ERROR']} Sorry, something went wrong. Please try again.")
