import logging
import math
from telegram import Update
from telegram.ext import ContextTypes, ConversationHandler
from ..api.client import ApiError
from ..catalog import filter_products
from ..utils.constants import EMOJIS, PAGE_SIZE, SEARCH_QUERY
from ..utils.formatters import format_product_detail, format_product_list
from ..utils.keyboards import (
    create_category_keyboard, create_product_detail_keyboard, create_product_list_keyboard
)
from .cart_handlers import show_cart
from .common_handlers import callback_arg, get_catalog, get_session, reply

logger = logging.getLogger(__name__)


def _filters(context: ContextTypes.DEFAULT_TYPE) -> dict:
    return context.user_data.setdefault('filters', {})


def _quantities(context: ContextTypes.DEFAULT_TYPE) -> dict:
    return context.user_data.setdefault('quantities', {})


async def show_products(update: Update, context: ContextTypes.DEFAULT_TYPE, page: int = 0) -> None:
    if update.callback_query and update.callback_query.data.startswith('products:'):
        page = int(callback_arg(update))

    session = get_session(update, context)
    catalog = get_catalog(context)
    filters = _filters(context)

    # Search and category go to the backend; rating and sort are applied locally
    products = await catalog.load_products(
        search=filters.get('search', ''),
        category=filters.get('category', ''),
    )
    if catalog.error and not products:
        await reply(update, f"{EMOJIS['ERROR']} {catalog.error}", session=session)
        return

    products = filter_products(products, min_rating=filters.get('rating'), sort=filters.get('sort'))
    pages = max(math.ceil(len(products) / PAGE_SIZE), 1)
    page = min(max(page, 0), pages - 1)
    visible = products[page * PAGE_SIZE:(page + 1) * PAGE_SIZE]

    text = format_product_list(visible, page, pages)
    if catalog.error:
        # Stale list from the last successful fetch
        text = f"{EMOJIS['WARNING']} {catalog.error}\n\n{text}"
    active = [f"{k}: {v}" for k, v in filters.items() if v]
    if active:
        text += "\n\nFilters: " + ", ".join(active)
    await reply(update, text, create_product_list_keyboard(visible, page, pages), session)


async def show_categories(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    categories = await get_catalog(context).load_categories()
    # Buttons carry the position; names can exceed the callback data limit
    context.user_data['categories'] = [c.name for c in categories]
    await reply(update, f"{EMOJIS['PRODUCT']} Shop by category:", create_category_keyboard(categories))


async def handle_category(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    names = context.user_data.get('categories', [])
    try:
        name = names[int(callback_arg(update))]
    except (ValueError, IndexError):
        # Button from a list this session no longer has
        await show_categories(update, context)
        return
    _filters(context)['category'] = name
    await show_products(update, context)


async def handle_sort(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    _filters(context)['sort'] = callback_arg(update)
    await show_products(update, context)


async def handle_rating(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    _filters(context)['rating'] = float(callback_arg(update))
    await show_products(update, context)


async def clear_filters(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    context.user_data['filters'] = {}
    await show_products(update, context)


async def command_search(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await reply(update, f"{EMOJIS['SEARCH']} What are you looking for?")
    return SEARCH_QUERY


async def handle_search_query(update: Update, context: ContextTypes.DEFAULT_TYPE):
    _filters(context)['search'] = update.message.text.strip()
    await show_products(update, context)
    return ConversationHandler.END


async def send_product_detail(update: Update, context: ContextTypes.DEFAULT_TYPE, product_id: str) -> None:
    session = get_session(update, context)
    catalog = get_catalog(context)
    try:
        product = await catalog.get_product(product_id)
    except ApiError as e:
        logger.error(f"Failed to fetch product {product_id}: {e.message}")
        await reply(update, f"{EMOJIS['ERROR']} {e.message}", session=session)
        return

    related = await catalog.related(product)
    in_cart = session.cart.contains(product.id)
    in_wishlist = session.wishlist.contains(product.id)
    await reply(
        update,
        format_product_detail(product, in_cart, in_wishlist),
        create_product_detail_keyboard(
            product, in_cart, in_wishlist, related, _quantities(context).get(product.id, 1)
        ),
        session,
    )


async def show_product(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await send_product_detail(update, context, callback_arg(update))


async def change_selected_quantity(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Step the quantity picked on a product screen, between 1 and the stock on hand."""
    action, product_id = update.callback_query.data.split(':', 1)
    session = get_session(update, context)
    try:
        product = await get_catalog(context).get_product(product_id)
    except ApiError as e:
        await reply(update, f"{EMOJIS['ERROR']} {e.message}", session=session)
        return

    quantities = _quantities(context)
    quantity = quantities.get(product_id, 1) + (1 if action == 'qty_inc' else -1)
    if product.stock > 0:
        quantity = min(quantity, product.stock)
    quantities[product_id] = max(quantity, 1)
    await send_product_detail(update, context, product_id)


async def _add_selected(update: Update, context: ContextTypes.DEFAULT_TYPE) -> bool:
    product_id = callback_arg(update)
    session = get_session(update, context)
    try:
        product = await get_catalog(context).get_product(product_id)
    except ApiError as e:
        await reply(update, f"{EMOJIS['ERROR']} {e.message}", session=session)
        return False
    session.cart.add(product, _quantities(context).pop(product_id, 1))
    return True


async def add_to_cart(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if await _add_selected(update, context):
        await send_product_detail(update, context, callback_arg(update))


async def buy_now(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if await _add_selected(update, context):
        await show_cart(update, context)


async def toggle_wishlist(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    product_id = callback_arg(update)
    session = get_session(update, context)
    try:
        product = await get_catalog(context).get_product(product_id)
    except ApiError as e:
        await reply(update, f"{EMOJIS['ERROR']} {e.message}", session=session)
        return
    session.wishlist.toggle(product)
    await send_product_detail(update, context, product_id)
