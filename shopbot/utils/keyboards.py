from typing import List, Optional
from telegram import InlineKeyboardButton, InlineKeyboardMarkup
from ..models.models import Address, CartItem, Category, Product
from .constants import EMOJIS


def create_main_menu_keyboard() -> InlineKeyboardMarkup:
    """Create the main menu keyboard."""
    keyboard = [
        [InlineKeyboardButton(f"{EMOJIS['SHOPPING']} Browse Products", callback_data='products:0')],
        [InlineKeyboardButton(f"{EMOJIS['PRODUCT']} Categories", callback_data='categories'),
         InlineKeyboardButton(f"{EMOJIS['SEARCH']} Search", callback_data='search')],
        [InlineKeyboardButton(f"{EMOJIS['CART']} Cart", callback_data='cart'),
         InlineKeyboardButton(f"{EMOJIS['HEART']} Wishlist", callback_data='wishlist')],
        [InlineKeyboardButton(f"{EMOJIS['LOCATION']} Addresses", callback_data='addresses'),
         InlineKeyboardButton(f"{EMOJIS['PROFILE']} Profile", callback_data='profile')],
    ]
    return InlineKeyboardMarkup(keyboard)


def create_product_list_keyboard(products: List[Product], page: int, pages: int) -> InlineKeyboardMarkup:
    """Create a keyboard with product buttons, pagination and filters."""
    keyboard = [
        [InlineKeyboardButton(f"{EMOJIS['PRODUCT']} {product.name} - ${product.price:.2f}",
                              callback_data=f'product:{product.id}')]
        for product in products
    ]

    nav = []
    if page > 0:
        nav.append(InlineKeyboardButton(f"{EMOJIS['BACK']} Prev", callback_data=f'products:{page - 1}'))
    if page + 1 < pages:
        nav.append(InlineKeyboardButton(f"Next {EMOJIS['NEXT']}", callback_data=f'products:{page + 1}'))
    if nav:
        keyboard.append(nav)

    keyboard.append([
        InlineKeyboardButton("Price ↑", callback_data='sort:lowtohigh'),
        InlineKeyboardButton("Price ↓", callback_data='sort:hightolow'),
        InlineKeyboardButton(f"{EMOJIS['STAR']} 4+", callback_data='rating:4'),
    ])
    keyboard.append([
        InlineKeyboardButton("Clear filters", callback_data='filters_clear'),
        InlineKeyboardButton(f"{EMOJIS['ARROW']} Menu", callback_data='menu'),
    ])
    return InlineKeyboardMarkup(keyboard)


def create_category_keyboard(categories: List[Category]) -> InlineKeyboardMarkup:
    keyboard = [
        [InlineKeyboardButton(category.name, callback_data=f'category:{index}')]
        for index, category in enumerate(categories)
    ]
    keyboard.append([InlineKeyboardButton(f"{EMOJIS['ARROW']} Menu", callback_data='menu')])
    return InlineKeyboardMarkup(keyboard)


def create_product_detail_keyboard(
    product: Product,
    in_cart: bool,
    in_wishlist: bool,
    related: Optional[List[Product]] = None,
    quantity: int = 1,
) -> InlineKeyboardMarkup:
    keyboard = []
    if product.in_stock:
        keyboard.append([
            InlineKeyboardButton(EMOJIS['MINUS'], callback_data=f'qty_dec:{product.id}'),
            InlineKeyboardButton(f"Qty: {quantity}", callback_data=f'product:{product.id}'),
            InlineKeyboardButton(EMOJIS['PLUS'], callback_data=f'qty_inc:{product.id}'),
        ])
        label = f"{EMOJIS['CART']} Go to Cart" if in_cart else f"{EMOJIS['CART']} Add to Cart"
        keyboard.append([
            InlineKeyboardButton(label, callback_data='cart' if in_cart else f'cart_add:{product.id}'),
            InlineKeyboardButton(f"{EMOJIS['MONEY']} Buy Now", callback_data=f'buy_now:{product.id}'),
        ])
    heart = f"{EMOJIS['HEART']} Remove from Wishlist" if in_wishlist else f"{EMOJIS['HEART']} Add to Wishlist"
    keyboard.append([InlineKeyboardButton(heart, callback_data=f'wish_toggle:{product.id}')])
    for other in related or []:
        keyboard.append([InlineKeyboardButton(f"↪ {other.name}", callback_data=f'product:{other.id}')])
    keyboard.append([InlineKeyboardButton(f"{EMOJIS['BACK']} Back to Products", callback_data='products:0')])
    return InlineKeyboardMarkup(keyboard)


def create_cart_keyboard(items: List[CartItem]) -> InlineKeyboardMarkup:
    keyboard = []
    for item in items:
        keyboard.append([
            InlineKeyboardButton(EMOJIS['MINUS'], callback_data=f'cart_dec:{item.id}'),
            InlineKeyboardButton(f"{item.product.name} ×{item.quantity}", callback_data=f'product:{item.id}'),
            InlineKeyboardButton(EMOJIS['PLUS'], callback_data=f'cart_inc:{item.id}'),
            InlineKeyboardButton(EMOJIS['HEART'], callback_data=f'cart_to_wish:{item.id}'),
            InlineKeyboardButton(EMOJIS['TRASH'], callback_data=f'cart_remove:{item.id}'),
        ])
    if items:
        keyboard.append([
            InlineKeyboardButton(f"{EMOJIS['CONFIRM']} Checkout", callback_data='checkout'),
            InlineKeyboardButton(f"{EMOJIS['TRASH']} Clear Cart", callback_data='cart_clear'),
        ])
    keyboard.append([InlineKeyboardButton(f"{EMOJIS['SHOPPING']} Continue Shopping", callback_data='products:0')])
    return InlineKeyboardMarkup(keyboard)


def create_wishlist_keyboard(products: List[Product]) -> InlineKeyboardMarkup:
    keyboard = [
        [InlineKeyboardButton(f"{EMOJIS['CART']} {product.name}", callback_data=f'wish_to_cart:{product.id}'),
         InlineKeyboardButton(EMOJIS['TRASH'], callback_data=f'wish_remove:{product.id}')]
        for product in products
    ]
    if products:
        keyboard.append([InlineKeyboardButton(f"{EMOJIS['TRASH']} Clear Wishlist", callback_data='wish_clear')])
    keyboard.append([InlineKeyboardButton(f"{EMOJIS['ARROW']} Menu", callback_data='menu')])
    return InlineKeyboardMarkup(keyboard)


def create_address_keyboard(addresses: List[Address]) -> InlineKeyboardMarkup:
    keyboard = []
    for address in addresses:
        row = [InlineKeyboardButton(f"{EMOJIS['LOCATION']} {address.full_name}, {address.city}",
                                    callback_data=f'addr_select:{address.id}')]
        if not address.is_default:
            row.append(InlineKeyboardButton("Set default", callback_data=f'addr_default:{address.id}'))
        row.append(InlineKeyboardButton(EMOJIS['EDIT'], callback_data=f'addr_edit:{address.id}'))
        row.append(InlineKeyboardButton(EMOJIS['TRASH'], callback_data=f'addr_delete:{address.id}'))
        keyboard.append(row)
    keyboard.append([InlineKeyboardButton(f"{EMOJIS['PLUS']} Add Address", callback_data='addr_new')])
    keyboard.append([InlineKeyboardButton(f"{EMOJIS['ARROW']} Menu", callback_data='menu')])
    return InlineKeyboardMarkup(keyboard)


def create_yes_no_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([[
        InlineKeyboardButton("Yes", callback_data='default:yes'),
        InlineKeyboardButton("No", callback_data='default:no'),
    ]])


def create_checkout_keyboard(can_submit: bool) -> InlineKeyboardMarkup:
    keyboard = []
    if can_submit:
        keyboard.append([InlineKeyboardButton(f"{EMOJIS['CONFIRM']} Place Order", callback_data='place_order')])
    keyboard.append([InlineKeyboardButton(f"{EMOJIS['LOCATION']} Manage Addresses", callback_data='addresses')])
    keyboard.append([InlineKeyboardButton(f"{EMOJIS['CART']} Back to Cart", callback_data='cart')])
    return InlineKeyboardMarkup(keyboard)


def create_order_placed_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [InlineKeyboardButton(f"{EMOJIS['SHOPPING']} Continue Shopping", callback_data='products:0')],
        [InlineKeyboardButton(f"{EMOJIS['PACKAGE']} View Order History", callback_data='profile')],
    ])
