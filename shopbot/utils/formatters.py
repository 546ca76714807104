from typing import List, Optional

from ..checkout import OrderTotals, calculate_totals
from ..models.models import Address, CartItem, Order, Product
from .constants import EMOJIS, FREE_SHIPPING_THRESHOLD, STATUS_EMOJIS


def format_money(amount: float) -> str:
    return f"${amount:.2f}"


def format_stars(rating: float) -> str:
    full = int(round(rating))
    return EMOJIS['STAR'] * full + f" {rating:.1f}"


def format_product_line(product: Product) -> str:
    return f"{EMOJIS['PRODUCT']} {product.name} - {format_money(product.price)} ({format_stars(product.rating)})"


def format_product_list(products: List[Product], page: int, pages: int) -> str:
    if not products:
        return f"{EMOJIS['SEARCH']} No products found."
    lines = [format_product_line(p) for p in products]
    return f"{EMOJIS['SHOPPING']} Products (page {page + 1}/{pages}):\n\n" + "\n".join(lines)


def format_product_detail(product: Product, in_cart: bool = False, in_wishlist: bool = False) -> str:
    """Format the product detail screen."""
    if product.in_stock:
        stock = f"{EMOJIS['CONFIRM']} In Stock ({product.stock} available)"
    else:
        stock = f"{EMOJIS['ERROR']} Out of Stock"
    text = (
        f"{EMOJIS['PRODUCT']} {product.name}\n"
        f"{EMOJIS['MONEY']} {format_money(product.price)}\n"
        f"{format_stars(product.rating)}\n"
        f"{stock}\n"
    )
    if product.category:
        text += f"Category: {product.category}\n"
    if product.description:
        text += f"\n{product.description}\n"
    if in_cart:
        text += f"\n{EMOJIS['CART']} Already in your cart"
    if in_wishlist:
        text += f"\n{EMOJIS['HEART']} In your wishlist"
    return text


def format_cart_line(item: CartItem) -> str:
    return f"• {item.product.name}: {item.quantity} × {format_money(item.product.price)} = {format_money(item.subtotal)}"


def format_cart_text(items: List[CartItem], total: float) -> str:
    """Format cart contents with shipping and the free-shipping hint."""
    if not items:
        return f"{EMOJIS['CART']} Your cart is empty."

    shipping = calculate_totals(total).shipping if total > 0 else 0
    cart_text = f"{EMOJIS['CART']} Cart:\n" + "\n".join(format_cart_line(item) for item in items)
    cart_text += f"\n\nSubtotal: {format_money(total)}"
    cart_text += f"\nShipping: {'FREE' if shipping == 0 else format_money(shipping)}"
    if shipping > 0:
        # Free shipping starts strictly above the threshold
        remaining = FREE_SHIPPING_THRESHOLD - total
        if remaining >= 0.01:
            hint = f"Add {format_money(remaining)} more for free shipping!"
        else:
            hint = f"Free shipping on orders over {format_money(FREE_SHIPPING_THRESHOLD)}!"
        cart_text += f"\n{EMOJIS['TRUCK']} {hint}"
    cart_text += f"\n\n{EMOJIS['MONEY']} Total: {format_money(total + shipping)}"
    return cart_text


def format_wishlist_text(products: List[Product]) -> str:
    if not products:
        return f"{EMOJIS['HEART']} Your wishlist is empty."
    return f"{EMOJIS['HEART']} Wishlist ({len(products)}):\n" + "\n".join(format_product_line(p) for p in products)


def format_address(address: Address) -> str:
    text = (
        f"{address.full_name}\n"
        f"{address.street}\n"
        f"{address.city}, {address.state} {address.zip_code}\n"
        f"{address.country}\n"
        f"Phone: {address.phone}"
    )
    if address.is_default:
        text += "\n[Default]"
    return text


def format_address_book(addresses: List[Address], selected: Optional[Address]) -> str:
    if not addresses:
        return f"{EMOJIS['LOCATION']} No addresses found. Please add an address to continue."
    blocks = []
    for address in addresses:
        marker = f"{EMOJIS['CONFIRM']} " if selected and selected.id == address.id else ""
        blocks.append(f"{marker}{format_address(address)}")
    return f"{EMOJIS['LOCATION']} Your addresses:\n\n" + "\n\n".join(blocks)


def format_checkout_summary(items: List[CartItem], totals: OrderTotals, address: Optional[Address]) -> str:
    count = sum(item.quantity for item in items)
    text = f"{EMOJIS['PACKAGE']} Order Summary\n\n"
    text += "\n".join(format_cart_line(item) for item in items) or "Your cart is empty."
    text += (
        f"\n\nSubtotal ({count} items): {format_money(totals.subtotal)}"
        f"\nShipping: {'FREE' if totals.shipping == 0 else format_money(totals.shipping)}"
        f"\nTax (18%): {format_money(totals.tax)}"
        f"\n{EMOJIS['MONEY']} Total: {format_money(totals.total)}\n\n"
    )
    if address:
        text += f"{EMOJIS['LOCATION']} Deliver to:\n{format_address(address)}"
    else:
        text += f"{EMOJIS['WARNING']} Please select a delivery address"
    return text


def format_order_confirmation(order: Order, address: Optional[Address]) -> str:
    """Format order confirmation message."""
    text = (
        f"{EMOJIS['CONFIRM']} Order Placed Successfully!\n\n"
        f"Thank you for your order. Your order number is #{order.id}\n\n"
        f"{EMOJIS['MONEY']} Total Amount: {format_money(order.total_amount)}\n"
        f"{EMOJIS['PACKAGE']} Items: {len(order.items)}\n"
    )
    if address:
        text += f"{EMOJIS['LOCATION']} Delivery to: {address.street}, {address.city}\n"
    text += (
        f"Order Status: {order.status or 'Success'}\n"
        f"Payment Status: {order.payment_status or 'Pending'}"
    )
    return text


def format_status(status: str) -> str:
    return f"{STATUS_EMOJIS.get(status, '•')} {status}"


def format_order_history(orders: List[Order]) -> str:
    if not orders:
        return f"{EMOJIS['PACKAGE']} You have no orders yet."
    lines = []
    for order in orders:
        date = order.created_at[:10] if order.created_at else '-'
        lines.append(
            f"#{order.id} · {date}\n"
            f"   {order.item_count} items · {format_money(order.total_amount)} · "
            f"{format_status(order.status)} · payment {order.payment_status}"
        )
    return f"{EMOJIS['PACKAGE']} Order History:\n\n" + "\n\n".join(lines)
