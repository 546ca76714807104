import os
import logging
from dotenv import load_dotenv

# Load environment variables before the package reads its settings
load_dotenv()

from telegram import Update  # noqa: E402
from telegram.ext import (  # noqa: E402
    Application, CommandHandler, CallbackQueryHandler, MessageHandler,
    filters, ConversationHandler
)

from shopbot.api.client import ApiClient  # noqa: E402
from shopbot.catalog import Catalog  # noqa: E402
from shopbot.database.database import Database  # noqa: E402
from shopbot.handlers.common_handlers import (  # noqa: E402
    start, show_menu, cancel, end_conversation, error_handler
)
from shopbot.handlers.catalog_handlers import (  # noqa: E402
    show_products, show_categories, handle_category, handle_sort, handle_rating, clear_filters,
    command_search, handle_search_query, show_product, add_to_cart, buy_now, change_selected_quantity,
    toggle_wishlist
)
from shopbot.handlers.cart_handlers import (  # noqa: E402
    show_cart, increase_quantity, decrease_quantity, remove_from_cart, move_to_wishlist, clear_cart,
    show_wishlist, remove_from_wishlist, move_to_cart, clear_wishlist
)
from shopbot.handlers.address_handlers import (  # noqa: E402
    show_addresses, select_address, set_default_address, delete_address,
    command_new_address, command_edit_address, handle_address_field, handle_address_default
)
from shopbot.handlers.checkout_handlers import show_checkout, place_order  # noqa: E402
from shopbot.handlers.profile_handlers import show_profile  # noqa: E402
from shopbot.utils.constants import (  # noqa: E402
    ADDRESS_DEFAULT, ADDRESS_FIELD, ADDRESS_GROUP, SEARCH_GROUP, SEARCH_QUERY
)

# Enable logging
logging.basicConfig(format='%(asctime)s - %(name)s - %(levelname)s - %(message)s', level=logging.INFO)
logging.getLogger('httpx').setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def build_application(token: str, db: Database, api: ApiClient) -> Application:
    application = Application.builder().token(token).build()
    application.bot_data['db'] = db
    application.bot_data['api'] = api
    application.bot_data['catalog'] = Catalog(api)

    # Each conversation gets its own group ahead of the screens in group 0. A
    # button press or command outside the current step ends the conversation
    # and is then handled normally, so a half-filled form never swallows text
    # meant for another screen.
    leave_conversation = [
        CallbackQueryHandler(end_conversation),
        MessageHandler(filters.COMMAND, end_conversation)
    ]
    application.add_handler(ConversationHandler(
        entry_points=[
            CommandHandler('new_address', command_new_address),
            CallbackQueryHandler(command_new_address, pattern='^addr_new$'),
            CallbackQueryHandler(command_edit_address, pattern='^addr_edit:')
        ],
        states={
            ADDRESS_FIELD: [MessageHandler(filters.TEXT & ~filters.COMMAND, handle_address_field)],
            ADDRESS_DEFAULT: [CallbackQueryHandler(handle_address_default, pattern='^default:')]
        },
        fallbacks=leave_conversation,
        allow_reentry=True
    ), group=ADDRESS_GROUP)
    application.add_handler(ConversationHandler(
        entry_points=[
            CommandHandler('search', command_search),
            CallbackQueryHandler(command_search, pattern='^search$')
        ],
        states={
            SEARCH_QUERY: [MessageHandler(filters.TEXT & ~filters.COMMAND, handle_search_query)]
        },
        fallbacks=leave_conversation,
        allow_reentry=True
    ), group=SEARCH_GROUP)

    application.add_handler(CommandHandler("start", start))
    application.add_handler(CommandHandler("cancel", cancel))
    application.add_handler(CommandHandler("products", show_products))
    application.add_handler(CommandHandler("categories", show_categories))
    application.add_handler(CommandHandler("cart", show_cart))
    application.add_handler(CommandHandler("wishlist", show_wishlist))
    application.add_handler(CommandHandler("addresses", show_addresses))
    application.add_handler(CommandHandler("checkout", show_checkout))
    application.add_handler(CommandHandler("profile", show_profile))

    callbacks = [
        ('^menu$', show_menu),
        ('^products:', show_products),
        ('^categories$', show_categories),
        ('^category:', handle_category),
        ('^sort:', handle_sort),
        ('^rating:', handle_rating),
        ('^filters_clear$', clear_filters),
        ('^product:', show_product),
        ('^cart_add:', add_to_cart),
        ('^buy_now:', buy_now),
        ('^qty_(inc|dec):', change_selected_quantity),
        ('^wish_toggle:', toggle_wishlist),
        ('^cart$', show_cart),
        ('^cart_inc:', increase_quantity),
        ('^cart_dec:', decrease_quantity),
        ('^cart_remove:', remove_from_cart),
        ('^cart_to_wish:', move_to_wishlist),
        ('^cart_clear$', clear_cart),
        ('^wishlist$', show_wishlist),
        ('^wish_remove:', remove_from_wishlist),
        ('^wish_to_cart:', move_to_cart),
        ('^wish_clear$', clear_wishlist),
        ('^addresses$', show_addresses),
        ('^addr_select:', select_address),
        ('^addr_default:', set_default_address),
        ('^addr_delete:', delete_address),
        ('^checkout$', show_checkout),
        ('^place_order$', place_order),
        ('^profile$', show_profile),
    ]
    for pattern, callback in callbacks:
        application.add_handler(CallbackQueryHandler(callback, pattern=pattern))

    application.add_error_handler(error_handler)
    return application


def main():
    db = Database()
    db.ensure_schema()
    api = ApiClient()

    application = build_application(os.getenv('BOT_TOKEN'), db, api)

    # Start the bot
    logger.info(f"Starting bot against {api.base_url}")
    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == '__main__':
    main()
