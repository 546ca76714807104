from telegram import Update
from telegram.ext import ContextTypes, ConversationHandler
from ..stores.addresses import AddressValidationError, validate_address
from ..utils.constants import ADDRESS_DEFAULT, ADDRESS_FIELD, ADDRESS_PROMPTS, EMOJIS
from ..utils.formatters import format_address_book
from ..utils.keyboards import create_address_keyboard, create_yes_no_keyboard
from .common_handlers import callback_arg, get_session, reply


async def show_addresses(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    session = get_session(update, context)
    book = session.addresses
    await reply(
        update,
        format_address_book(book.addresses, book.selected),
        create_address_keyboard(book.addresses),
        session,
    )


async def select_address(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    book = get_session(update, context).addresses
    address = book.select(callback_arg(update))
    if address is None:
        await reply(update, f"{EMOJIS['WARNING']} That address no longer exists.")
        return
    await show_addresses(update, context)


async def set_default_address(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    get_session(update, context).addresses.set_default(callback_arg(update))
    await show_addresses(update, context)


async def delete_address(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    get_session(update, context).addresses.delete(callback_arg(update))
    await show_addresses(update, context)


def _current_values(context: ContextTypes.DEFAULT_TYPE, update: Update) -> dict:
    edit_id = context.user_data.get('address_edit_id')
    if not edit_id:
        return {}
    address = get_session(update, context).addresses.get(edit_id)
    return address.to_dict() if address else {}


def _prompt(index: int, current: dict) -> str:
    field, text = ADDRESS_PROMPTS[index]
    if field in current:
        text += f' (current: {current[field]}, send "." to keep)'
    return text


async def command_new_address(update: Update, context: ContextTypes.DEFAULT_TYPE):
    context.user_data['address_form'] = {}
    context.user_data.pop('address_edit_id', None)
    await reply(update, f"{EMOJIS['LOCATION']} New address. {ADDRESS_PROMPTS[0][1]}")
    return ADDRESS_FIELD


async def command_edit_address(update: Update, context: ContextTypes.DEFAULT_TYPE):
    address = get_session(update, context).addresses.get(callback_arg(update))
    if address is None:
        await reply(update, f"{EMOJIS['WARNING']} That address no longer exists.")
        return ConversationHandler.END
    context.user_data['address_form'] = {}
    context.user_data['address_edit_id'] = address.id
    await reply(update, f"{EMOJIS['LOCATION']} Editing address. {_prompt(0, address.to_dict())}")
    return ADDRESS_FIELD


async def handle_address_field(update: Update, context: ContextTypes.DEFAULT_TYPE):
    form = context.user_data.setdefault('address_form', {})
    current = _current_values(context, update)
    field, _ = ADDRESS_PROMPTS[len(form)]
    value = update.message.text.strip()

    if value == '.' and field in current:
        value = current[field]
    if field == 'country' and value in ('', '-'):
        value = 'USA'
    if not value:
        await update.message.reply_text(f"{EMOJIS['WARNING']} This field is required.")
        return ADDRESS_FIELD
    form[field] = value

    if len(form) < len(ADDRESS_PROMPTS):
        await update.message.reply_text(_prompt(len(form), current))
        return ADDRESS_FIELD

    await update.message.reply_text("Set as default address?", reply_markup=create_yes_no_keyboard())
    return ADDRESS_DEFAULT


async def handle_address_default(update: Update, context: ContextTypes.DEFAULT_TYPE):
    form = context.user_data.pop('address_form', {})
    edit_id = context.user_data.pop('address_edit_id', None)
    make_default = callback_arg(update) == 'yes'
    session = get_session(update, context)

    try:
        validate_address(form)
    except AddressValidationError as e:
        await reply(update, f"{EMOJIS['ERROR']} {e}")
        return ConversationHandler.END

    if edit_id:
        # "No" leaves the current default flag alone
        if make_default:
            form['isDefault'] = True
        if session.addresses.update(edit_id, form) is None:
            await reply(update, f"{EMOJIS['WARNING']} That address no longer exists.")
            return ConversationHandler.END
    else:
        form['isDefault'] = make_default
        session.addresses.add(form)
    await show_addresses(update, context)
    return ConversationHandler.END
