import os

# Backend
BACKEND_URL = os.getenv('BACKEND_URL', 'https://major-project1-backend-xi.vercel.app/api')
REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', '10'))

# Orders are placed on behalf of a single demo account
DEMO_USER_ID = os.getenv('DEMO_USER_ID', '68a2d027f17a6dbb2ee3e0ab')

# Seconds before a placed order is moved to its next status
ORDER_STATUS_DELAY = float(os.getenv('ORDER_STATUS_DELAY', '5'))
ORDER_STATUS_UPDATE = {'status': 'Processing', 'paymentStatus': 'Paid'}

# Pricing
FREE_SHIPPING_THRESHOLD = 50
SHIPPING_FEE = 5.99
TAX_RATE = 0.18

# Local storage keys
CART_KEY = 'cart'
WISHLIST_KEY = 'wishlist'
ADDRESSES_KEY = 'userAddresses'
SELECTED_ADDRESS_KEY = 'selectedAddress'
ORDERS_KEY = 'orders'

# Conversation states
ADDRESS_FIELD, ADDRESS_DEFAULT, SEARCH_QUERY = range(3)

# Handler groups; conversations run before the screens in group 0
ADDRESS_GROUP, SEARCH_GROUP = -2, -1

# Address form prompts, in the order they are asked
ADDRESS_PROMPTS = [
    ('fullName', 'Enter the full name:'),
    ('street', 'Enter the street address:'),
    ('city', 'Enter the city:'),
    ('state', 'Enter the state:'),
    ('zipCode', 'Enter the ZIP code:'),
    ('country', 'Enter the country (send "-" for USA):'),
    ('phone', 'Enter the phone number:'),
]

PAGE_SIZE = 5

DEFAULT_CATEGORIES = [
    {'_id': '1', 'name': 'Electronics', 'image': None},
    {'_id': '2', 'name': 'Clothing', 'image': None},
    {'_id': '3', 'name': 'Books', 'image': None},
    {'_id': '4', 'name': 'Home & Garden', 'image': None},
    {'_id': '5', 'name': 'Sports', 'image': None},
    {'_id': '6', 'name': 'Beauty', 'image': None},
]

# Emojis for UI elements
EMOJIS = {
    'CART': '🛒',
    'MONEY': '💰',
    'PRODUCT': '💠',
    'CONFIRM': '✅',
    'WARNING': '⚠️',
    'ERROR': '❌',
    'INFO': 'ℹ️',
    'PERSON': '👤',
    'LOCATION': '📍',
    'SHOPPING': '🛍️',
    'PACKAGE': '📦',
    'ARROW': '🔽',
    'WAVE': '👋',
    'PLUS': '➕',
    'MINUS': '➖',
    'HEART': '❤️',
    'STAR': '⭐',
    'TRASH': '🗑️',
    'SEARCH': '🔍',
    'BACK': '⬅️',
    'NEXT': '➡️',
    'TRUCK': '🚚',
    'PROFILE': '🙍',
    'EDIT': '✏️',
}

# Alert levels map onto an emoji prefix
ALERT_EMOJIS = {
    'success': EMOJIS['CONFIRM'],
    'info': EMOJIS['INFO'],
    'warning': EMOJIS['WARNING'],
    'error': EMOJIS['ERROR'],
}

STATUS_EMOJIS = {
    'Delivered': '✅',
    'Shipped': '🚚',
    'Processing': '⏳',
    'Pending': '🕒',
    'Cancelled': '❌',
}
