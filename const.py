# Pricing
GST_RATE = 0.05
DELIVERY_CHARGE = 20
FREE_DELIVERY_THRESHOLD = 500

# Gateway
CURRENCY = "INR"
PAISE_PER_RUPEE = 100
REFUND_SPEED = "normal"
VERIFY_LOCK_SECONDS = 60

# Socket.IO rooms
ADMIN_ROOM = "admins"
USER_ROOM_PREFIX = "user_"

# Links sent in SMS and email
INVOICE_PATH = "/api/orders"
TRACKING_PATH = "/my-orders"
RATINGS_PATH = "/ratings"
RATE_US_LINK = "https://bit.ly/klubnika-rate"

CAFE_NAME = "Klubnika"
CAFE_ADDRESS = "123 Food Street, Kolkata"

SHORT_ORDER_ID_LENGTH = 6
INVOICE_TITLE_MAX = 35

ADMIN_IDENTITY = "admin_user"

NOTIFICATION_MAX_RETRIES = 3

MONTH_NAMES = [
    "",
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
