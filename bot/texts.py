"""
User-facing texts and reply-keyboard button labels.
"""

# ========== Buttons ==========

BTN_NEW_APPOINTMENT = "📅 New appointment"
BTN_MY_APPOINTMENTS = "🗓 My appointments"
BTN_CONTACT = "📞 Contact"
BTN_HELP = "❓ Help"

BTN_YES = "✅ Yes"
BTN_NO = "❌ No"
BTN_CANCEL = "❌ Cancel"

BTN_SEND_PHONE = "📞 Send phone number"
BTN_SEND_LOCATION = "📍 Send location"

# ========== Main menu ==========

WELCOME = "👋 Hello, welcome to our bot!\n\nChoose an option from the menu below:"

HELP = (
    "ℹ️ How to use this bot:\n\n"
    "/start — Start the bot\n"
    "/new — Book a new appointment\n"
    "/appointments — Show my appointments\n"
    "/cancel — Cancel the current action\n"
    "/contact — Contact information\n"
    "/help — Show this help message\n\n"
    "You can also use the buttons below:\n"
    f"{BTN_NEW_APPOINTMENT} — Book a new appointment\n"
    f"{BTN_MY_APPOINTMENTS} — Show your appointments\n"
    f"{BTN_CONTACT} — Contact the administrator\n"
    f"{BTN_HELP} — Get help"
)

CONTACT = "📞 To get in touch with us: {phone}"

ACTION_CANCELLED = "❌ Current action cancelled."

# ========== Booking flow ==========

CONFIRM_NAME = "Your name: {name}\n\nIs that correct?"
ASK_NAME = "Please enter your full name:"
NAME_TOO_LONG = "That name is too long. Please use at most {limit} characters:"
ASK_PHONE = "Great! Now please send your phone number."
ASK_PHONE_AFTER_NAME = "Thank you, {name}. Now please send your phone number."
ASK_PHONE_AGAIN = f"Please use the «{BTN_SEND_PHONE}» button to share your phone number."
ASK_ADDRESS = (
    "📍 Now enter the address of the appointment or send your location:"
)
ASK_ADDRESS_AGAIN = "Please type an address or send your location."
ADDRESS_TOO_LONG = "That address is too long. Please use at most {limit} characters."
LOCATION_RECEIVED = "📍 Location received: {address}\n\nWhich day would you like to book?"
ASK_WEEKDAY = "📅 Which day would you like to book?"
CONFIRM_APPOINTMENT = "{details}\nIs everything correct?"

BOOKING_SAVED = "✅ Appointment saved successfully! We will contact you soon."
BOOKING_FAILED = "❌ Something went wrong, please try again."

# ========== Appointment list ==========

NO_APPOINTMENTS = "You have no appointments yet."
APPOINTMENTS_HEADER = "📅 Your appointments:\n\n"
APPOINTMENTS_FAILED = "❌ Failed to load your appointments."

# ========== Errors ==========

GENERIC_ERROR = "❌ Something went wrong, please try again."
