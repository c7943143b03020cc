"""
utils/constants.py

Purpose: Centralized static content

- User-facing messages returned in response envelopes
- Field validation messages
- Select options for the form configurations (countries, industries)

(Prevents hardcoding across the codebase)
"""

# ============================================================
# AUTH
# ============================================================

MSG_REGISTERED = "Account created. You can now sign in."
MSG_REGISTERED_WITH_COMPANY = "Account and organization created. You can now sign in."
MSG_LOGGED_IN = "Signed in successfully"

MSG_EMAIL_TAKEN = "This email is already registered"
MSG_WEAK_PASSWORD = "Minimum 8 characters with upper-case, lower-case letters and numbers"
MSG_PASSWORD_REJECTED = "The password does not meet the requirements"
MSG_BAD_CREDENTIALS = "Incorrect email or password"
MSG_ACCOUNT_DISABLED = "This account has been disabled"
MSG_TOO_MANY_ATTEMPTS = "Too many failed attempts. Try again later"
MSG_LOGIN_FAILED = "Could not sign in"
MSG_USER_RECORD_MISSING = "User not found in the database"
MSG_NO_TOKEN = "No token provided"
MSG_TOKEN_EXPIRED = "Token expired"
MSG_INVALID_TOKEN = "Invalid token"
MSG_AUTH_FAILED = "Authentication failed"
MSG_AUTH_UNAVAILABLE = "Could not reach the authentication service"
MSG_AUTH_NOT_CONFIGURED = "Missing Firebase configuration. Set FIREBASE_WEB_API_KEY in the environment"
MSG_STORE_NOT_CONFIGURED = "Document store not configured"

# ============================================================
# USERS / COMPANIES / MEMBERS
# ============================================================

MSG_PROFILE_UPDATED = "Profile updated"
MSG_COMPANY_CREATED = "Organization created"
MSG_COMPANY_UPDATED = "Organization information updated"
MSG_INVITATION_SENT = (
    "Invitation sent. The person will receive a notification and must accept "
    "it to join the organization."
)

MSG_FORBIDDEN_UPDATE_COMPANY = "You do not have permission to update this company"
MSG_FORBIDDEN_VIEW_MEMBERS = "You do not have permission to view this company's members"
MSG_FORBIDDEN_ADD_MEMBER = "You do not have permission to add members to this company"
MSG_FORBIDDEN_GRANT_OWNER = "Only an owner can grant the owner role"
MSG_USER_NOT_REGISTERED = "No account is registered with this email. The person must sign up first"
MSG_ALREADY_MEMBER = "This user is already a member of the organization"
MSG_PENDING_INVITATION = "This user already has a pending invitation to the organization"

UNKNOWN_USER_NAME = "Unknown user"

# ============================================================
# INVITATIONS / NOTIFICATIONS
# ============================================================

MSG_INVITATION_ACCEPTED = "Invitation accepted. You are now a member of the organization."
MSG_INVITATION_DECLINED = "Invitation declined."
MSG_INVITATION_ALREADY_RESPONDED = "This invitation has already been answered"
MSG_FORBIDDEN_ACCEPT = "You cannot accept this invitation"
MSG_FORBIDDEN_DECLINE = "You cannot decline this invitation"
MSG_NOTIFICATION_READ = "Notification marked as read"

# ============================================================
# FIELD VALIDATION
# ============================================================

MSG_VALIDATION_FAILED = "Validation error"
MSG_REQUIRED = "This field is required"
MSG_INVALID_EMAIL = "Please enter a valid email address"
MSG_INVALID_FORMAT = "Invalid format"
MSG_INVALID_URL = "Please enter a valid URL"
MSG_PASSWORD_STRENGTH = "The password must contain upper-case, lower-case letters and numbers"

MSG_USER_REQUIRED = "user is required"
MSG_COMPANY_REQUIRED = "company is required"
MSG_USER_NAME = "Name must be between 2 and 100 characters"
MSG_USER_EMAIL = "A valid email address is required"
MSG_USER_PASSWORD = "Password must be at least 8 characters"
MSG_COMPANY_NAME = "Company name must be between 2 and 200 characters"
MSG_COMPANY_EMAIL = "A valid company email is required"
MSG_COMPANY_PHONE = "Company phone is required"
MSG_ADDRESS_REQUIRED = "address is required"
MSG_ADDRESS_OBJECT = "address must be an object"
MSG_STREET = "Street must be between 3 and 200 characters"
MSG_CITY = "City must be between 2 and 100 characters"
MSG_STATE = "State must be between 2 and 100 characters"
MSG_POSTAL_CODE = "Postal code must be between 3 and 20 characters"
MSG_COUNTRY = "Country is required"
MSG_WEBSITE = "A valid website URL is required"
MSG_DESCRIPTION = "Description must be at most 500 characters"
MSG_INDUSTRY = "Industry must be at most 100 characters"
MSG_PHONE = "Phone must be at most 50 characters"
MSG_MEMBER_ROLE = "Role must be one of owner, admin, member, viewer"
MSG_LOGIN_EMAIL = "A valid email address is required"
MSG_LOGIN_PASSWORD = "Password is required"


def min_length_message(length: int) -> str:
    return f"Minimum length is {length} characters"


def max_length_message(length: int) -> str:
    return f"Maximum length is {length} characters"


def min_value_message(value) -> str:
    return f"Minimum value is {value}"


def max_value_message(value) -> str:
    return f"Maximum value is {value}"


# ============================================================
# SELECT OPTIONS
# ============================================================

COUNTRIES = [
    {"value": "mx", "label": "Mexico"},
    {"value": "us", "label": "United States"},
    {"value": "ca", "label": "Canada"},
    {"value": "co", "label": "Colombia"},
    {"value": "ar", "label": "Argentina"},
    {"value": "cl", "label": "Chile"},
    {"value": "pe", "label": "Peru"},
    {"value": "br", "label": "Brazil"},
    {"value": "es", "label": "Spain"},
    {"value": "uk", "label": "United Kingdom"},
    {"value": "au", "label": "Australia"},
    {"value": "de", "label": "Germany"},
    {"value": "fr", "label": "France"},
    {"value": "gt", "label": "Guatemala"},
    {"value": "cr", "label": "Costa Rica"},
    {"value": "pa", "label": "Panama"},
    {"value": "ec", "label": "Ecuador"},
    {"value": "bo", "label": "Bolivia"},
    {"value": "py", "label": "Paraguay"},
    {"value": "uy", "label": "Uruguay"},
    {"value": "ve", "label": "Venezuela"},
    {"value": "hn", "label": "Honduras"},
    {"value": "sv", "label": "El Salvador"},
    {"value": "ni", "label": "Nicaragua"},
    {"value": "do", "label": "Dominican Republic"},
    {"value": "cu", "label": "Cuba"},
    {"value": "pr", "label": "Puerto Rico"},
    {"value": "jm", "label": "Jamaica"},
    {"value": "tt", "label": "Trinidad and Tobago"},
    {"value": "bs", "label": "Bahamas"},
    {"value": "bz", "label": "Belize"},
    {"value": "other", "label": "Other"},
]

INDUSTRIES = [
    {"value": "technology", "label": "Technology"},
    {"value": "finance", "label": "Finance"},
    {"value": "healthcare", "label": "Healthcare"},
    {"value": "education", "label": "Education"},
    {"value": "retail", "label": "Retail"},
    {"value": "manufacturing", "label": "Manufacturing"},
    {"value": "consulting", "label": "Consulting"},
    {"value": "legal", "label": "Legal"},
    {"value": "real-estate", "label": "Real estate"},
    {"value": "hospitality", "label": "Hospitality"},
    {"value": "transportation", "label": "Transportation"},
    {"value": "energy", "label": "Energy"},
    {"value": "media", "label": "Media and entertainment"},
    {"value": "nonprofit", "label": "Nonprofit"},
    {"value": "other", "label": "Other"},
]
