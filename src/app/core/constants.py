"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# Slug generation
MAX_SLUG_LENGTH = 63

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_IPV6_LENGTH = 45
MAX_USER_AGENT_LENGTH = 512
MAX_RUT_LENGTH = 12
MAX_PHONE_LENGTH = 32
MAX_SKU_LENGTH = 100
MAX_EAN_LENGTH = 32

# Password requirements
MIN_PASSWORD_LENGTH = 12
MAX_PASSWORD_LENGTH = 128
BCRYPT_ROUNDS = 12

# Pagination defaults
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Token settings
ACCESS_TOKEN_JTI_LENGTH = 32

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"

# Chilean tax
IVA_RATE = 0.19
FOLIO_PAD_LENGTH = 6
DEFAULT_CURRENCY = "CLP"

# Staff
DEFAULT_VACATION_DAYS = 15

# Sync
SYNC_INTERVAL_HOURS = 24
SYNC_LOCK_TTL_SECONDS = 1800
RECENT_DOCUMENTS_DAYS = 7

# Enrichment
SHORT_DESCRIPTION_MAX_LENGTH = 80
MAX_IMAGE_SUGGESTIONS = 20
