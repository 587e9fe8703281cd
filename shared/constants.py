# Database Pool Constants
POOL_SIZE = 10
MAX_OVERFLOW = 20
POOL_TIMEOUT = 30
POOL_RECYCLE = 3600

# Pagination
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
MARKETPLACE_PAGE_SIZE = 20
MARKETPLACE_SEARCH_LIMIT = 20
MARKETPLACE_FEATURED_LIMIT = 10

# Dashboards
STATS_TOP_N = 5
RECENT_ITEMS_LIMIT = 10
RECENT_MEDIA_LIMIT = 5
MONTHLY_WINDOW = 12

# Withdrawal statuses that still hold funds
PENDING_WITHDRAWAL_STATUSES = ("PENDING", "APPROVED", "PROCESSING")
DEFAULT_WITHDRAWAL_METHOD = "bank_transfer"

# Hero section defaults
DEFAULT_CTA_TEXT = "Get Started"
DEFAULT_ROTATING_TEXTS = ["Wedding", "Event", "Anniversary", "Pasni"]
