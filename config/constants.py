"""
Centralized constants for LeadGen Studio.
All magic numbers used by the pipeline, renderer and entitlements.
"""

# ===========================================
# GENERATION PIPELINE
# ===========================================
CONCEPT_COUNT = 3                     # concepts produced per submit
MIN_CORE_POINTS = 1                   # an approved outline needs at least one
GENERATION_TEMPERATURE = 0.7          # LLM temperature for content calls
GENERATION_MAX_TOKENS = 4000          # max tokens for the final document call
OUTLINE_MAX_TOKENS = 1500             # max tokens for concept/outline calls
JSON_FIX_MAX_TOKENS = 1200            # max tokens for the one-shot JSON repair
JSON_FIX_TEMPERATURE = 0.0

# ===========================================
# BRANDING / THEME DEFAULTS
# ===========================================
DEFAULT_PRIMARY_COLOR = "#1a237e"
DEFAULT_SECONDARY_COLOR = "#3949ab"
DEFAULT_FONT_FAMILY = "Inter"
DEFAULT_PRIMARY_ACTION_LABEL = "Book a free Strategy Session"
DEFAULT_CTA_TITLE = "Ready to Get Your Strategy Done For You?"

# ===========================================
# SUBSCRIPTIONS
# ===========================================
CAMPAIGN_LIMITS = {
    "free": 3,
    "premium": 5,
    "enterprise": 25,
}
PREMIUM_PERIOD_MONTHS = 1             # one paid month per upgrade

# ===========================================
# API / SERVER
# ===========================================
API_PREFIX = "/api/wizard"

# ===========================================
# LOGGING
# ===========================================
APP_LOGGER_NAME = 'leadgen'          # handlers attach here only
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE_NAME = 'leadgen.log'       # under Settings.logs_dir
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 5
