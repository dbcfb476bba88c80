"""Core constants: cache key separator, routing paths and shared literal values."""

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Routing paths emitted by session resolution
PATH_SIGN_IN = "/sign-in"
PATH_WELCOME = "/welcome"
PATH_SETUP = "/setup"
PATH_AWAITING_INVITE = "/awaiting-invite"
PATH_DASHBOARD = "/dashboard"

# Default tenant created for a member who starts their own business
DEFAULT_TENANT_NAME = "Minha Empresa"
