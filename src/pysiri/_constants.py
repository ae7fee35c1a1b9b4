"""Internal constants shared across the library."""

from datetime import timedelta

USER_AGENT = "pysiri/1 (+aiohttp)"
ACCEPT_JSON = "application/json"

#: Default HTTP request timeout in seconds.
DEFAULT_REQUEST_TIMEOUT: float = 30.0

#: How far back the initial "last accepted" timestamp is placed when a source
#: is created. Anything older than this is treated as stale on the first poll.
DEFAULT_INITIAL_LOOKBACK: timedelta = timedelta(days=30)

# Query parameters that commonly carry feed credentials.
SENSITIVE_QUERY_KEYS: frozenset[str] = frozenset(
    {
        "apikey",
        "api_key",
        "key",
        "token",
        "access_token",
        "subscription-key",
        "password",
    }
)
