"""Constants shared by services and routers."""

HANDLE_MARKER = "@"

# Default page sizes per endpoint
USERS_PAGE_SIZE = 20
CONVERSATIONS_PAGE_SIZE = 20
MESSAGES_PAGE_SIZE = 50
USER_CONVERSATIONS_PAGE_SIZE = 20
USER_SEARCH_LIMIT = 10
RECENT_ACTIVITY_LIMIT = 20
ANALYTICS_DEFAULT_DAYS = 7

RECENT_CONVERSATIONS_LIMIT = 10
DAILY_STATS_DAYS = 7
MESSAGE_PREVIEW_LENGTH = 50
# Users among the N highest ids count as "recent registrations"
RECENT_USER_ID_WINDOW = 100

CONVERSATION_STATUSES = ("active", "ended")

# Integer ids are signed 64-bit columns
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1
# Upper bounds for loose page/limit/days query values
MAX_QUERY_INT = 2**31 - 1
MAX_DAYS = 36500
