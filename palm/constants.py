APP_NAME = "Palm"

ACCOUNT_ID = 1
PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

PREVIEW_MAX_CHARS = 100

IMPORTANCE_LOW = "Low"
IMPORTANCE_NORMAL = "Normal"
IMPORTANCE_HIGH = "High"
IMPORTANCE_VALUES = (IMPORTANCE_LOW, IMPORTANCE_NORMAL, IMPORTANCE_HIGH)

RECIPIENT_TO = "To"
RECIPIENT_CC = "Cc"
RECIPIENT_BCC = "Bcc"
RECIPIENT_KINDS = (RECIPIENT_TO, RECIPIENT_CC, RECIPIENT_BCC)

ACCOUNT_TYPE_MICROSOFT = "Microsoft"
ACCOUNT_TYPE_GOOGLE = "Google"
ACCOUNT_TYPES = (ACCOUNT_TYPE_MICROSOFT, ACCOUNT_TYPE_GOOGLE)

# Avatar palette: dark aquamarine, orange, peach.
AVATAR_PALETTE = ("#2F7F74", "#E8894A", "#F4C7A1")

BYTES_PER_KB = 1024
BYTES_PER_MB = 1024 * 1024

QT_WINDOW_DEFAULT_GEOMETRY = "1100x700"
QT_WINDOW_MIN_WIDTH = 800
QT_WINDOW_MIN_HEIGHT = 500
QT_SPLITTER_LEFT_DEFAULT = 380
QT_SPLITTER_RIGHT_DEFAULT = 720
QT_THREAD_POOL_MAX_WORKERS = 4

DEFAULT_LOG_LEVEL = "INFO"
