"""
FlatDB - Storage Constants
Constants for page layout, record layout, and table capacity.
"""

# Page Configuration
PAGE_SIZE = 4096  # 4KB, standard page size matching OS block size
MAX_PAGES = 100  # Page cache slots; also the table's page capacity

# Record Layout (fixed width, no header)
ID_SIZE = 4  # 32-bit unsigned, big-endian
USERNAME_SIZE = 32
EMAIL_SIZE = 255

ID_OFFSET = 0
USERNAME_OFFSET = ID_OFFSET + ID_SIZE
EMAIL_OFFSET = USERNAME_OFFSET + USERNAME_SIZE
RECORD_SIZE = ID_SIZE + USERNAME_SIZE + EMAIL_SIZE  # 291 bytes

MAX_ID = 0xFFFFFFFF

# Table Capacity
RECORDS_PER_PAGE = PAGE_SIZE // RECORD_SIZE  # 14; trailing bytes are padding
MAX_RECORDS = RECORDS_PER_PAGE * MAX_PAGES  # 1400

# HTTP API defaults (overridable via environment)
DEFAULT_DB_PATH = "flat.db"
DEFAULT_PORT = 5000
