DEFAULT_RING_BITS = 3     # identifier space 2**3 = 8 slots
MIN_RING_BITS = 2
MAX_RING_BITS = 9         # keeps 2**M small enough for interactive use

RANDOM_ID_ATTEMPTS = 32   # rejection samples before falling back to the free-slot list

# service wrapper
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000

# logging
LOG_LEVEL = "INFO"
LOG_DIR = None            # set to a directory name to also write logs/chord.log
LOG_FILE_NAME = "chord.log"
