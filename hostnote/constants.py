"""Project-wide constants (size limits, blob layout, naming conventions)."""

MAX_FILE_SIZE_BYTES: int = 5 * 1024 * 1024  # 5 MiB plaintext limit
MAX_FILENAME_LENGTH: int = 255

# Ciphertext blob layout: salt || nonce || tag || ciphertext
SALT_LENGTH: int = 64
NONCE_LENGTH: int = 16
TAG_LENGTH: int = 16
TAG_POSITION: int = SALT_LENGTH + NONCE_LENGTH
CIPHERTEXT_POSITION: int = TAG_POSITION + TAG_LENGTH

KEY_LENGTH: int = 32
DEFAULT_KDF_ITERATIONS: int = 100_000
USER_KEY_SALT_PREFIX: str = "user:"

NAMESPACE_LENGTH: int = 16
PUBLIC_ID_BYTES: int = 16

METADATA_PREFIX: str = "."
METADATA_SUFFIX: str = ".meta.json"
TEMP_SUFFIX: str = ".tmp"

PUBLIC_URL_PREFIX: str = "/public/"
