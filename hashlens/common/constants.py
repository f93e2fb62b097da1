NIBBLE_BITS     = 4
BYTE_BITS       = 8
SIGNATURE_WIDTH = 8         # hex chars per MinHash element (uint32)

# Nilsimsa digests are 256 bits; compare() ranges in [-128, 128]
NILSIMSA_BITS       = 256
NILSIMSA_MAX        = 128
NILSIMSA_DIGEST_HEX = NILSIMSA_BITS // NIBBLE_BITS

# similarity label thresholds (strictly greater than)
HIGH_SIMILARITY     = 0.7
MODERATE_SIMILARITY = 0.4

LABEL_HIGH     = "high"
LABEL_MODERATE = "moderate"
LABEL_LOW      = "low"

RELATED_LIMIT     = 6
RANDOM_VALUE_SIZE = 32      # bytes of randomness for generate_random params

LOGLEVELS = ("debug", "info", "warning", "error", "critical")

SETTINGS_FILE = "settings.yaml"
CATALOG_FILE  = "catalog.yaml"
