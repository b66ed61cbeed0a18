# lexsign_core/constants.py

# field carrying the base64 signature inside a record
SIGNATURE_FIELD = "signature"

# multibase prefix for base58btc
MULTIBASE_BASE58BTC = "z"
DID_KEY_PREFIX = "did:key:"

# multicodec codes (varint-encoded in front of raw key bytes)
P256_PUB_CODEC = 0x1200
P256_PRIV_CODEC = 0x1306
K256_PUB_CODEC = 0xE7
K256_PRIV_CODEC = 0x1301

# group orders, used for low-S normalisation
P256_ORDER = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551
K256_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

SCALAR_LEN = 32
COMPRESSED_POINT_LEN = 33
COMPACT_SIG_LEN = 64

KEYPAIR_FILENAME = "keypair.json"

DEFAULT_KEYS_DIR = "keys"
DEFAULT_KEY_TYPE = "p256"
DEFAULT_LOG_LEVEL = "INFO"
SUPPORTED_KEY_TYPES = ("p256", "k256")
