"""Protocol constants shared across the package."""

# Chain that coordinates the FCT to EC conversion rate amongst factomd nodes.
FER_CHAIN_ID = "111111118d918a8be684e0dac725493a75862ef96d2d3f43f84b26969329bf03"

# Entry Credit public address prefix; encodes to strings starting with "EC".
EC_PUBLIC_PREFIX = bytes([0x59, 0x2A])

ADDRESS_PAYLOAD_SIZE = 32
CHECKSUM_SIZE = 4

ED25519_SEED_SIZE = 32
ED25519_PRIVATE_KEY_SIZE = 64

# Implied price = PRICE_REFERENCE_NUMERATOR / target_price.
# TODO: confirm the reference unit of this numerator against factomd's FER handling.
PRICE_REFERENCE_NUMERATOR = 100000.0

ENTRY_HEADER_SIZE = 35
ENTRY_MAX_BODY_SIZE = 10240
ENTRY_CREDIT_UNIT = 1024

DEFAULT_NODE_URL = "localhost:8088/v2"
DEFAULT_CONFIG_FILENAME = "FactomFER.conf"
