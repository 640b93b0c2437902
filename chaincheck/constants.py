from eth_typing import (
    BlockNumber,
)

#
# Hashes
#
HASH_SIZE = 32
HASH_HEX_LENGTH = HASH_SIZE * 2


#
# Heights
#
UINT_64_MAX = 2**64 - 1
GENESIS_BLOCK_NUMBER = BlockNumber(0)


#
# Sources
#
CHECKPOINT_FILENAME = "checkpoints.json"
CHECKPOINT_FILE_COLLECTION_KEY = "hashlines"

DNS_TIMEOUT_SECONDS = 20.0
DNS_RECORD_SEPARATOR = ":"
