DEFAULT_PATH = "logcask.db"
LOCK_SUFFIX = ".lock"

# crc32, then timestamp, key size, value size, key type, value type
CRC_FORMAT = "<L"
CRC_SIZE = 4
HEADER_FORMAT = "<LLLHH"
HEADER_SIZE = 16
RECORD_OVERHEAD = CRC_SIZE + HEADER_SIZE

INTEGER_FORMAT = "<q"
FLOAT_FORMAT = "<d"
