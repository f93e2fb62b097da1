# common utilities used by more than one module in the project

import re
import sys
import logging

import numpy as np

from hashlens.common.errors import MalformedEncodingError

HEX_RE = re.compile(r"[0-9a-fA-F]*")

def assert_hex(value: str) -> str:
    """Returns value unchanged if it only contains hexadecimal digits.

    Arguments:
    value   -- string to check
    """
    if not isinstance(value, str) or not HEX_RE.fullmatch(value):
        raise MalformedEncodingError(value)
    return value

def hex_to_bytes(value: str) -> bytes:
    """Decodes a hex string of even length into raw bytes.
    bytes.fromhex() tolerates whitespace, so the alphabet is checked first.

    Arguments:
    value   -- hex string to decode
    """
    assert_hex(value)
    if len(value) % 2 != 0:
        raise MalformedEncodingError(value)
    return bytes.fromhex(value)

def hex_to_nibbles(value: str) -> np.ndarray:
    """Returns one uint8 per hex character (0-15), keeping odd lengths."""
    assert_hex(value)
    return np.array([int(ch, 16) for ch in value], dtype=np.uint8)

def popcount(values: np.ndarray) -> int:
    """Number of set bits in an array of uint8 values."""
    return int(np.unpackbits(values.astype(np.uint8)).sum())

# https://stackoverflow.com/questions/54366106/configure-formatting-for-root-logger
def configure_logging(loglevel, logger=None):
    """
    Configures a simple console logger with the given level.
    A usecase is to change the formatting of the default handler of the root logger

    Arguments:
    loglevel    -- log level to set
    logger      -- specific logger to configure. If None, it will configure root logger
    """
    formatter = logging.Formatter('%(levelname)s:%(name)s: %(message)s')
    logger = logger or logging.getLogger()  # either the given logger or the root logger
    logger.setLevel(loglevel)
    # If the logger has handlers, we configure the first one. Otherwise we add a handler and configure it
    if logger.handlers:
        console = logger.handlers[0]
    else:
        console = logging.StreamHandler(sys.stderr)
        logger.addHandler(console)

    console.setFormatter(formatter)
    console.setLevel(loglevel)
