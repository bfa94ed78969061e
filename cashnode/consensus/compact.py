"""
Copyright (c) 2020, The Decred developers
See LICENSE for details

Conversion between the 32-bit compact difficulty encoding found in block
headers and the 256-bit target it stands for.

The compact form is a base-256 float: the high byte is the exponent, i.e. the
byte length of the target, and the low 23 bits are the mantissa. Bit 23 is a
sign bit. A negative target is never valid here.
"""

from cashnode import CashnodeError


SIGN_BIT = 0x00800000
MANTISSA_MASK = 0x007FFFFF

# Targets and chainwork are unsigned 256-bit integers.
MAX_TARGET_BITS = 256


class InvalidCompactTarget(CashnodeError):
    pass


def decode(compact: int) -> int:
    """
    Decode a compact target.

    Args:
        compact (int): The uint32 value from a header's bits field.

    Returns:
        int: The target.

    Raises:
        InvalidCompactTarget: The sign bit is set or the target does not fit
            in 256 bits.
    """
    if compact < 0 or compact > 0xFFFFFFFF:
        raise InvalidCompactTarget(f"compact value {compact} is not a uint32")
    if compact & SIGN_BIT:
        raise InvalidCompactTarget(f"negative compact target {compact:#010x}")

    exponent = compact >> 24
    mantissa = compact & MANTISSA_MASK

    if exponent <= 3:
        target = mantissa >> (8 * (3 - exponent))
    else:
        target = mantissa << (8 * (exponent - 3))

    if target.bit_length() > MAX_TARGET_BITS:
        raise InvalidCompactTarget(f"compact target {compact:#010x} overflows")

    return target


def encode(target: int) -> int:
    """
    Encode a target in its minimal compact form. Precision beyond the three
    most significant bytes is lost.

    Args:
        target (int): The target.

    Returns:
        int: The compact uint32.
    """
    if target < 0:
        raise InvalidCompactTarget("cannot encode a negative target")
    if target.bit_length() > MAX_TARGET_BITS:
        raise InvalidCompactTarget("target does not fit in 256 bits")
    if target == 0:
        return 0

    exponent = (target.bit_length() + 7) // 8
    if exponent <= 3:
        mantissa = target << (8 * (3 - exponent))
    else:
        mantissa = target >> (8 * (exponent - 3))

    # The high mantissa bit would read as a sign, so shift it into the
    # exponent instead.
    if mantissa & SIGN_BIT:
        mantissa >>= 8
        exponent += 1

    return (exponent << 24) | mantissa


def getWork(bits: int) -> int:
    """
    The expected number of hashes needed to find a block at the target, i.e.
    what a block adds to its chain's cumulative chainwork.

    Args:
        bits (int): The compact target.

    Returns:
        int: 2^256 / (target + 1), or 0 for a zero target.
    """
    target = decode(bits)
    if target == 0:
        return 0
    return (1 << 256) // (target + 1)


def checkProofOfWork(blockHash: bytes, bits: int, powLimit: int) -> bool:
    """
    Check that a block hash satisfies its claimed target, and that the target
    itself is within the network's proof-of-work limit.

    Args:
        blockHash (bytes): The block hash, internal byte order.
        bits (int): The compact target from the block's header.
        powLimit (int): The network's easiest allowed target.

    Returns:
        bool: True if the proof-of-work is sufficient.
    """
    try:
        target = decode(bits)
    except InvalidCompactTarget:
        return False
    if target == 0 or target > powLimit:
        return False
    return int.from_bytes(blockHash, "little") <= target
