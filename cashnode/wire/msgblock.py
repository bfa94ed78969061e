"""
Copyright (c) 2020, The Decred developers
See LICENSE for details

Based on the bitcoin block header.
"""

import hashlib
import struct

from cashnode import CashnodeError


# chainhash.HashSize
HASH_SIZE = 32

MaxHeaderSize = 80

# version, prevBlock, merkleRoot, timestamp, bits, nonce
_headerFormat = struct.Struct("<i32s32sIII")


def doubleHashH(b: bytes) -> bytes:
    """
    Double-SHA256 hash.
    """
    v = hashlib.sha256(b).digest()
    return hashlib.sha256(v).digest()


class BlockHeader:
    """
    BlockHeader defines information about a block and is used in the block
    and headers messages. Hashes are held in internal byte order, the reverse
    of how block explorers display them.
    """

    def __init__(
        self,
        version: int = 1,
        prevBlock: bytes = bytes(HASH_SIZE),
        merkleRoot: bytes = bytes(HASH_SIZE),
        timestamp: int = 0,
        bits: int = 0,
        nonce: int = 0,
    ):
        # version of the block.  This is not the same as the protocol version.
        self.version = version  # int32

        # hash of the previous block in the block chain.
        self.prevBlock = prevBlock  # [32]byte

        # merkle tree reference to hash of all transactions for the block.
        self.merkleRoot = merkleRoot  # [32]byte

        # time the block was created, encoded as a uint32 on the wire.
        self.timestamp = timestamp  # uint32

        # difficulty target for the block, in compact form.
        self.bits = bits  # uint32

        # nonce used to generate the block.
        self.nonce = nonce  # uint32

    @staticmethod
    def deserialize(b: bytes) -> "BlockHeader":
        """
        Decode the header from the first 80 bytes of b. Any trailing bytes,
        such as the transactions of a full block, are ignored.

        Args:
            b: the bytes to decode.
        """
        if len(b) < MaxHeaderSize:
            raise CashnodeError(
                f"block header: expected {MaxHeaderSize} bytes, got {len(b)}"
            )
        version, prevBlock, merkleRoot, timestamp, bits, nonce = _headerFormat.unpack(
            bytes(b[:MaxHeaderSize])
        )
        return BlockHeader(
            version=version,
            prevBlock=prevBlock,
            merkleRoot=merkleRoot,
            timestamp=timestamp,
            bits=bits,
            nonce=nonce,
        )

    def serialize(self) -> bytes:
        """
        Serialize the BlockHeader.

        Returns:
            bytes: The 80-byte wire encoding.
        """
        for name in ("prevBlock", "merkleRoot"):
            h = getattr(self, name)
            if len(h) != HASH_SIZE:
                raise CashnodeError(f"block header: {name} must be {HASH_SIZE} bytes")
        return _headerFormat.pack(
            self.version,
            bytes(self.prevBlock),
            bytes(self.merkleRoot),
            self.timestamp,
            self.bits,
            self.nonce,
        )

    def hash(self) -> bytes:
        """
        hash computes the block identifier hash for the given block header.
        """
        return doubleHashH(self.serialize())

    def id(self) -> str:
        """The block hash as hex in display byte order."""
        return self.hash()[::-1].hex()
