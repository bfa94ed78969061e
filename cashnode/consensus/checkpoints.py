"""
Copyright (c) 2020, The Decred developers
See LICENSE for details

Checkpoints pin known block hashes at fixed heights so that deep alternate
histories can be rejected without further work.
"""

from cashnode import CashnodeError
from cashnode.util import helpers


log = helpers.getLogger("CHECKPOINTS")


class CheckpointMismatch(CashnodeError):
    pass


class CheckpointResult:
    """
    Verdicts of a checkpoint lookup.
    """

    MATCH = "match"
    MISMATCH = "mismatch"
    NO_CHECKPOINT = "nocheckpoint"


def verifyPinned(pins, height, blockHash):
    """
    Compare a block hash against a height-to-hash mapping.

    Args:
        pins (Mapping[int, bytes]): The pinned hashes.
        height (int): The block's height.
        blockHash (bytes): The block's hash, internal byte order.

    Returns:
        str: A CheckpointResult verdict.
    """
    expected = pins.get(height)
    if expected is None:
        return CheckpointResult.NO_CHECKPOINT
    if bytes(blockHash) == expected:
        return CheckpointResult.MATCH
    return CheckpointResult.MISMATCH


def verify(height, blockHash, netParams):
    """
    Check a block against the network's checkpoint at its height.

    Args:
        height (int): The block's height.
        blockHash (bytes): The block's hash, internal byte order.
        netParams (NetworkParameters): The network.

    Returns:
        str: MATCH if the checkpoint agrees, MISMATCH if it disagrees, and
            NO_CHECKPOINT if there is no checkpoint at the height.
    """
    return verifyPinned(netParams.checkpointMap, height, blockHash)


def isCheckpointed(height, netParams):
    """
    Whether the height is at or below the last checkpoint. Such blocks are
    known-good history, so expensive historical checks can be skipped.
    """
    return height <= netParams.lastCheckpoint


def isBip30Exception(height, blockHash, netParams):
    """
    Whether the block is one of the historical blocks allowed to contain a
    duplicate transaction hash, see BIP 30.
    """
    return verifyPinned(netParams.bip30, height, blockHash) == CheckpointResult.MATCH


class CheckpointVerifier:
    """
    Checkpoint checks bound to a single network.
    """

    def __init__(self, netParams):
        self.netParams = netParams

    def verify(self, height, blockHash):
        return verify(height, blockHash, self.netParams)

    def isCheckpointed(self, height):
        return isCheckpointed(height, self.netParams)

    def isBip30Exception(self, height, blockHash):
        return isBip30Exception(height, blockHash, self.netParams)

    def enforce(self, height, blockHash):
        """
        Like verify, but a mismatch is raised. A block that fails here must be
        rejected no matter what the rest of validation says.

        Returns:
            str: MATCH or NO_CHECKPOINT.

        Raises:
            CheckpointMismatch: The block contradicts the checkpoint.
        """
        result = self.verify(height, blockHash)
        if result == CheckpointResult.MISMATCH:
            expected = self.netParams.checkpointMap[height]
            msg = (
                f"{self.netParams.type}: block {bytes(blockHash)[::-1].hex()} at height {height} "
                f"does not match checkpoint {expected[::-1].hex()}"
            )
            log.error(msg)
            raise CheckpointMismatch(msg)
        return result
