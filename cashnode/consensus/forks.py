"""
Copyright (c) 2020, The Decred developers
See LICENSE for details

Hard fork activation. Each fork switches on at a fixed height or
median-time-past and stays on. There is no signaling and no way back.
"""

from cashnode import CashnodeError

from . import checkpoints


class UnknownFork(CashnodeError):
    pass


class ChainPosition:
    """
    Where a block sits in the chain, as supplied by the chain index.
    """

    def __init__(self, height, medianTimePast):
        """
        Args:
            height (int): The block height.
            medianTimePast (int): Median timestamp of the preceding blocks.
        """
        self.height = height
        self.medianTimePast = medianTimePast

    def __eq__(self, other):
        try:
            return (
                self.height == other.height
                and self.medianTimePast == other.medianTimePast
            )
        except AttributeError:
            return False

    def __hash__(self):
        return hash((self.height, self.medianTimePast))

    def __repr__(self):
        return f"ChainPosition(height={self.height}, medianTimePast={self.medianTimePast})"


def lookup(forkName, netParams):
    fork = netParams.block.fork(forkName)
    if fork is None:
        raise UnknownFork(f"{netParams.type} has no fork named {forkName!r}")
    return fork


def isDefined(forkName, netParams):
    """
    Whether the network defines the fork at all. Networks define different
    subsets of the historical upgrades.
    """
    return netParams.block.fork(forkName) is not None


def isActive(forkName, position, netParams):
    """
    Whether a fork's rules apply to a block.

    Args:
        forkName (str): The fork, e.g. "uahf".
        position (ChainPosition): The block's height and median-time-past.
        netParams (NetworkParameters): The network.

    Returns:
        bool: True if the fork is active.

    Raises:
        UnknownFork: The network does not define the fork. Check isDefined
            first if that is an expected case.
    """
    return lookup(forkName, netParams).isActive(position)


def activeForks(position, netParams):
    """
    The names of all forks active at position, in table order.
    """
    return [f.name for f in netParams.block.forks if f.isActive(position)]


def verifyPin(forkName, height, blockHash, netParams):
    """
    Check a block against the recorded activation block of a fork. Forks
    recorded without a hash never pin anything.

    Returns:
        str: A checkpoints.CheckpointResult verdict.
    """
    fork = lookup(forkName, netParams)
    if fork.hash is None or fork.height is None:
        return checkpoints.CheckpointResult.NO_CHECKPOINT
    return checkpoints.verifyPinned({fork.height: fork.hash}, height, blockHash)


class ForkTracker:
    """
    Hard fork queries bound to a single network. Nothing is cached; callers
    that query the same block repeatedly should cache on their side.
    """

    def __init__(self, netParams):
        self.netParams = netParams

    def isDefined(self, forkName):
        return isDefined(forkName, self.netParams)

    def isActive(self, forkName, position):
        return isActive(forkName, position, self.netParams)

    def activeForks(self, position):
        return activeForks(position, self.netParams)

    def verifyPin(self, forkName, height, blockHash):
        return verifyPin(forkName, height, blockHash, self.netParams)
