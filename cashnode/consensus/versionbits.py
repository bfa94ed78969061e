"""
Copyright (c) 2020, The Decred developers
See LICENSE for details

BIP 9 versionbits. Miners signal support for a soft fork by setting its bit
in the block version. A deployment's state only changes at window boundaries,
heights that are a multiple of the window size, based on the median-time-past
at the boundary and the signaling in the window that just ended.

    DEFINED -> STARTED -> LOCKED_IN -> ACTIVE
       |          |
       +----------+-----> FAILED

The state at any boundary depends on every boundary before it, so results
are computed by stepping forward from a known earlier state, or from
DEFINED at genesis.
"""

import threading

from cashnode import CashnodeError
from cashnode.util import helpers


log = helpers.getLogger("VERSIONBITS")

# A version field is a versionbits version when its top 3 bits are 001.
VERSIONBITS_TOP_MASK = 0xE0000000
VERSIONBITS_TOP_BITS = 0x20000000


class UnknownDeployment(CashnodeError):
    pass


class ThresholdState:
    DEFINED = "defined"
    STARTED = "started"
    LOCKED_IN = "lockedin"
    ACTIVE = "active"
    FAILED = "failed"


class StateResult:
    """
    A deployment's state at a chain position, with the threshold and window
    used to reach it.
    """

    def __init__(self, state, resolvedThreshold, resolvedWindow, force=False):
        self.state = state
        self.resolvedThreshold = resolvedThreshold
        self.resolvedWindow = resolvedWindow
        self.force = force

    @property
    def active(self):
        """
        Whether dependent rules should be enforced. Forced deployments are
        active whatever their nominal state.
        """
        return self.force or self.state == ThresholdState.ACTIVE

    def __eq__(self, other):
        try:
            return (
                self.state == other.state
                and self.resolvedThreshold == other.resolvedThreshold
                and self.resolvedWindow == other.resolvedWindow
                and self.force == other.force
            )
        except AttributeError:
            return False

    def __repr__(self):
        return (
            f"StateResult({self.state!r}, threshold={self.resolvedThreshold}, "
            f"window={self.resolvedWindow}, force={self.force})"
        )


def signals(version, bit):
    """
    Whether a block version signals for the bit.

    Args:
        version (int): The uint32 block version.
        bit (int): The deployment bit.

    Returns:
        bool: True if the version is a versionbits version with bit set.
    """
    if version & VERSIONBITS_TOP_MASK != VERSIONBITS_TOP_BITS:
        return False
    return (version >> bit) & 1 == 1


def countSignals(versions, bit):
    return sum(1 for v in versions if signals(v, bit))


def lookup(name, netParams):
    try:
        return netParams.deployments[name]
    except KeyError:
        raise UnknownDeployment(f"{netParams.type} has no deployment named {name!r}")


def resolve(deployment, netParams):
    """
    The deployment's threshold and window, with the network defaults in place
    of -1.

    Returns:
        tuple(int, int): threshold, window.
    """
    threshold = deployment.threshold
    if threshold == -1:
        threshold = netParams.activationThreshold
    window = deployment.window
    if window == -1:
        window = netParams.minerWindow
    return threshold, window


def nextState(state, deployment, medianTimePast, signalCount, threshold):
    """
    The transition made at a window boundary.

    Args:
        state (str): The state before the boundary.
        deployment (DeploymentSpec): The deployment.
        medianTimePast (int): Median-time-past at the boundary.
        signalCount (int): Signaling blocks in the window just ended.
        threshold (int): The resolved threshold.

    Returns:
        str: The state after the boundary.
    """
    if state == ThresholdState.DEFINED:
        if medianTimePast >= deployment.timeout:
            return ThresholdState.FAILED
        if medianTimePast >= deployment.startTime:
            return ThresholdState.STARTED
        return ThresholdState.DEFINED

    if state == ThresholdState.STARTED:
        # Timeout wins over signaling.
        if medianTimePast >= deployment.timeout:
            return ThresholdState.FAILED
        if signalCount >= threshold:
            return ThresholdState.LOCKED_IN
        return ThresholdState.STARTED

    if state == ThresholdState.LOCKED_IN:
        return ThresholdState.ACTIVE

    # ACTIVE and FAILED are final.
    return state


def stateAt(name, position, ancestorWindow, netParams, previous=None):
    """
    Compute a deployment's state at a chain position.

    Args:
        name (str): The deployment name.
        position (ChainPosition): The block's height and median-time-past.
        ancestorWindow (iterable(int)): Version fields of the window of
            blocks preceding position. Only read at window boundaries, where
            it must hold exactly one window of versions.
        netParams (NetworkParameters): The network.
        previous (StateResult): The state at the previous boundary, usually
            from the caller's cache. None means DEFINED.

    Returns:
        StateResult: The state at position.

    Raises:
        UnknownDeployment: The network has no such deployment.
    """
    deployment = lookup(name, netParams)
    threshold, window = resolve(deployment, netParams)
    prior = previous.state if previous is not None else ThresholdState.DEFINED

    if position.height == 0:
        state = ThresholdState.DEFINED
    elif position.height % window != 0:
        state = prior
    else:
        versions = list(ancestorWindow)
        if len(versions) != window:
            raise CashnodeError(
                f"{name}: expected a window of {window} versions, got {len(versions)}"
            )
        state = nextState(
            prior,
            deployment,
            position.medianTimePast,
            countSignals(versions, deployment.bit),
            threshold,
        )
        if state != prior:
            log.debug(
                f"{netParams.type} {name}: {prior} -> {state} at height {position.height}"
            )

    return StateResult(state, threshold, window, deployment.force)


def replay(name, periods, netParams, previous=None):
    """
    Step a deployment through a run of window boundaries, e.g. to recompute
    states after a reorg from the last state still on the chain.

    Args:
        name (str): The deployment name.
        periods (iterable(tuple(ChainPosition, iterable(int)))): Each boundary
            position with the versions of the window preceding it.
        netParams (NetworkParameters): The network.
        previous (StateResult): The starting state. None means DEFINED.

    Yields:
        StateResult: The state at each boundary.
    """
    for position, ancestorWindow in periods:
        previous = stateAt(name, position, ancestorWindow, netParams, previous)
        yield previous


def byBit(bit, netParams):
    """
    The first deployment in table order that uses the bit, or None.
    """
    for deployment in netParams.deploys:
        if deployment.bit == bit:
            return deployment
    return None


def computeBlockVersion(states, netParams):
    """
    The version a miner should use for a new block. Deployments that are
    STARTED or LOCKED_IN get their bit set.

    Args:
        states (Mapping[str, StateResult or str]): Deployment states for the
            new block, keyed by name. Missing deployments are not signaled.
        netParams (NetworkParameters): The network.

    Returns:
        int: The block version.
    """
    version = VERSIONBITS_TOP_BITS
    for deployment in netParams.deploys:
        st = states.get(deployment.name)
        state = st.state if isinstance(st, StateResult) else st
        if state in (ThresholdState.STARTED, ThresholdState.LOCKED_IN):
            version |= deployment.mask
    return version


class StateCache:
    """
    Computed states keyed by deployment name and block hash. Keying by hash
    keeps entries valid across reorgs. The first value stored for a key wins,
    which is safe because recomputation always yields the same value.
    """

    def __init__(self):
        self.states = {}
        self.mtx = threading.Lock()

    def get(self, name, blockHash):
        return self.states.get((name, bytes(blockHash)))

    def put(self, name, blockHash, result):
        """
        Store the result unless the key is already present.

        Returns:
            StateResult: The value now cached for the key.
        """
        with self.mtx:
            return self.states.setdefault((name, bytes(blockHash)), result)

    def __len__(self):
        return len(self.states)


class VersionbitsEngine:
    """
    Versionbits queries bound to a single network.
    """

    def __init__(self, netParams):
        self.netParams = netParams

    def deployment(self, name):
        """
        The named deployment, or None if the network does not define it.
        """
        return self.netParams.deployments.get(name)

    def stateAt(self, name, position, ancestorWindow, previous=None):
        return stateAt(name, position, ancestorWindow, self.netParams, previous)

    def replay(self, name, periods, previous=None):
        return replay(name, periods, self.netParams, previous)

    def byBit(self, bit):
        return byBit(bit, self.netParams)

    def computeBlockVersion(self, states):
        return computeBlockVersion(states, self.netParams)
