"""
Copyright (c) 2020, The Decred developers
See LICENSE for details

Record types for a network's consensus parameters. A NetworkParameters is
built once per network from one of the constant modules in this package and
is never modified afterwards, so it can be shared between threads freely.
"""

from types import MappingProxyType

import base58

from cashnode import CashnodeError
from cashnode.util import helpers
from cashnode.wire import msgblock


log = helpers.getLogger("NETS")

# Versionbits can use the 29 bits below the top-bits marker.
MAX_VERSION_BIT = 28

# Extended key payload after the 4 version bytes: depth, parent fingerprint,
# child number, chain code, key.
_EXTENDED_KEY_PAYLOAD = 1 + 4 + 4 + 32 + 33


class ImmutableRecordError(CashnodeError):
    pass


class GenesisMismatch(CashnodeError):
    pass


class DeploymentConfigConflict(CashnodeError):
    pass


def toHash(h):
    """
    Decode a 32-byte hash given as hex in internal byte order.

    Args:
        h (str, bytes or None): The hash.

    Returns:
        bytes or None: The hash bytes, or None if h is None.
    """
    if h is None:
        return None
    b = bytes.fromhex(h) if isinstance(h, str) else bytes(h)
    if len(b) != msgblock.HASH_SIZE:
        raise CashnodeError(f"expected a {msgblock.HASH_SIZE}-byte hash, got {len(b)}")
    return b


class Record:
    """
    Base for the parameter records. Attributes can be assigned only until
    freeze is called, which every record does at the end of its constructor.
    """

    _frozen = False

    def __setattr__(self, name, value):
        if self._frozen:
            raise ImmutableRecordError(f"{type(self).__name__}.{name} is read-only")
        object.__setattr__(self, name, value)

    def __delattr__(self, name):
        raise ImmutableRecordError(f"{type(self).__name__}.{name} is read-only")

    def freeze(self):
        object.__setattr__(self, "_frozen", True)
        return self


class Genesis(Record):
    """
    The genesis block header fields along with the fully serialized genesis
    block.
    """

    def __init__(
        self, version, hash, merkleRoot, time, bits, nonce, block, prevBlock=None
    ):
        self.version = version
        self.hash = toHash(hash)
        self.prevBlock = toHash(prevBlock) or bytes(msgblock.HASH_SIZE)
        self.merkleRoot = toHash(merkleRoot)
        self.time = time
        self.bits = bits
        self.nonce = nonce
        self.height = 0
        self.block = bytes.fromhex(block) if isinstance(block, str) else bytes(block)
        self.freeze()

    def header(self):
        """
        The genesis block header.

        Returns:
            msgblock.BlockHeader: A new header built from the recorded fields.
        """
        return msgblock.BlockHeader(
            version=self.version,
            prevBlock=self.prevBlock,
            merkleRoot=self.merkleRoot,
            timestamp=self.time,
            bits=self.bits,
            nonce=self.nonce,
        )

    def verify(self):
        """
        Check that the header fields hash to the recorded hash and that the
        serialized block starts with that same header.

        Raises:
            GenesisMismatch: Either check failed.
        """
        if self.prevBlock != bytes(msgblock.HASH_SIZE):
            raise GenesisMismatch("genesis previous block hash is not zero")
        header = self.header()
        if header.hash() != self.hash:
            raise GenesisMismatch(
                f"genesis header hashes to {header.id()}, expected {self.hash[::-1].hex()}"
            )
        if self.block[: msgblock.MaxHeaderSize] != header.serialize():
            raise GenesisMismatch("serialized genesis block does not match header")


class PowParams(Record):
    """
    Proof-of-work policy.
    """

    def __init__(
        self,
        limit,
        bits,
        chainwork,
        halfLife,
        targetTimespan,
        targetSpacing,
        retargetInterval,
        targetReset,
        noRetargeting,
    ):
        """
        Args:
            limit (int): The easiest allowed target.
            bits (int): limit in compact form.
            chainwork (int): Minimum chainwork for the best chain.
            halfLife (int): ASERT difficulty half life, in seconds.
            targetTimespan (int): Desired retarget period, in seconds.
            targetSpacing (int): Desired block spacing, in seconds.
            retargetInterval (int): Blocks between retargets.
            targetReset (bool): Allow min-difficulty blocks when no block has
                been mined recently.
            noRetargeting (bool): Disable retargeting.
        """
        self.limit = limit
        self.bits = bits
        self.chainwork = chainwork
        self.halfLife = halfLife
        self.targetTimespan = targetTimespan
        self.targetSpacing = targetSpacing
        self.retargetInterval = retargetInterval
        self.targetReset = targetReset
        self.noRetargeting = noRetargeting
        self.freeze()


class ForkActivation(Record):
    """
    An irreversible protocol upgrade, activated by height or by
    median-time-past. When both are recorded the height governs and the time
    is the upgrade's scheduled time, kept for diagnostics.
    """

    def __init__(self, name, height=None, hash=None, activationTime=None):
        if height is None and activationTime is None:
            raise CashnodeError(f"fork {name} has neither a height nor a time")
        self.name = name
        self.height = height
        self.hash = toHash(hash)
        self.activationTime = activationTime
        self.freeze()

    @property
    def heightGated(self):
        return self.height is not None

    def isActive(self, position):
        """
        Whether the fork's rules apply at a chain position.

        Args:
            position (ChainPosition): Anything with height and medianTimePast.

        Returns:
            bool: True if active.
        """
        if self.height is not None:
            return position.height >= self.height
        return position.medianTimePast >= self.activationTime

    def __repr__(self):
        if self.height is not None:
            return f"ForkActivation({self.name!r}, height={self.height})"
        return f"ForkActivation({self.name!r}, activationTime={self.activationTime})"


class BlockParams(Record):
    """
    The historical protocol upgrades, in table order, plus a few
    operational knobs.
    """

    def __init__(self, forks, pruneAfterHeight, keepBlocks, maxTipAge, slowHeight):
        forks = tuple(forks)
        byName = {}
        for fork in forks:
            if fork.name in byName:
                raise CashnodeError(f"duplicate fork {fork.name}")
            byName[fork.name] = fork
        self.forks = forks
        self.byName = MappingProxyType(byName)
        # Safe height to start pruning.
        self.pruneAfterHeight = pruneAfterHeight
        # Safe number of blocks to keep.
        self.keepBlocks = keepBlocks
        # Tip age in seconds after which the chain is not considered synced.
        self.maxTipAge = maxTipAge
        # Height from which per-block logging is quiet enough.
        self.slowHeight = slowHeight
        self.freeze()

    def fork(self, name):
        """
        The named fork, or None if the network does not define it.
        """
        return self.byName.get(name)


class DeploymentSpec(Record):
    """
    A versionbits soft-fork deployment.
    """

    def __init__(
        self,
        name,
        bit,
        startTime,
        timeout,
        threshold=-1,
        window=-1,
        required=False,
        force=False,
    ):
        """
        Args:
            name (str): Unique deployment name.
            bit (int): Version bit used for signaling, 0 - 28.
            startTime (int): Median-time-past at which signaling starts.
            timeout (int): Median-time-past at which the deployment fails if
                not yet locked in.
            threshold (int): Signaling blocks needed per window, or -1 for
                the network default.
            window (int): Window size in blocks, or -1 for the network
                default.
            required (bool): Blocks must satisfy the deployment once active.
            force (bool): Treat the deployment as active regardless of
                signaling.
        """
        if not 0 <= bit <= MAX_VERSION_BIT:
            raise CashnodeError(f"deployment {name}: bit {bit} out of range")
        self.name = name
        self.bit = bit
        self.startTime = startTime
        self.timeout = timeout
        self.threshold = threshold
        self.window = window
        self.required = required
        self.force = force
        self.freeze()

    @property
    def mask(self):
        return 1 << self.bit

    def overlaps(self, other):
        """
        Whether the two deployments' [startTime, timeout) periods intersect.
        """
        return self.startTime < other.timeout and other.startTime < self.timeout


class KeyPrefix(Record):
    def __init__(self, privkey, xpubkey, xprivkey, xpubkey58, xprivkey58, coinType):
        self.privkey = privkey
        self.xpubkey = xpubkey
        self.xprivkey = xprivkey
        self.xpubkey58 = xpubkey58
        self.xprivkey58 = xprivkey58
        self.coinType = coinType
        self.freeze()


class AddressPrefix(Record):
    def __init__(self, pubkeyhash, scripthash, cashaddr):
        self.pubkeyhash = pubkeyhash
        self.scripthash = scripthash
        self.cashaddr = cashaddr
        self.freeze()


def checkDeployments(netName, deploys):
    """
    Refuse a deployment table in which two deployments with overlapping
    periods share a bit, or two deployments share a name.

    Args:
        netName (str): For error messages.
        deploys (iterable(DeploymentSpec)): The deployments, in table order.

    Raises:
        DeploymentConfigConflict: The table is ambiguous.
    """
    seen = []
    for dep in deploys:
        for prior in seen:
            if prior.name == dep.name:
                raise DeploymentConfigConflict(
                    f"{netName}: duplicate deployment {dep.name}"
                )
            if prior.bit == dep.bit and prior.overlaps(dep):
                raise DeploymentConfigConflict(
                    f"{netName}: deployments {prior.name} and {dep.name} both use bit {dep.bit}"
                )
        seen.append(dep)


def extendedKeyPrefix(version):
    """
    The leading base58 characters of an extended key with the given version
    bytes.

    Args:
        version (int): The 4 version bytes as an integer.

    Returns:
        str: The 4-character prefix, e.g. xpub.
    """
    payload = version.to_bytes(4, "big") + bytes(_EXTENDED_KEY_PAYLOAD)
    return base58.b58encode_check(payload).decode()[:4]


def keyPrefixMatches(netParams):
    """
    Whether the extended key version bytes encode to the recorded base58
    prefixes.
    """
    kp = netParams.keyPrefix
    return (
        extendedKeyPrefix(kp.xpubkey) == kp.xpubkey58
        and extendedKeyPrefix(kp.xprivkey) == kp.xprivkey58
    )


class NetworkParameters(Record):
    """
    The complete, read-only rule set of one network. Build instances with
    fromModule.
    """

    def __init__(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)
        self.freeze()

    def __repr__(self):
        return f"NetworkParameters({self.type!r})"

    @staticmethod
    def fromModule(mod):
        """
        Build and validate the parameters from a network constants module.

        Args:
            mod (module): One of mainnet, testnet, regtest or simnet.

        Returns:
            NetworkParameters: The loaded parameters.

        Raises:
            GenesisMismatch: The genesis record is inconsistent.
            DeploymentConfigConflict: The deployment table is ambiguous.
        """
        checkpoints = {}
        for height, h in mod.Checkpoints:
            if height < 0 or height in checkpoints:
                raise CashnodeError(f"{mod.Name}: bad checkpoint height {height}")
            checkpoints[height] = toHash(h)

        genesis = Genesis(**mod.Genesis)
        genesis.verify()

        deploys = tuple(mod.Deployments)
        checkDeployments(mod.Name, deploys)

        netParams = NetworkParameters(
            type=mod.Name,
            seeds=tuple(mod.DNSSeeds),
            magic=mod.Magic,
            port=mod.DefaultPort,
            rpcPort=mod.RPCPort,
            walletPort=mod.WalletPort,
            genesis=genesis,
            pow=PowParams(
                limit=mod.PowLimit,
                bits=mod.PowLimitBits,
                chainwork=mod.MinimumChainwork,
                halfLife=mod.HalfLife,
                targetTimespan=mod.TargetTimespan,
                targetSpacing=mod.TargetSpacing,
                retargetInterval=mod.RetargetInterval,
                targetReset=mod.TargetReset,
                noRetargeting=mod.NoRetargeting,
            ),
            checkpointMap=MappingProxyType(checkpoints),
            lastCheckpoint=max(checkpoints, default=0),
            halvingInterval=mod.SubsidyReductionInterval,
            block=BlockParams(
                forks=mod.Forks,
                pruneAfterHeight=mod.PruneAfterHeight,
                keepBlocks=mod.KeepBlocks,
                maxTipAge=mod.MaxTipAge,
                slowHeight=mod.SlowHeight,
            ),
            bip30=MappingProxyType({k: toHash(v) for k, v in mod.BIP30.items()}),
            activationThreshold=mod.RuleChangeActivationThreshold,
            minerWindow=mod.MinerConfirmationWindow,
            deployments=MappingProxyType({d.name: d for d in deploys}),
            deploys=deploys,
            keyPrefix=KeyPrefix(
                privkey=mod.PrivateKeyID,
                xpubkey=mod.HDPublicKeyID,
                xprivkey=mod.HDPrivateKeyID,
                xpubkey58=mod.HDPublicKeyPrefix,
                xprivkey58=mod.HDPrivateKeyPrefix,
                coinType=mod.HDCoinType,
            ),
            addressPrefix=AddressPrefix(
                pubkeyhash=mod.PubKeyHashAddrID,
                scripthash=mod.ScriptHashAddrID,
                cashaddr=mod.CashAddrPrefix,
            ),
            requireStandard=mod.RequireStandard,
            minRelay=mod.MinRelayFee,
            feeRate=mod.FeeRate,
            maxFeeRate=mod.MaxFeeRate,
            selfConnect=mod.SelfConnect,
            requestMempool=mod.RequestMempool,
        )

        if not keyPrefixMatches(netParams):
            log.warning(f"{mod.Name}: extended key versions do not match their prefixes")
        log.debug(
            f"loaded {mod.Name} with {len(checkpoints)} checkpoints, "
            f"{len(netParams.block.forks)} forks and {len(deploys)} deployments"
        )
        return netParams
