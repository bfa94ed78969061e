"""
Copyright (c) 2020, The Decred developers
See LICENSE for details

regtest holds regression test network parameters. Blocks are trivially easy
to mine and every upgrade is active from the start, except BIP 34 and the
few heights used by regression tests.
"""

from .params import DeploymentSpec as Deployment, ForkActivation as Fork


Name = "regtest"
DNSSeeds = ["127.0.0.1"]
Magic = 0xFABFB5DA
DefaultPort = 48444
RPCPort = 48332
WalletPort = 48334

Checkpoints = []

SubsidyReductionInterval = 150

Genesis = dict(
    version=1,
    hash="06226e46111a0b59caaf126043eb5bbf28c34f3a5e332a1fc7b2b73cf188910f",
    merkleRoot="3ba3edfd7a7b12b27ac72c3e67768f617fc81bc3888a51323a9fb8aa4b1e5e4a",
    time=1296688602,
    bits=0x207FFFFF,
    nonce=2,
    block=(
        "0100000000000000000000000000000000000000000000000000000000000000000000"
        "003ba3edfd7a7b12b27ac72c3e67768f617fc81bc3888a51323a9fb8aa4b1e5e4adae5"
        "494dffff7f200200000001010000000100000000000000000000000000000000000000"
        "00000000000000000000000000ffffffff4d04ffff001d0104455468652054696d6573"
        "2030332f4a616e2f32303039204368616e63656c6c6f72206f6e206272696e6b206f66"
        "207365636f6e64206261696c6f757420666f722062616e6b73ffffffff0100f2052a01"
        "000000434104678afdb0fe5548271967f1a67130b7105cd6a828e03909a67962e0ea1f"
        "61deb649f6bc3f4cef38c4f35504e51ec112de5c384df7ba0b8d578a4c702b6bf11d5f"
        "ac00000000"
    ),
)

# POW parameters
PowLimit = 2 ** 255 - 1
PowLimitBits = 0x207FFFFF
MinimumChainwork = 2
HalfLife = 60 * 60 * 24 * 2
TargetTimespan = 60 * 60 * 24 * 14
TargetSpacing = 60 * 10
RetargetInterval = 2016
TargetReset = True
NoRetargeting = True

Forks = [
    Fork("bip34", height=100000000),  # Not active, permit ver 1 blocks
    Fork("bip65", height=1351),  # Used by regression tests
    Fork("bip66", height=1251),  # Used by regression tests
    Fork("uahf", height=0),
    Fork("daa", height=0),
    Fork("magneticAnomaly", height=0),
    Fork("greatWall", height=0),
    Fork("graviton", height=0),
    Fork("phonon", activationTime=0),
    Fork("asert", activationTime=0),
]

PruneAfterHeight = 1000
KeepBlocks = 10000
MaxTipAge = 0xFFFFFFFF
SlowHeight = 0

BIP30 = {}

RuleChangeActivationThreshold = 108  # 75% for testchains
MinerConfirmationWindow = 144  # Faster than normal for regtest

Deployments = [
    Deployment("csv", bit=0, startTime=0, timeout=0xFFFFFFFF, force=True),
    Deployment("testdummy", bit=28, startTime=0, timeout=0xFFFFFFFF, force=True),
]

# Key encoding magics
PrivateKeyID = 0x5A
HDPublicKeyID = 0xEAB4FA05
HDPrivateKeyID = 0xEAB404C7
HDPublicKeyPrefix = "rpub"
HDPrivateKeyPrefix = "rprv"
HDCoinType = 1

# Address encoding magics
PubKeyHashAddrID = 0x3C
ScriptHashAddrID = 0x26
CashAddrPrefix = "xecreg"

RequireStandard = False
MinRelayFee = 1000
FeeRate = 20000
MaxFeeRate = 60000
SelfConnect = True
RequestMempool = True
