"""
Copyright (c) 2020, The Decred developers
See LICENSE for details

simnet holds parameters for the btcd-style simulation network.
"""

from .params import DeploymentSpec as Deployment, ForkActivation as Fork


Name = "simnet"
DNSSeeds = ["127.0.0.1"]
Magic = 0xF2FAEDE4
DefaultPort = 18555
RPCPort = 18556
WalletPort = 18558

Checkpoints = []

SubsidyReductionInterval = 210000

GenesisHash = "f67ad7695d9b662a72ff3d8edbbb2de0bfa67b13974bb9910d116d5cbd863e68"

Genesis = dict(
    version=1,
    hash=GenesisHash,
    merkleRoot="3ba3edfd7a7b12b27ac72c3e67768f617fc81bc3888a51323a9fb8aa4b1e5e4a",
    time=1401292357,
    bits=0x207FFFFF,
    nonce=2,
    block=(
        "0100000000000000000000000000000000000000000000000000000000000000000000"
        "003ba3edfd7a7b12b27ac72c3e67768f617fc81bc3888a51323a9fb8aa4b1e5e4a4506"
        "8653ffff7f200200000001010000000100000000000000000000000000000000000000"
        "00000000000000000000000000ffffffff4d04ffff001d0104455468652054696d6573"
        "2030332f4a616e2f32303039204368616e63656c6c6f72206f6e206272696e6b206f66"
        "207365636f6e64206261696c6f757420666f722062616e6b73ffffffff0100f2052a01"
        "000000434104678afdb0fe5548271967f1a67130b7105cd6a828e03909a67962e0ea1f"
        "61deb649f6bc3f4cef38c4f35504e51ec112de5c384df7ba0b8d578a4c702b6bf11d5f"
        "ac00000000"
    ),
)

# POW parameters
PowLimit = 0x7FFFFF << 232  # the target 0x207fffff stands for
PowLimitBits = 0x207FFFFF
MinimumChainwork = 2
HalfLife = 60 * 60 * 24 * 2
TargetTimespan = 60 * 60 * 24 * 14
TargetSpacing = 60 * 10
RetargetInterval = 2016
TargetReset = True
NoRetargeting = False

Forks = [
    Fork("bip34", height=0, hash=GenesisHash),
    Fork("bip65", height=0, hash=GenesisHash),
    Fork("bip66", height=0, hash=GenesisHash),
    Fork("uahf", height=0),
    Fork("daa", height=0),
    Fork("magneticAnomaly", activationTime=1542300000),
    Fork("greatWall", activationTime=1557921600),
]

PruneAfterHeight = 1000
KeepBlocks = 10000
MaxTipAge = 0xFFFFFFFF
SlowHeight = 0

BIP30 = {}

RuleChangeActivationThreshold = 75  # 75% for testchains
MinerConfirmationWindow = 100

Deployments = [
    Deployment("csv", bit=0, startTime=0, timeout=0xFFFFFFFF, force=True),
    Deployment(
        "testdummy",
        bit=28,
        startTime=1199145601,  # January 1, 2008
        timeout=1230767999,  # December 31, 2008
        force=True,
    ),
]

# Key encoding magics
PrivateKeyID = 0x64
HDPublicKeyID = 0x0420BD3A
HDPrivateKeyID = 0x0420B900
HDPublicKeyPrefix = "spub"
HDPrivateKeyPrefix = "sprv"
HDCoinType = 115

# Address encoding magics
PubKeyHashAddrID = 0x3F
ScriptHashAddrID = 0x7B
CashAddrPrefix = "xecsim"

RequireStandard = False
MinRelayFee = 1000
FeeRate = 20000
MaxFeeRate = 60000
SelfConnect = False
RequestMempool = False
