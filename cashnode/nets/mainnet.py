"""
Copyright (c) 2020, The Decred developers
See LICENSE for details

mainnet holds mainnet parameters. All hashes are hex in internal byte order,
i.e. reversed relative to block explorers.
"""

from .params import DeploymentSpec as Deployment, ForkActivation as Fork


Name = "main"
DNSSeeds = [
    "seed.flowee.cash",
    "seed-bch.bitcoinforks.org",
    "btccash-seeder.bitcoinunlimited.info",
    "seed.bchd.cash",
    "seed.bch.loping.net",
    "dnsseed.electroncash.de",
]
Magic = 0xE8F3E1E3
DefaultPort = 8333
RPCPort = 8332
WalletPort = 8334

# Checkpoints ordered from oldest to newest.
Checkpoints = [
    (11111, "1d7c6eb2fd42f55925e92efad68b61edd22fba29fde8783df744e26900000000"),
    (33333, "a6d0b5df7d0df069ceb1e736a216ad187a50b07aaa4e78748a58d52d00000000"),
    (74000, "201a66b853f9e7814a820e2af5f5dc79c07144e31ce4c9a39339570000000000"),
    (105000, "97dc6b1d15fbeef373a744fee0b254b0d2c820a3ae7f0228ce91020000000000"),
    (134444, "feb0d2420d4a18914c81ac30f494a5d4ff34cd15d34cfd2fb105000000000000"),
    (168000, "63b703835cb735cb9a89d733cbe66f212f63795e0172ea619e09000000000000"),
    (193000, "17138bca83bdc3e6f60f01177c3877a98266de40735f2a459f05000000000000"),
    (210000, "2e3471a19b8e22b7f939c63663076603cf692f19837e34958b04000000000000"),
    (216116, "4edf231bf170234e6a811460f95c94af9464e41ee833b4f4b401000000000000"),
    (225430, "32595730b165f097e7b806a679cf7f3e439040f750433808c101000000000000"),
    (250000, "14d2f24d29bed75354f3f88a5fb50022fc064b02291fdf873800000000000000"),
    (279000, "407ebde958e44190fa9e810ea1fc3a7ef601c3b0a0728cae0100000000000000"),
    (295000, "83a93246c67003105af33ae0b29dd66f689d0f0ff54e9b4d0000000000000000"),
    (300255, "b2f3a0f0de4120c1089d5f5280a263059f9b6e7c520428160000000000000000"),
    (319400, "3bf115fd057391587ca39a531c5d4989e1adec9b2e05c6210000000000000000"),
    (343185, "548536d48e7678fcfa034202dd45d4a76b1ad061f38b2b070000000000000000"),
    (352940, "ffc9520143e41c94b6e03c2fa3e62bb76b55ba2df45d75100000000000000000"),
    (382320, "b28afdde92b0899715e40362f56afdb20e3d135bedc68d0a0000000000000000"),
    (401465, "eed16cb3e893ed9366f27c39a9ecd95465d02e3ef40e45010000000000000000"),
    (420000, "a1ff746b2d42b834cb7d6b8981b09c265c2cabc016e8cc020000000000000000"),
    (440000, "9bf296b8de5f834f7635d5e258a434ad51b4dbbcf7c08c030000000000000000"),
    (450000, "0ba2070c62cd9da1f8cef88a0648c661a411d33e728340010000000000000000"),
    (460000, "8c25fc7e414d3e868d6ce0ec473c30ad44e7e8bc1b75ef000000000000000000"),
    (470000, "89756d1ed75901437300af10d5ab69070a282e729c536c000000000000000000"),
    # UAHF fork block
    (478559, "ec5e1a193601f25ff1d94b421ddead0dbefcb99cf91e65000000000000000000"),
    (480000, "f93408ffca92d88a6e46d3b90046f97bde6be0c08e7ed40c0000000000000000"),
    (490000, "d1c65d766c6dc270b8ff4f1edb052fb71dc2b4750ede8a010000000000000000"),
    (500000, "01b2328355f4a4dc9efa5c610687304507b7df9f3f4de1050000000000000000"),
    # DAA fork block
    (504031, "9cabb6ee1b1a4c3b659d70be75810be83d0a0db665bf1e010000000000000000"),
    (510000, "040e6b1f2f4cb198a5780d366bf81e591de257642b9267030000000000000000"),
    (525000, "c994fba2bf168333fd969bcfa64f03ca1b62074f9a8f1b010000000000000000"),
    # Monolith
    (530359, "0391c40195cf8ae3436f3955f1a8444f07468fd08bda1a010000000000000000"),
    # Magnetic Anomaly
    (556767, "6cd5e644acccee5743ce2e93c541d34169933b6eff2646000000000000000000"),
    # Great Wall
    (582680, "18cc7d8c39ca16dc749acb7278a471964f7dec6ae3b8b4010000000000000000"),
    # Graviton
    (609136, "b1c55b4f69aa2e3209c91ae413c355c65aacfa07b28bb4000000000000000000"),
    # Phonon
    (635259, "f73075b2c598f49b3a19558c070b52d5a5d6c21fefdf33000000000000000000"),
    # Axion
    (661648, "7d7510f907bdc9bd2907e56beceaef31f78f2c8b9d4c28040000000000000000"),
    (664198, "60824622a1d2b689fbb234ce2c5939ff92e8ed8c57902f0c0000000000000000"),
    (680140, "0b7c2ff6c3658cb3f846aa092145c44a1d45638b56482c230000000000000000"),
    # Tachyon
    (686621, "45b7e5be980bd6e98a22f895fcdc80546d9f0a57f7e68f3c0000000000000000"),
    # Selectron
    (713661, "8defaaea383ab73c75ceea3f08190f3ab5ccc70743f876060000000000000000"),
    # Gluon
    (739536, "617bfc596bce59b129242fe67b5afe0509560946cd04db060000000000000000"),
    # Jefferson
    (766195, "94e0246db72955957dedb431eb1096de9a5b715348c92b100000000000000000"),
]

SubsidyReductionInterval = 210000

Genesis = dict(
    version=1,
    hash="6fe28c0ab6f1b372c1a6a246ae63f74f931e8365e15a089c68d6190000000000",
    merkleRoot="3ba3edfd7a7b12b27ac72c3e67768f617fc81bc3888a51323a9fb8aa4b1e5e4a",
    time=1231006505,
    bits=0x1D00FFFF,
    nonce=2083236893,
    block=(
        "0100000000000000000000000000000000000000000000000000000000000000000000"
        "003ba3edfd7a7b12b27ac72c3e67768f617fc81bc3888a51323a9fb8aa4b1e5e4a29ab"
        "5f49ffff001d1dac2b7c01010000000100000000000000000000000000000000000000"
        "00000000000000000000000000ffffffff4d04ffff001d0104455468652054696d6573"
        "2030332f4a616e2f32303039204368616e63656c6c6f72206f6e206272696e6b206f66"
        "207365636f6e64206261696c6f757420666f722062616e6b73ffffffff0100f2052a01"
        "000000434104678afdb0fe5548271967f1a67130b7105cd6a828e03909a67962e0ea1f"
        "61deb649f6bc3f4cef38c4f35504e51ec112de5c384df7ba0b8d578a4c702b6bf11d5f"
        "ac00000000"
    ),
)

# POW parameters
PowLimit = 2 ** 224 - 1
PowLimitBits = 0x1D00FFFF
MinimumChainwork = 0x13C95E14D4D9DB91D671020
HalfLife = 60 * 60 * 24 * 2  # 2 days, for ASERT
TargetTimespan = 60 * 60 * 24 * 14  # 14 days
TargetSpacing = 60 * 10  # 10 minutes
RetargetInterval = 2016
TargetReset = False
NoRetargeting = False

# Hard forks in table order.
Forks = [
    Fork(
        "bip34",
        height=227931,
        hash="b808089c756add1591b1d17bab44bba3fed9e02f942ab4894b02000000000000",
    ),
    Fork(
        "bip65",
        height=388381,
        hash="f035476cfaeb9f677c2cdad00fd908c556775ded24b6c2040000000000000000",
    ),
    Fork(
        "bip66",
        height=363725,
        hash="3109b588941188a9f1c2576aae462d729b8cce9da1ea79030000000000000000",
    ),
    Fork(
        "uahf",
        height=478558,
        hash="432d350741fbf28f2e1486eabe2c4e143bfe2241af6518010000000000000000",
    ),
    # November 13, 2017
    Fork(
        "daa",
        height=504031,
        hash="9cabb6ee1b1a4c3b659d70be75810be83d0a0db665bf1e010000000000000000",
    ),
    # November 15, 2018
    Fork(
        "magneticAnomaly",
        height=556767,
        hash="6cd5e644acccee5743ce2e93c541d34169933b6eff2646000000000000000000",
    ),
    # May 15, 2019
    Fork(
        "greatWall",
        height=582680,
        hash="18cc7d8c39ca16dc749acb7278a471964f7dec6ae3b8b4010000000000000000",
    ),
    Fork(
        "graviton",
        height=609136,
        hash="b1c55b4f69aa2e3209c91ae413c355c65aacfa07b28bb4000000000000000000",
        activationTime=1573819200,  # Nov 15, 2019 12:00:00 UTC
    ),
    Fork(
        "phonon",
        height=635259,
        hash="f73075b2c598f49b3a19558c070b52d5a5d6c21fefdf33000000000000000000",
        activationTime=1589544000,  # May 15, 2020 12:00:00 UTC
    ),
    Fork("asert", activationTime=1605441600),  # Nov 15, 2020 12:00:00 UTC
    Fork(
        "axion",
        height=661648,
        hash="7d7510f907bdc9bd2907e56beceaef31f78f2c8b9d4c28040000000000000000",
        activationTime=1605441600,
    ),
    Fork(
        "tachyon",
        height=686621,
        hash="45b7e5be980bd6e98a22f895fcdc80546d9f0a57f7e68f3c0000000000000000",
        activationTime=1621080000,  # May 15, 2021 12:00:00 UTC
    ),
    Fork(
        "selectron",
        height=713661,
        hash="8defaaea383ab73c75ceea3f08190f3ab5ccc70743f876060000000000000000",
        activationTime=1636977600,  # Nov 15, 2021 12:00:00 UTC
    ),
    Fork(
        "gluon",
        height=739536,
        hash="617bfc596bce59b129242fe67b5afe0509560946cd04db060000000000000000",
        activationTime=1652572800,  # May 15, 2022 12:00:00 UTC
    ),
    Fork(
        "jefferson",
        height=766195,
        hash="94e0246db72955957dedb431eb1096de9a5b715348c92b100000000000000000",
        activationTime=1668470400,  # Nov 15, 2022 12:00:00 UTC
    ),
    Fork("wellington", activationTime=1684108800),  # May 15, 2023 12:00:00 UTC
]

PruneAfterHeight = 1000
KeepBlocks = 288
MaxTipAge = 24 * 60 * 60
SlowHeight = 325000

# Historical blocks with duplicate transaction hashes, see BIP 30.
BIP30 = {
    91842: "eccae000e3c8e4e093936360431f3b7603c563c1ff6181390a4d0a0000000000",
    91880: "21d77ccb4c08386a04ac0196ae10f6a1d2c2a377558ca190f143070000000000",
}

# Consensus rule change deployments.
#
# The miner confirmation window is defined as:
#   target proof of work timespan / target proof of work spacing
RuleChangeActivationThreshold = 1916  # 95% of MinerConfirmationWindow
MinerConfirmationWindow = 2016

Deployments = [
    Deployment(
        "csv",
        bit=0,
        startTime=1462060800,  # May 1st, 2016
        timeout=1493596800,  # May 1st, 2017
        force=True,
    ),
    Deployment(
        "testdummy",
        bit=28,
        startTime=1199145601,  # January 1, 2008
        timeout=1230767999,  # December 31, 2008
        force=True,
    ),
]

# Key encoding magics
PrivateKeyID = 0x80
HDPublicKeyID = 0x0488B21E
HDPrivateKeyID = 0x0488ADE4
HDPublicKeyPrefix = "xpub"
HDPrivateKeyPrefix = "xprv"
HDCoinType = 0

# Address encoding magics
PubKeyHashAddrID = 0x00  # starts with 1
ScriptHashAddrID = 0x05  # starts with 3
CashAddrPrefix = "ecash"

# Mempool and relay policy
RequireStandard = True
MinRelayFee = 1000
FeeRate = 100000
MaxFeeRate = 400000
SelfConnect = False
RequestMempool = False
