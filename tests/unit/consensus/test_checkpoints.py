"""
Copyright (c) 2020, the Decred developers
See LICENSE for details
"""

import random

import pytest

from cashnode import nets
from cashnode.consensus import checkpoints
from cashnode.consensus.checkpoints import (
    CheckpointMismatch,
    CheckpointResult,
    CheckpointVerifier,
)


TESTNET_546 = bytes.fromhex(
    "70cb6af7ebbcb1315d3414029c556c55f3e2fc353c4c9063a76c932a00000000"
)


def test_verify(randBytes):
    testnet = nets.get("testnet")
    assert checkpoints.verify(546, TESTNET_546, testnet) == CheckpointResult.MATCH
    assert checkpoints.verify(547, TESTNET_546, testnet) == CheckpointResult.NO_CHECKPOINT

    random.seed(0)
    for _ in range(50):
        h = randBytes(32, 32)
        if h == TESTNET_546:
            continue
        assert checkpoints.verify(546, h, testnet) == CheckpointResult.MISMATCH

    # Checkpoints are per network.
    main = nets.get("main")
    assert checkpoints.verify(546, TESTNET_546, main) == CheckpointResult.NO_CHECKPOINT


def test_every_checkpoint_matches():
    for netType in nets.listTypes():
        netParams = nets.get(netType)
        for height, h in netParams.checkpointMap.items():
            assert checkpoints.verify(height, h, netParams) == CheckpointResult.MATCH


def test_isCheckpointed():
    main = nets.get("main")
    assert main.lastCheckpoint == 766195
    assert checkpoints.isCheckpointed(0, main)
    assert checkpoints.isCheckpointed(766195, main)
    assert not checkpoints.isCheckpointed(766196, main)

    testnet = nets.get("testnet")
    assert testnet.lastCheckpoint == 1378461

    # Only genesis is below the line on networks without checkpoints.
    regtest = nets.get("regtest")
    assert regtest.lastCheckpoint == 0
    assert checkpoints.isCheckpointed(0, regtest)
    assert not checkpoints.isCheckpointed(1, regtest)


def test_bip30():
    main = nets.get("main")
    h = main.bip30[91842]
    assert checkpoints.isBip30Exception(91842, h, main)
    assert not checkpoints.isBip30Exception(91880, h, main)
    assert not checkpoints.isBip30Exception(91842, bytes(32), main)
    assert not checkpoints.isBip30Exception(91842, h, nets.get("testnet"))


def test_CheckpointVerifier(prepareLogger):
    verifier = CheckpointVerifier(nets.get("testnet"))
    assert verifier.verify(546, TESTNET_546) == CheckpointResult.MATCH
    assert verifier.isCheckpointed(546)
    assert not verifier.isBip30Exception(546, TESTNET_546)

    assert verifier.enforce(546, TESTNET_546) == CheckpointResult.MATCH
    assert verifier.enforce(547, bytes(32)) == CheckpointResult.NO_CHECKPOINT
    with pytest.raises(CheckpointMismatch):
        verifier.enforce(546, bytes(32))
