"""
Copyright (c) 2020, the Decred developers
See LICENSE for details
"""

import random

import pytest

from cashnode import nets
from cashnode.consensus import forks
from cashnode.consensus.checkpoints import CheckpointResult
from cashnode.consensus.forks import ChainPosition, ForkTracker, UnknownFork


MAX_MTP = 0xFFFFFFFF


def test_height_gated_monotonic():
    random.seed(0)
    for netType in nets.listTypes():
        netParams = nets.get(netType)
        for fork in netParams.block.forks:
            if not fork.heightGated:
                continue
            h = fork.height
            heights = [h, h + 1] + [random.randint(h, h + 1000000) for _ in range(20)]
            for height in heights:
                # Median time has no say when a height is recorded.
                assert forks.isActive(fork.name, ChainPosition(height, 0), netParams)
            if h == 0:
                continue
            heights = [h - 1, 0] + [random.randint(0, h - 1) for _ in range(20)]
            for height in heights:
                pos = ChainPosition(height, MAX_MTP)
                assert not forks.isActive(fork.name, pos, netParams), (netType, fork)


def test_time_gated():
    main = nets.get("main")
    asert = main.block.fork("asert")
    assert not asert.heightGated
    t = asert.activationTime
    assert t == 1605441600
    assert not forks.isActive("asert", ChainPosition(10 ** 7, t - 1), main)
    assert forks.isActive("asert", ChainPosition(0, t), main)
    assert forks.isActive("asert", ChainPosition(0, t + 1), main)

    simnet = nets.get("simnet")
    assert not forks.isActive("greatWall", ChainPosition(5, 1557921599), simnet)
    assert forks.isActive("greatWall", ChainPosition(5, 1557921600), simnet)

    # Everything time-gated on regtest is on from the start.
    regtest = nets.get("regtest")
    assert forks.isActive("phonon", ChainPosition(0, 0), regtest)


def test_regtest_bip34():
    regtest = nets.get("regtest")
    assert not forks.isActive("bip34", ChainPosition(99999999, MAX_MTP), regtest)
    assert forks.isActive("bip34", ChainPosition(100000000, 0), regtest)
    assert forks.isActive("uahf", ChainPosition(0, 0), regtest)


def test_unknown_fork():
    simnet = nets.get("simnet")
    assert not forks.isDefined("graviton", simnet)
    assert forks.isDefined("graviton", nets.get("main"))
    with pytest.raises(UnknownFork):
        forks.isActive("graviton", ChainPosition(0, 0), simnet)
    with pytest.raises(UnknownFork):
        forks.isActive("gravitron", ChainPosition(0, 0), nets.get("main"))


def test_activeForks():
    main = nets.get("main")
    pos = ChainPosition(582680, 1557921600)
    assert forks.activeForks(pos, main) == [
        "bip34",
        "bip65",
        "bip66",
        "uahf",
        "daa",
        "magneticAnomaly",
        "greatWall",
    ]
    assert forks.activeForks(ChainPosition(0, 0), main) == []
    # bip66 activated before bip65 even though the table lists bip65 first.
    assert main.block.fork("bip66").height < main.block.fork("bip65").height
    between = ChainPosition(main.block.fork("bip66").height, 0)
    assert forks.activeForks(between, main) == ["bip34", "bip66"]
    everything = [f.name for f in main.block.forks]
    assert forks.activeForks(ChainPosition(10 ** 7, MAX_MTP), main) == everything


def test_verifyPin():
    main = nets.get("main")
    uahf = main.block.fork("uahf")
    assert forks.verifyPin("uahf", 478558, uahf.hash, main) == CheckpointResult.MATCH
    assert forks.verifyPin("uahf", 478558, bytes(32), main) == CheckpointResult.MISMATCH
    assert (
        forks.verifyPin("uahf", 478559, bytes(32), main)
        == CheckpointResult.NO_CHECKPOINT
    )
    # No hash recorded.
    assert forks.verifyPin("asert", 0, bytes(32), main) == CheckpointResult.NO_CHECKPOINT
    regtest = nets.get("regtest")
    assert forks.verifyPin("uahf", 0, bytes(32), regtest) == CheckpointResult.NO_CHECKPOINT

    # simnet pins its early forks to genesis.
    simnet = nets.get("simnet")
    assert (
        forks.verifyPin("bip34", 0, simnet.genesis.hash, simnet)
        == CheckpointResult.MATCH
    )


def test_ForkTracker():
    tracker = ForkTracker(nets.get("testnet"))
    pos = ChainPosition(1155875, 0)
    assert tracker.isDefined("uahf")
    assert not tracker.isDefined("axion")
    assert tracker.isActive("uahf", pos)
    assert not tracker.isActive("daa", pos)
    assert "uahf" in tracker.activeForks(pos)
    fork = tracker.netParams.block.fork("uahf")
    assert tracker.verifyPin("uahf", fork.height, fork.hash) == CheckpointResult.MATCH

    # No hidden state between calls.
    results = {tracker.isActive("daa", ChainPosition(1188697, 0)) for _ in range(10)}
    assert results == {True}


def test_ChainPosition():
    a = ChainPosition(1, 2)
    assert a == ChainPosition(1, 2)
    assert a != ChainPosition(2, 2)
    assert a != (1, 2)
    assert hash(a) == hash(ChainPosition(1, 2))
    assert repr(a) == "ChainPosition(height=1, medianTimePast=2)"
