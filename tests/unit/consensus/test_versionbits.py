"""
Copyright (c) 2020, the Decred developers
See LICENSE for details
"""

import threading
from types import SimpleNamespace

import pytest

from cashnode import CashnodeError, nets
from cashnode.consensus import versionbits
from cashnode.consensus.forks import ChainPosition
from cashnode.consensus.versionbits import (
    StateCache,
    StateResult,
    ThresholdState as S,
    UnknownDeployment,
    VersionbitsEngine,
)
from cashnode.nets.params import DeploymentSpec


NO_SIGNAL = 0x20000000


def syntheticNet():
    dep = DeploymentSpec("dummy", bit=1, startTime=100, timeout=1000)
    return SimpleNamespace(
        type="synthetic",
        deployments={dep.name: dep},
        deploys=(dep,),
        activationThreshold=8,
        minerWindow=10,
    )


def window(signaling, size=10, bit=1):
    signal = NO_SIGNAL | (1 << bit)
    return [signal] * signaling + [NO_SIGNAL] * (size - signaling)


def test_signals():
    assert versionbits.signals(0x20000001, 0)
    assert not versionbits.signals(0x20000001, 1)
    assert versionbits.signals(0x30000000, 28)
    # Not a versionbits version.
    assert not versionbits.signals(0x00000001, 0)
    assert not versionbits.signals(0x40000001, 0)
    assert not versionbits.signals(0x60000001, 0)
    assert not versionbits.signals(0xE0000001, 0)


def test_activation_path():
    net = syntheticNet()

    r = versionbits.stateAt("dummy", ChainPosition(10, 50), window(10), net)
    assert r.state == S.DEFINED
    assert r.resolvedThreshold == 8
    assert r.resolvedWindow == 10
    assert not r.active

    # Signaling before the start is ignored.
    r = versionbits.stateAt("dummy", ChainPosition(20, 100), window(10), net, r)
    assert r.state == S.STARTED

    r = versionbits.stateAt("dummy", ChainPosition(30, 200), window(7), net, r)
    assert r.state == S.STARTED

    r = versionbits.stateAt("dummy", ChainPosition(40, 300), window(8), net, r)
    assert r.state == S.LOCKED_IN
    assert not r.active

    r = versionbits.stateAt("dummy", ChainPosition(50, 400), window(0), net, r)
    assert r.state == S.ACTIVE
    assert r.active

    # Final, even past the timeout.
    r = versionbits.stateAt("dummy", ChainPosition(60, 5000), window(0), net, r)
    assert r.state == S.ACTIVE


def test_timeout():
    net = syntheticNet()
    started = StateResult(S.STARTED, 8, 10)
    r = versionbits.stateAt("dummy", ChainPosition(30, 1000), window(10), net, started)
    assert r.state == S.FAILED
    r = versionbits.stateAt("dummy", ChainPosition(40, 400), window(10), net, r)
    assert r.state == S.FAILED

    # Straight from DEFINED when the start was never seen.
    r = versionbits.stateAt("dummy", ChainPosition(10, 1000), window(0), net)
    assert r.state == S.FAILED

    # Lock-in still activates after the timeout.
    lockedIn = StateResult(S.LOCKED_IN, 8, 10)
    r = versionbits.stateAt("dummy", ChainPosition(40, 2000), window(0), net, lockedIn)
    assert r.state == S.ACTIVE


def test_between_boundaries():
    net = syntheticNet()
    started = StateResult(S.STARTED, 8, 10)
    # Off-boundary heights keep the previous state and do not read the window.
    r = versionbits.stateAt("dummy", ChainPosition(35, 5000), [], net, started)
    assert r.state == S.STARTED
    r = versionbits.stateAt("dummy", ChainPosition(35, 5000), [], net)
    assert r.state == S.DEFINED

    # Genesis is always DEFINED.
    r = versionbits.stateAt("dummy", ChainPosition(0, 5000), [], net, started)
    assert r.state == S.DEFINED


def test_bad_window():
    net = syntheticNet()
    with pytest.raises(CashnodeError):
        versionbits.stateAt("dummy", ChainPosition(10, 50), window(5, size=9), net)
    with pytest.raises(UnknownDeployment):
        versionbits.stateAt("segwit", ChainPosition(10, 50), window(5), net)


def test_replay():
    net = syntheticNet()
    periods = [
        (ChainPosition(10, 50), window(10)),
        (ChainPosition(20, 150), window(10)),
        (ChainPosition(30, 250), window(9)),
        (ChainPosition(40, 350), window(0)),
    ]
    states = [r.state for r in versionbits.replay("dummy", periods, net)]
    assert states == [S.DEFINED, S.STARTED, S.LOCKED_IN, S.ACTIVE]

    # Resuming from a cached state gives the same answer as starting over.
    results = list(versionbits.replay("dummy", periods[:2], net))
    resumed = list(versionbits.replay("dummy", periods[2:], net, results[-1]))
    assert [r.state for r in resumed] == states[2:]


def test_idempotent():
    net = syntheticNet()
    started = StateResult(S.STARTED, 8, 10)
    args = ("dummy", ChainPosition(30, 200), window(8), net, started)
    first = versionbits.stateAt(*args)
    for _ in range(10):
        assert versionbits.stateAt(*args) == first
    assert started.state == S.STARTED


def test_network_defaults():
    regtest = nets.get("regtest")
    r = versionbits.stateAt("csv", ChainPosition(1, 0), [], regtest)
    assert r.resolvedThreshold == 108
    assert r.resolvedWindow == 144
    # Forced deployments are active whatever their nominal state.
    assert r.state == S.DEFINED
    assert r.force
    assert r.active

    custom = DeploymentSpec("custom", bit=3, startTime=0, timeout=1, threshold=5, window=7)
    net = syntheticNet()
    net.deployments = {"custom": custom}
    r = versionbits.stateAt("custom", ChainPosition(7, 0), window(5, size=7), net)
    assert (r.resolvedThreshold, r.resolvedWindow) == (5, 7)


def test_computeBlockVersion():
    main = nets.get("main")
    assert versionbits.computeBlockVersion({}, main) == 0x20000000
    states = {
        "csv": StateResult(S.STARTED, 1916, 2016),
        "testdummy": S.LOCKED_IN,
    }
    assert versionbits.computeBlockVersion(states, main) == 0x30000001
    states = {"csv": S.ACTIVE, "testdummy": S.FAILED}
    assert versionbits.computeBlockVersion(states, main) == 0x20000000


def test_byBit():
    main = nets.get("main")
    assert versionbits.byBit(0, main).name == "csv"
    assert versionbits.byBit(28, main).name == "testdummy"
    assert versionbits.byBit(5, main) is None


def test_StateCache():
    cache = StateCache()
    h = bytes(range(32))
    assert cache.get("csv", h) is None
    first = StateResult(S.STARTED, 8, 10)
    assert cache.put("csv", h, first) is first
    assert cache.put("csv", h, StateResult(S.FAILED, 8, 10)) is first
    assert cache.get("csv", bytearray(h)) is first
    assert cache.get("testdummy", h) is None
    assert len(cache) == 1


def test_StateCache_concurrent():
    cache = StateCache()
    h = bytes(32)
    candidates = [StateResult(S.STARTED, 8, i) for i in range(16)]
    barrier = threading.Barrier(len(candidates))
    returned = []

    def put(result):
        barrier.wait()
        returned.append(cache.put("csv", h, result))

    threads = [threading.Thread(target=put, args=(c,)) for c in candidates]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(returned) == len(candidates)
    stored = cache.get("csv", h)
    assert any(stored is c for c in candidates)
    assert all(r is stored for r in returned)
    assert len(cache) == 1


def test_VersionbitsEngine():
    engine = VersionbitsEngine(nets.get("simnet"))
    csv = engine.deployment("csv")
    assert csv.bit == 0
    assert engine.deployment("segwit") is None
    r = engine.stateAt("csv", ChainPosition(100, 1), window(0, size=100, bit=0))
    assert r.state == S.STARTED
    assert (r.resolvedThreshold, r.resolvedWindow) == (75, 100)
    assert engine.byBit(28).name == "testdummy"
    assert engine.computeBlockVersion({"csv": r}) == 0x20000001

    # Signaling on another bit does not count toward csv.
    r2 = engine.stateAt("csv", ChainPosition(200, 2), window(100, size=100), r)
    assert r2.state == S.STARTED

    r2 = engine.stateAt("csv", ChainPosition(200, 2), window(74, size=100, bit=0), r)
    assert r2.state == S.STARTED

    periods = [
        (ChainPosition(100, 1), window(0, size=100, bit=0)),
        (ChainPosition(200, 2), window(75, size=100, bit=0)),
        (ChainPosition(300, 3), window(0, size=100, bit=0)),
    ]
    states = [r.state for r in engine.replay("csv", periods)]
    assert states == [S.STARTED, S.LOCKED_IN, S.ACTIVE]
