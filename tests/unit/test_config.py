"""
Copyright (c) 2020, the Decred developers
See LICENSE for details
"""

import pytest

from cashnode import CashnodeError, config, nets


@pytest.fixture
def confPath(tmp_path):
    def write(text):
        path = tmp_path / config.CONFIG_NAME
        path.write_text(text)
        return str(path)

    return write


def test_defaults(tmp_path):
    cfg = config.load(path=str(tmp_path / "missing.conf"))
    assert cfg.netParams is nets.get("main")
    assert cfg.logFile is None
    assert cfg.get("network") is None


def test_args(tmp_path):
    path = str(tmp_path / "missing.conf")
    assert config.load(args=["--testnet"], path=path).netParams.type == "testnet"
    assert config.load(args=["--regtest"], path=path).netParams.type == "regtest"
    assert config.load(args=["--simnet", "--foo"], path=path).netParams.type == "simnet"
    with pytest.raises(SystemExit):
        config.load(args=["--testnet", "--simnet"], path=path)


def test_file(confPath):
    path = confPath("network = testnet3\nloglevel = debug\n")
    cfg = config.load(path=path)
    assert cfg.netParams is nets.get("testnet")
    assert cfg.logLevel == 10
    assert cfg.get("network") == "testnet3"


def test_precedence(confPath):
    path = confPath("network = testnet\n")
    assert config.load(args=["--regtest"], path=path).netParams.type == "regtest"
    cfg = config.load(netName="simnet", args=["--regtest"], path=path)
    assert cfg.netParams.type == "simnet"
    # Each load is independent.
    assert config.load(path=path).netParams.type == "testnet"


def test_invalid(confPath):
    with pytest.raises(nets.UnknownNetwork):
        config.load(path=confPath("network = nonet\n"))
    with pytest.raises(CashnodeError):
        config.load(path=confPath("loglevel = loud\n"))
