"""
Copyright (c) 2020, The Decred developers
See LICENSE for details.

The network parameter registry. Parameters for every supported network are
loaded and validated once, at import, and are read-only from then on. A
bad parameter table makes this package fail to import.

There is no "current network" here. Select one with parse or get and pass
the NetworkParameters to whatever needs it.
"""

from cashnode import CashnodeError
from cashnode.util import helpers

from . import mainnet, regtest, simnet, testnet
from .params import NetworkParameters


log = helpers.getLogger("NETS")


class UnknownNetwork(CashnodeError):
    pass


# Network types in their canonical order.
types = (mainnet.Name, testnet.Name, regtest.Name, simnet.Name)

the_nets = {
    mod.Name: NetworkParameters.fromModule(mod)
    for mod in (mainnet, testnet, regtest, simnet)
}

aliases = {
    "mainnet": mainnet.Name,
    "testnet3": testnet.Name,
    "regnet": regtest.Name,
}


def listTypes():
    """
    The supported network types.

    Returns:
        tuple(str): main, testnet, regtest and simnet.
    """
    return types


def get(netType):
    """
    Get the network parameters for a canonical network type.

    Args:
        netType (str): One of the strings from listTypes.

    Returns:
        NetworkParameters: The network's parameters.

    Raises:
        UnknownNetwork: netType is not a supported network.
    """
    try:
        return the_nets[netType]
    except (KeyError, TypeError):
        raise UnknownNetwork(f"unrecognized network type {netType!r}")


def normalizeName(netName):
    """
    Map a network name alias to its canonical type. Unknown names are returned
    unchanged.

    Args:
        netName (str): The raw network name.

    Returns:
        str: The canonical network type.
    """
    return aliases.get(netName, netName)


def parse(name):
    """
    Get the network parameters based on the network name. Aliases such as
    mainnet and testnet3 are accepted.
    """
    return get(normalizeName(name))


def byMagic(magic):
    """
    Find the network whose peers use the packet magic number.

    Args:
        magic (int): The uint32 magic number.

    Returns:
        NetworkParameters: The network's parameters.

    Raises:
        UnknownNetwork: No network uses the magic number.
    """
    for netParams in the_nets.values():
        if netParams.magic == magic:
            return netParams
    raise UnknownNetwork(f"no network with magic {magic:#010x}")


log.debug(f"network registry ready: {', '.join(types)}")
