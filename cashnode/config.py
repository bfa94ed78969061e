"""
Copyright (c) 2020, The Decred developers
See LICENSE for details

Configuration settings. Chooses the network a process runs on and how it
logs.
"""

import argparse
import os

from appdirs import AppDirs

from cashnode import nets
from cashnode.util import helpers


# Set the data directory in a OS-appropriate location.
_ad = AppDirs("cashnode", False)
DATA_DIR = _ad.user_data_dir

# The master configuration file name.
CONFIG_NAME = "cashnode.conf"
CONFIG_PATH = os.path.join(DATA_DIR, CONFIG_NAME)

CONFIG_KEYS = ("network", "loglevel", "logfile")

log = helpers.getLogger("CONFIG")


class NodeConfig:
    """
    NodeConfig holds the settings for one process. netParams is the network
    handle to pass to everything that needs consensus parameters.
    """

    def __init__(self, netName=None, args=None, path=CONFIG_PATH):
        """
        Args:
            netName (str): Network name, overriding everything else.
            args (list(str)): Command-line arguments. Unknown arguments are
                ignored.
            path (str): The INI configuration file. A missing file is fine.
        """
        self.file = {}
        if path and os.path.isfile(path):
            self.file = helpers.readINI(path, CONFIG_KEYS)
        parser = argparse.ArgumentParser()
        netGroup = parser.add_mutually_exclusive_group()
        netGroup.add_argument("--testnet", action="store_true", help="use testnet")
        netGroup.add_argument("--regtest", action="store_true", help="use regtest")
        netGroup.add_argument("--simnet", action="store_true", help="use simnet")
        parsed, unknown = parser.parse_known_args(args if args is not None else [])
        if unknown:
            log.warning(f"ignoring unknown arguments: {unknown!r}")

        if netName is None:
            if parsed.testnet:
                netName = nets.testnet.Name
            elif parsed.regtest:
                netName = nets.regtest.Name
            elif parsed.simnet:
                netName = nets.simnet.Name
            else:
                netName = self.file.get("network", nets.mainnet.Name)
        self.netParams = nets.parse(netName)

        self.logLevel = helpers.parseLogLevel(self.file.get("loglevel", "info"))
        self.logFile = self.file.get("logfile")

    def get(self, k):
        """
        Retrieve a setting read from the configuration file.

        Args:
            k (str): The setting key.

        Returns:
            str: The value, or None if not set.
        """
        return self.file.get(k)

    def prepareLogging(self):
        """
        Set up logging as configured.
        """
        helpers.prepareLogging(filepath=self.logFile, logLvl=self.logLevel)


def load(netName=None, args=None, path=CONFIG_PATH):
    """
    Load the configuration. Each call reads the settings again and returns a
    new NodeConfig.

    Returns:
        NodeConfig: The configuration.
    """
    cfg = NodeConfig(netName=netName, args=args, path=path)
    log.info(f"using network {cfg.netParams.type}")
    return cfg
