"""
Copyright (c) 2020, The Decred developers
See LICENSE for details
"""


class CashnodeError(Exception):
    pass
