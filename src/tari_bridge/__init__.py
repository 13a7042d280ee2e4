"""Tari wallet request bridge.

Receives wallet method calls from web origins, gates state-changing
operations behind user confirmation, delegates signing to an external
provider and relays everything through the Tari indexer.
"""

__version__ = "0.1.0"
