"""Request bridge: method dispatch and handlers.

- contracts: request/response models
- accounts: read-only handlers (account data, transaction history)
- dispatcher: routes method calls and owns runtime initialization
"""

__all__ = [
    "contracts",
    "accounts",
    "dispatcher",
]
