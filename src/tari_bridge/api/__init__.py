"""HTTP surface: inbound JSON-RPC, approvals and health."""
