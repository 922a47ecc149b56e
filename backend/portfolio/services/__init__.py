"""Services — RPC dispatch, page definitions and the streaming render pipeline."""
