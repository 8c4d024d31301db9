"""Genesis encoding, node inputs and client adapters."""
