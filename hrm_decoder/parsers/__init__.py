"""Format variants of the SRD exercise file, one module per device family."""
