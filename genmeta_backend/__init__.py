"""genmeta backend: PNG generation-metadata extraction engine and its adapters."""
