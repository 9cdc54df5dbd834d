"""Controller classes used by discovery, extraction and CLI tests."""
