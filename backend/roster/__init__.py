"""Team roster core: in-memory store, request routing, and session multicast."""
