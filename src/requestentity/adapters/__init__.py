"""Adapters binding the decoding core to pydantic and httpx."""
