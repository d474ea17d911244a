"""Mint status and order-parameter helpers for the NFT indexer."""
