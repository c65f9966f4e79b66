"""Application composition layer for the Pokédex client.

Controllers in this package wire view models, adapters, and stores into
runnable screens without placing loading logic in the presentation layer.
"""
