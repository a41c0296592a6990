"""
Infrastructure adapters: logging, task harness, bundler adapters.
"""
