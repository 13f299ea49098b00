"""
Components package - pure, deterministic computation.

Components take in-memory data and return results. They never touch the
database; services and workflows fetch data and pass it in.
"""
