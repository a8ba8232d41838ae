"""
wikimasters.cache

Key-value cache access (Redis).
"""
