"""History store access layer.

This module reads timestamped history records from Redis.
It powers label indexing, nearest-record resolution, and the SDK.
"""
