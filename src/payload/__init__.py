"""History payload decoders.

This module interprets stored payload strings for specific history types.
It turns target records and antenna lists into typed values for the SDK.
"""
