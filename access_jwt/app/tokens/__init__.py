"""
Token encoding, decoding and verification.
"""
