"""
Signing algorithms.

Only the symmetric HMAC family is implemented. RS256 is recognised as a
name so that tokens announcing it fail loudly instead of being verified
with the wrong primitive.
"""
