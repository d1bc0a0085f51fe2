"""
Segment codecs: base64url framing and the JSON adapter contract.
"""
