"""
Structured codec: token readers/writers, value encoding and the reflector
driven object codec.
"""
