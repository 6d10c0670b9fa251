"""
Core package: descriptors, errors, type rules, annotations and the safe
access layer shared by every reflector implementation.
"""
