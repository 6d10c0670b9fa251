"""
Protocols and type aliases describing reflectors and token streams.
"""
