"""
Reflector implementations and the per-type descriptor caches behind them.

Architecture:
- DynamicReflector discovers metadata through introspection, once per type
- GeneratedReflector dispatches through tables fixed per class
- Both share the same validation rules from reflector.core.validations
"""
