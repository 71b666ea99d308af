"""Core module - shared, ERP-neutral infrastructure.

Holds the pieces every connector relies on (structured logging today).
ERP-specific logic belongs in /connectors/.
"""

__version__ = "1.0.0"
