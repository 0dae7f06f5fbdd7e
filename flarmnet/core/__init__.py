"""Core value types and errors shared by every codec.

WHY: Both file formats describe the same registry. Keeping the model and
the error hierarchy in one place means a record decoded from one format
can be handed straight to the other format's encoder.

HOW: models.py defines the immutable Record/File types plus the decode
result containers, errors.py defines the exception hierarchy, and
hexnum.py holds the hexadecimal numeral parser both codecs validate ids
and versions with.

RULES:
- Model types are frozen; codecs build them wholesale
- Nothing in core knows about a specific wire format
"""
