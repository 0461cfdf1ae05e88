"""Binary codecs.

This module holds the pure byte-level encoders and decoders for
typed values and for the keyed records stored in save files.
"""
