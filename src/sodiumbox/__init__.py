"""Static-keypair NaCl box sealing for text messages."""

__version__ = "0.1.0"
