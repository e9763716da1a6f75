"""codeowners-validator: ensures the correctness of your CODEOWNERS file."""

__version__ = "0.1.0"
