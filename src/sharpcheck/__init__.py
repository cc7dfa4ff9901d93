"""SharpCheck - C# analyzer for commented-out code and console output."""

__version__ = "0.1.0"
