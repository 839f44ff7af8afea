"""HTTP cookie grammar: parsing, Set-Cookie serialization, signed values."""
