"""Stream splitting, format sniffing and decoding."""
