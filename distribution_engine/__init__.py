"""Dağıtım karar motoru: stok durumu / yeniden stoklama ve hub ekonomisi."""

__version__ = "0.1.0"
