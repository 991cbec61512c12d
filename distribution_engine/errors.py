"""Motor hata sınıfları."""

from __future__ import annotations

from typing import Optional


class DistributionEngineError(Exception):
    """Tüm motor hatalarının temel sınıfı."""
    pass


class ValidationError(DistributionEngineError):
    """Girdi kaydı hatalı veya çelişkili."""

    def __init__(self, errors: list[str], subject: Optional[str] = None):
        self.errors = list(errors)
        self.subject = subject
        prefix = f"{subject}: " if subject else ""
        super().__init__(prefix + "; ".join(self.errors))


class InvalidInventoryRecordError(ValidationError):
    """Stok kaydı veri bütünlüğü ihlali."""
    pass


class InvalidHubScenarioError(ValidationError):
    """Hub senaryosu geçersiz."""
    pass


class ConfigurationError(DistributionEngineError):
    """Maliyet varsayımları veya uygunluk kriterleri eksik/bozuk."""
    pass
