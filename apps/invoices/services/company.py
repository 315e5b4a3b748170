"""Dealer identity printed on every invoice."""

from dataclasses import asdict, dataclass

from django.conf import settings


@dataclass(frozen=True)
class CompanyInfo:
    name: str
    address: str
    city: str
    phone: str
    email: str
    kvk: str
    vat_number: str
    iban: str
    website: str

    @classmethod
    def from_settings(cls):
        """Build from ``settings.DEALER_COMPANY``."""
        return cls(**settings.DEALER_COMPANY)

    def to_dict(self):
        return asdict(self)
