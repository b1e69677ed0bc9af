"""Career-site adapters, registered by normalized company name."""

from __future__ import annotations

from typing import Dict, List, Type

from ..errors import UnknownCompanyError
from .accenture import AccentureSite
from .amazon import AmazonSite
from .base import CareerSite, site_key
from .capgemini import CapgeminiSite
from .cognizant import CognizantSite
from .deloitte import DeloitteSite
from .exl import EXLSite
from .ibm import IBMSite
from .marriott import MarriottSite
from .sbi import SBISite
from .schneider_electric import SchneiderElectricSite
from .syngene import SyngeneSite

SITES: Dict[str, Type[CareerSite]] = {
    cls.key(): cls
    for cls in (
        AccentureSite,
        AmazonSite,
        CapgeminiSite,
        CognizantSite,
        DeloitteSite,
        EXLSite,
        IBMSite,
        MarriottSite,
        SBISite,
        SchneiderElectricSite,
        SyngeneSite,
    )
}


def get_site(company: str) -> CareerSite:
    """Instantiate the adapter for ``company`` (case and punctuation insensitive)."""
    try:
        return SITES[site_key(company)]()
    except KeyError:
        raise UnknownCompanyError(f"No scraper available for company {company!r}") from None


def all_sites() -> List[CareerSite]:
    return [cls() for cls in SITES.values()]


__all__ = ["CareerSite", "SITES", "all_sites", "get_site", "site_key"]
