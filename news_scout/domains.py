# File: news_scout/domains.py
"""news_scout.domains: список доменов по умолчанию и чтение списка из файла."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Union

from news_scout.errors import InputError
from news_scout.logger import logger

__all__: Sequence[str] = ("DEFAULT_DOMAINS", "parse_domains", "load_domains")

DEFAULT_DOMAINS: tuple[str, ...] = (
    "isolanews.net",
    "istudentpro.com",
    "iandrew.org",
    "newminnesotastadium.com",
    "aivea.com",
    "citizen.xyz",
    "Kazan.com",
    "BrightPixel.com",
    "RbfHealth.org",
    "Nevale.com",
    "BusinessAssurance.com",
    "StrongBet.com",
    "AacoFarmersMarket.com",
    "Pfks.com",
    "lu10radioazul.com",
    "FlaskBb.org",
    "EcomInt.com",
    "mydroll.com",
    "DaenOtes.com",
    "HolEinTheWallCamps.org",
    "GroopIt.com",
    "Exalab.com",
    "PurAvive.com",
    "Furri.com",
    "GmacInsurance.com",
    "Ubms.com",
    "elcabildo.org",
    "OmniVector.com",
    "Tayai.com",
    "spiritualite-chretienne.com",
    "SaPata.com",
    "Inftech.com",
    "HealthClass.com",
    "Pvzk.com",
    "SovietSuPrem.com",
    "MoodPanda.com",
    "RetroTopia.com",
    "Pokies.net",
    "GardenPride.com",
    "Mabbo.com",
    "RigOra.com",
    "Origines.com",
    "VarChi.com",
    "LuxuryMag.com",
    "guideauto.com",
    "MuseoCatAcumbas.com",
    "SoarTex.net",
    "InmoNova.com",
    "NutRidenSe.com",
    "MagnetAgency.com",
    "TradesIndia.com",
    "NordicBrand.com",
)


def parse_domains(text: str) -> List[str]:
    """Возвращает непустые строки без пробелов, пропуская комментарии ``#``."""
    return [
        line.strip()
        for line in text.splitlines()
        if line.strip() and not line.strip().startswith("#")
    ]


def load_domains(path: Union[str, Path, None] = None) -> List[str]:
    """Читает список доменов из файла или возвращает встроенный список."""
    if path is None:
        return list(DEFAULT_DOMAINS)

    p = Path(path).expanduser()
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Error loading domains from %s: %s", p, exc)
        raise InputError(f"Error loading domains from {p}: {exc}") from exc

    domains = parse_domains(text)
    logger.debug("Loaded %d domains from %s", len(domains), p)
    return domains
