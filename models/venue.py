"""
Venue - the event always takes place in a European capital.
"""

from enum import Enum


class Venue(str, Enum):
    """Capital city, valued by its country (upper case, for display)."""
    ROMA = "ITALIA"
    PARIGI = "FRANCIA"
    BERLINO = "GERMANIA"
    MADRID = "SPAGNA"
    LISBONA = "PORTOGALLO"
    LONDRA = "REGNO_UNITO"
    DUBLINO = "IRLANDA"
    BRUXELLES = "BELGIO"
    AMSTERDAM = "PAESI_BASSI"
    LUSSEMBURGO = "LUSSEMBURGO"
    VIENNA = "AUSTRIA"
    PRAGA = "REPUBBLICA_CECA"
    VARSAVIA = "POLONIA"
    BUDAPEST = "UNGHERIA"
    BRATISLAVA = "SLOVACCHIA"
    LJUBLJANA = "SLOVENIA"
    ZAGABRIA = "CROAZIA"
    SARAJEVO = "BOSNIA_ERZEGOVINA"
    BELGRADO = "SERBIA"
    PODGORICA = "MONTENEGRO"
    TIRANA = "ALBANIA"
    SKOPJE = "MACEDONIA_DEL_NORD"
    ATENE = "GRECIA"
    SOFIA = "BULGARIA"
    BUCAREST = "ROMANIA"
    CHISINAU = "MOLDOVA"
    KYIV = "UCRAINA"
    HELSINKI = "FINLANDIA"
    STOCCOLMA = "SVEZIA"
    OSLO = "NORVEGIA"
    COPENHAGEN = "DANIMARCA"
    REYKJAVIK = "ISLANDA"
    TALLINN = "ESTONIA"
    RIGA = "LETTONIA"
    VILNIUS = "LITUANIA"
    VALLETTA = "MALTA"
    NICOSIA = "CIPRO"
    ANKARA = "TURCHIA"
    MOSCA = "RUSSIA"
    MINSK = "BIELORUSSIA"

    @property
    def country(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "Venue":
        """Look up by capital name, case-insensitive."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown venue: {name}") from None

    def __str__(self) -> str:
        return f"{self.name} ({self.value})"
