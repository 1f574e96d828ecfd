"""Fixed catalog of Hungarian universities, keyed by their short code.

Loaded once at import time and exposed read-only.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

_UNIVERSITIES = {
    "ÁTE": "Állatorvostudományi Egyetem",
    "ANNYE": "Andrássy Gyula Budapesti Német Nyelvű Egyetem",
    "BCE": "Budapesti Corvinus Egyetem",
    "BGE": "Budapesti Gazdasági Egyetem",
    "METU": "Budapesti Metropolitan Egyetem",
    "BME": "Budapesti Műszaki és Gazdaságtudományi Egyetem",
    "DE": "Debreceni Egyetem",
    "DRHE": "Debreceni Református Hittudományi Egyetem",
    "DUE": "Dunaújvárosi Egyetem",
    "EDUTUS": "Edutus Egyetem",
    "ELTE": "Eötvös Loránd Tudományegyetem",
    "EKKE": "Eszterházy Károly Katolikus Egyetem",
    "EHE": "Evangélikus Hittudományi Egyetem",
    "GFE": "Gál Ferenc Egyetem",
    "KRE": "Károli Gáspár Református Egyetem",
    "KJE": "Kodolányi János Egyetem",
    "KEE": "Közép-európai Egyetem",
    "LFZE": "Liszt Ferenc Zeneművészeti Egyetem",
    "MATE": "Magyar Agrár- és Élettudományi Egyetem",
    "MKE": "Magyar Képzőművészeti Egyetem",
    "MTE": "Magyar Táncművészeti Egyetem",
    "MILTON": "Milton Friedman Egyetem",
    "ME": "Miskolci Egyetem",
    "MOME": "Moholy-Nagy Művészeti Egyetem",
    "NKE": "Nemzeti Közszolgálati Egyetem",
    "NJE": "Neumann János Egyetem",
    "NYE": "Nyíregyházi Egyetem",
    "OE": "Óbudai Egyetem",
    "OR-ZSE": "Országos Rabbiképző – Zsidó Egyetem",
    "PE": "Pannon Egyetem",
    "PPKE": "Pázmány Péter Katolikus Egyetem",
    "PTE": "Pécsi Tudományegyetem",
    "SE": "Semmelweis Egyetem",
    "SOE": "Soproni Egyetem",
    "SZE": "Széchenyi István Egyetem",
    "SZTE": "Szegedi Tudományegyetem",
    "SZFE": "Színház- és Filmművészeti Egyetem",
    "THE": "Tokaj-Hegyalja Egyetem",
}

UNIVERSITIES: Mapping[str, str] = MappingProxyType(_UNIVERSITIES)


def is_known_university(code: object) -> bool:
    return isinstance(code, str) and code in UNIVERSITIES
