from __future__ import annotations

from pathlib import Path
from typing import Dict, Tuple

import pandas as pd

from ..models import Coordinate

PlaceTable = Dict[str, Coordinate]
RouteTable = Dict[Tuple[str, str], float]

# Keys are normalized place names (lowercase, no sub-address).
DEFAULT_PLACES: PlaceTable = {
    "manila": (14.5995, 120.9842),
    "quezon": (14.6760, 121.0437),
    "makati": (14.5547, 121.0244),
    "boracay": (11.9674, 121.9248),
    "cebu": (10.3157, 123.8854),
    "bohol": (9.8500, 124.1435),
    "palawan": (9.8349, 118.7384),
    "el nido": (11.1949, 119.4013),
    "coron": (12.0067, 120.2070),
    "baguio": (16.4023, 120.5960),
    "davao": (7.1907, 125.4553),
    "siargao": (9.8600, 126.0460),
    "tagaytay": (14.1088, 120.9618),
    "batangas": (13.7565, 121.0583),
    "vigan": (17.5747, 120.3869),
    "iloilo": (10.7202, 122.5621),
    "bacolod": (10.6560, 122.9500),
    "dumaguete": (9.3068, 123.3054),
    "puerto princesa": (9.7392, 118.7353),
    "banaue": (16.9265, 121.0571),
    "sagada": (17.0831, 120.9022),
    "la union": (16.6159, 120.3209),
    "subic": (14.8203, 120.2728),
    "taal volcano": (14.0021, 120.9933),
    "chocolate hills": (9.7999, 124.1658),
    "kawasan falls": (9.8132, 123.3763),
    "oslob": (9.5134, 123.3908),
    "moalboal": (9.9477, 123.3963),
    "mayon volcano": (13.2577, 123.6856),
    "hundred islands": (16.1992, 119.9327),
    "cloud 9": (9.8170, 126.0339),
    "intramuros": (14.5900, 120.9750),
    "bgc": (14.5507, 121.0494),
    "taguig": (14.5176, 121.0509),
    "caticlan": (11.9279, 121.9526),
    "white beach": (11.9608, 121.9263),
    "d'mall": (11.9642, 121.9272),
    "rizal park": (14.5832, 120.9794),
    "mactan": (10.3115, 123.9621),
    "tagbilaran": (9.6472, 123.8530),
    "panglao": (9.5833, 123.7667),
    "pagudpud": (18.5594, 120.7850),
    "camiguin": (9.1733, 124.7297),
    "batanes": (20.4486, 121.9700),
    "pangasinan": (15.8949, 120.2863),
}

# Curated road distances (km) for well-known corridors; symmetric.
DEFAULT_ROUTES: RouteTable = {
    ("boracay", "manila"): 350.0,
    ("manila", "baguio"): 250.0,
    ("manila", "cebu"): 570.0,
    ("cebu", "bohol"): 70.0,
    ("manila", "palawan"): 580.0,
    ("palawan", "coron"): 180.0,
    ("cebu", "siargao"): 250.0,
    ("manila", "tagaytay"): 60.0,
    ("manila", "batangas"): 110.0,
    ("cebu", "oslob"): 120.0,
}


def load_place_table(path: str | Path) -> PlaceTable:
    """Read a ``name,latitude,longitude`` CSV into a place table.

    Row order is preserved because fuzzy lookups scan the table in order.
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Missing place table at '{csv_path}'.")

    frame = pd.read_csv(csv_path)
    missing = {"name", "latitude", "longitude"} - set(frame.columns)
    if missing:
        raise ValueError(f"Place table '{csv_path}' lacks columns: {', '.join(sorted(missing))}.")

    frame = frame.dropna(subset=["name", "latitude", "longitude"])
    frame["name"] = frame["name"].astype(str).str.lower().str.strip()
    frame["latitude"] = frame["latitude"].astype(float)
    frame["longitude"] = frame["longitude"].astype(float)

    table: PlaceTable = {}
    for row in frame.itertuples(index=False):
        table.setdefault(row.name, (float(row.latitude), float(row.longitude)))
    return table


def load_route_table(path: str | Path) -> RouteTable:
    """Read an ``origin,destination,distance_km`` CSV into a route table."""
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Missing route table at '{csv_path}'.")

    frame = pd.read_csv(csv_path)
    missing = {"origin", "destination", "distance_km"} - set(frame.columns)
    if missing:
        raise ValueError(f"Route table '{csv_path}' lacks columns: {', '.join(sorted(missing))}.")

    frame = frame.dropna(subset=["origin", "destination", "distance_km"])
    frame["distance_km"] = pd.to_numeric(frame["distance_km"], errors="coerce")
    frame = frame.dropna(subset=["distance_km"])

    table: RouteTable = {}
    for row in frame.itertuples(index=False):
        origin = str(row.origin).lower().strip()
        destination = str(row.destination).lower().strip()
        table[(origin, destination)] = float(row.distance_km)
    return table


def load_tables(data_dir: str | Path) -> Tuple[PlaceTable, RouteTable]:
    """Load ``places.csv`` and ``routes.csv`` from a directory.

    A missing ``routes.csv`` yields the default routes, a missing
    ``places.csv`` is an error.
    """
    directory = Path(data_dir)
    places = load_place_table(directory / "places.csv")
    routes_path = directory / "routes.csv"
    routes = load_route_table(routes_path) if routes_path.exists() else dict(DEFAULT_ROUTES)
    return places, routes
