"""Example records and catalogues used to seed an empty store."""

from __future__ import annotations

from lostpet.data.schemas import GeoPoint, LostPetRecord, SightingRecord

DOG_BREEDS: dict[str, str] = {
    "golden_retriever": "Golden Retriever",
    "labrador_retriever": "Labrador Retriever",
    "siberian_husky": "Siberian Husky",
    "pomeranian": "Pomeranian",
    "thai_ridgeback": "Thai Ridgeback",
}

CAT_BREEDS: dict[str, str] = {
    "siamese": "Siamese",
    "persian": "Persian",
    "british_shorthair": "British Shorthair",
    "scottish_fold": "Scottish Fold",
    "thai_domestic": "Thai Domestic",
}

BREEDS_BY_SPECIES = {"dog": DOG_BREEDS, "cat": CAT_BREEDS}

LIFE_STAGES: dict[str, tuple[str, ...]] = {
    "dog": ("puppy", "adult"),
    "cat": ("kitten", "adult"),
}


def _lost(
    pet_id: str,
    name: str,
    species: str,
    breed: str,
    color: str,
    size: str,
    age: str,
    last_seen_at: str,
    lat: float,
    lng: float,
) -> LostPetRecord:
    return LostPetRecord(
        id=pet_id,
        name=name,
        species=species,
        breed=breed,
        color=color,
        size=size,
        age=age,
        last_seen_at=last_seen_at,
        location=GeoPoint(lat=lat, lng=lng),
    )


def seeded_lost_pets() -> list[LostPetRecord]:
    """Lost pets around central Bangkok."""
    return [
        _lost("LP001", "Milo", "dog", "golden_retriever", "gold", "large", "adult",
              "2025-09-01T10:00", 13.7563, 100.5018),
        _lost("LP002", "Luna", "dog", "labrador_retriever", "black", "large", "adult",
              "2025-09-01T20:30", 13.745, 100.534),
        _lost("LP003", "Kuma", "dog", "siberian_husky", "gray white", "large", "adult",
              "2025-08-31T22:15", 13.72, 100.515),
        _lost("LP004", "Pom", "dog", "pomeranian", "cream", "small", "adult",
              "2025-08-30T18:00", 13.818, 100.56),
        _lost("LP005", "Dang", "dog", "thai_ridgeback", "red brown", "medium", "adult",
              "2025-09-01T06:45", 13.67, 100.606),
        _lost("LP006", "Mali", "cat", "siamese", "cream brown", "medium", "adult",
              "2025-09-01T12:10", 13.735, 100.523),
        _lost("LP007", "Nin", "cat", "persian", "white", "medium", "kitten",
              "2025-09-01T08:20", 13.71, 100.485),
        _lost("LP008", "Bao", "cat", "thai_domestic", "tabby brown", "small", "adult",
              "2025-08-31T19:30", 13.79, 100.58),
    ]


def seeded_sightings() -> list[SightingRecord]:
    """Sightings reported near the seeded lost pets."""
    return [
        SightingRecord(
            id="SG101", species="dog", breed="labrador_retriever", color="black",
            notes="Running beside Lumphini Park", time="2025-09-01T21:00",
            location=GeoPoint(lat=13.742, lng=100.541),
        ),
        SightingRecord(
            id="SG102", species="dog", breed="pomeranian", color="cream",
            notes="Wearing a blue collar", time="2025-08-30T18:20",
            location=GeoPoint(lat=13.82, lng=100.565),
        ),
        SightingRecord(
            id="SG103", species="cat", breed="siamese", color="cream brown",
            notes="Crying under the bridge", time="2025-09-01T12:40",
            location=GeoPoint(lat=13.733, lng=100.525),
        ),
    ]
