"""
Pure reductions over fetched catalogs. No I/O.

    summarize_stars(stars)                      -> totals and average resonance
    average_heights_by_type(pokemon)            -> {"heights": {type: average}}
    organize_people_by_planet(people, planets)  -> planets with residents, side counts and IBF
"""
from typing import Any, Dict, Iterable, List

# The 18 known pokemon types, reported even when no record has them
POKEMON_TYPES = (
    "bug", "dark", "dragon", "electric", "fairy", "fighting",
    "fire", "flying", "ghost", "grass", "ground", "ice",
    "normal", "poison", "psychic", "rock", "steel", "water",
)

LIGHT = "light"
DARK = "dark"


def total_resonance(stars: Iterable[dict]) -> float:
    return sum(star.get("resonance") or 0 for star in stars)


def average_resonance(stars: List[dict]) -> float:
    if not stars:
        return 0
    return total_resonance(stars) / len(stars)


def summarize_stars(stars: List[dict]) -> Dict[str, Any]:
    return {
        "totalStars": len(stars),
        "totalResonance": total_resonance(stars),
        "averageResonance": average_resonance(stars),
        "data": stars,
    }


def average_heights_by_type(pokemon: Iterable[dict]) -> Dict[str, Dict[str, float]]:
    """
    Average height (native decimetres) per type, rounded to 3 decimals.

    A record with several types counts towards each of them. Types outside
    POKEMON_TYPES are ignored and types without records report 0.
    """
    sums = {t: 0 for t in POKEMON_TYPES}
    counts = {t: 0 for t in POKEMON_TYPES}
    for p in pokemon:
        height = p.get("height") or 0
        for type_name in p.get("types") or []:
            if type_name in sums:
                sums[type_name] += height
                counts[type_name] += 1
    heights = {t: round(sums[t] / counts[t], 3) if counts[t] else 0 for t in POKEMON_TYPES}
    return {"heights": heights}


def ibf(light: int, dark: int, total: int) -> float:
    """Ideological balance factor: (light - dark) / total, 0 for an empty planet."""
    if total == 0:
        return 0
    return (light - dark) / total


def side_of(person: dict):
    oracle_data = person.get("oracle_data") or {}
    return oracle_data.get("side")


def count_sides(people: Iterable[dict]) -> Dict[str, int]:
    light = dark = 0
    for person in people:
        side = side_of(person)
        if side == LIGHT:
            light += 1
        elif side == DARK:
            dark += 1
    return {"lightSideCount": light, "darkSideCount": dark}


def organize_people_by_planet(people: Iterable[dict], planets: Iterable[dict]) -> List[dict]:
    """Join people to planets on homeworld URL and score every planet."""
    planet_map: Dict[str, dict] = {}
    for planet in planets:
        planet_map[planet["url"]] = dict(planet, residents=[], lightSideCount=0, darkSideCount=0, ibf=0)

    for person in people:
        planet = planet_map.get(person.get("homeworld"))
        if planet is None:
            continue
        planet["residents"].append(person)
        side = side_of(person)
        if side == LIGHT:
            planet["lightSideCount"] += 1
        elif side == DARK:
            planet["darkSideCount"] += 1

    for planet in planet_map.values():
        planet["ibf"] = ibf(planet["lightSideCount"], planet["darkSideCount"], len(planet["residents"]))

    return list(planet_map.values())


def planets_with_residents(planets: Iterable[dict]) -> List[dict]:
    return [p for p in planets if p["residents"]]
